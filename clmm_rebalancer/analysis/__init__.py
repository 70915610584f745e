"""
Analysis tools for CLMM Rebalancer

예치 최적화 탐색 공간 샘플링 및 단조성 검증
"""

from .monotonicity import scan_swap_amounts, check_monotonicity
