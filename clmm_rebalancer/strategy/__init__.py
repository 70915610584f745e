"""
Strategy layer for CLMM Rebalancer

리밸런스 여부 판단 및 새 틱 범위 계산
"""

from .types import TickRange, RebalanceThresholds, AutoRebalanceStrategy
from .auto_rebalance import get_acceptable_sqrt_price_band, get_new_tick_range, needs_rebalance
