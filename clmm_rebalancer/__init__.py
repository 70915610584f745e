"""
CLMM Auto-Rebalancer

집중화된 유동성(CLMM) 포지션의 자동 리밸런스 계산 라이브러리.
Q64.64 sqrt price 기반의 온체인 수준 정밀도로 틱 변환, 유동성 ↔ 수량 변환,
새 범위 계산, 단일 토큰 예치 스왑 수량 탐색을 제공합니다.
"""

__version__ = "0.1.0"

from .constants import MIN_TICK, MAX_TICK, MIN_SQRT_PRICE_X64, MAX_SQRT_PRICE_X64, Q64
from .errors import (
    ClmmError,
    DomainError,
    ClmmOverflowError,
    DegenerateRangeError,
    SearchExhausted,
    AggregatorError,
    NotOutOfBand,
)
