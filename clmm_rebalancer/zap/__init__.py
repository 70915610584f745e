"""
Zap layer for CLMM Rebalancer

단일 토큰 예치/인출 계산 및 스왑 라우터 클라이언트
"""

from .types import (
    SwapPath,
    SwapRoute,
    RouteData,
    SwapQuote,
    QuoteProvider,
    SwapCandidate,
    ZapInPlan,
    ZapOutPlan,
)
from .deposit_optimizer import (
    AddLiquidityOnlyCoinARequest,
    calculate_add_liquidity_only_coin_a,
    evaluate_swap_candidate,
    initial_swap_guess,
)
from .withdraw import estimate_zap_out
from .aggregator_client import AggregatorClient
