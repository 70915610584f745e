"""
Zap-out 계산

포지션의 유동성을 모두 제거하고, 받은 token B를 token A로 스왑했을 때
최종적으로 받게 될 token A 수량을 추정합니다.
"""

import logging

from ..math.liquidity_math import calculate_amounts_by_liquidity
from .types import QuoteProvider, ZapOutPlan

logger = logging.getLogger(__name__)


def estimate_zap_out(
    tick_lower: int,
    tick_upper: int,
    sqrt_price_x64: int,
    liquidity: int,
    coin_a_type: str,
    coin_b_type: str,
    provider: QuoteProvider
) -> ZapOutPlan:
    """포지션 제거 후 token A로 받을 수량

    Args:
        tick_lower: 포지션 하한 틱
        tick_upper: 포지션 상한 틱
        sqrt_price_x64: 현재 sqrtPriceX64
        liquidity: 제거할 유동성
        coin_a_type: token A 타입
        coin_b_type: token B 타입
        provider: 가격/스왑 견적 제공자

    Returns:
        ZapOutPlan. token B가 없으면 스왑 견적 없이 반환
    """
    amount_a, amount_b = calculate_amounts_by_liquidity(tick_lower, tick_upper, sqrt_price_x64, liquidity)

    swap_quote = None
    if amount_b > 0:
        swap_quote = provider.quote(coin_b_type, coin_a_type, amount_b)

    plan = ZapOutPlan(amount_a=amount_a, amount_b=amount_b, swap_quote=swap_quote)
    logger.debug("zap-out plan: amounts=(%d, %d) total_a=%d", amount_a, amount_b, plan.total_a)
    return plan
