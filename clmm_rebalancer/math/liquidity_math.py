"""
Liquidity Math - 유동성 계산

집중화된 유동성(Concentrated Liquidity) 포지션에서 유동성과 토큰 수량 간의 변환.
모든 나눗셈은 내림(floor)이며, 결과가 u64를 넘으면 절삭하지 않고 실패합니다.

핵심 공식 (√P는 Q64.64):
    Δa = L × (√P_upper - √P) × 2^64 / (√P_upper × √P)   # token A
    Δb = L × (√P - √P_lower) / 2^64                       # token B
"""

import logging
from typing import Tuple

from ..constants import Q64, U64_MAX, BPS_DENOMINATOR, REFERENCE_AMOUNT_A
from ..errors import ClmmOverflowError, DomainError
from .tick_math import get_sqrt_price_at_tick
from .sqrt_price_math import sqrt_price_x64_to_price

logger = logging.getLogger(__name__)


def _check_u64(amount: int, name: str) -> int:
    if amount > U64_MAX:
        raise ClmmOverflowError(f"{name}이(가) u64 범위를 초과했습니다: {amount}")
    return amount


def calculate_amounts_by_liquidity(
    tick_lower: int,
    tick_upper: int,
    sqrt_price_x64: int,
    liquidity: int
) -> Tuple[int, int]:
    """유동성에서 토큰 수량 계산

    현재 가격과 범위, 유동성이 주어졌을 때 포지션이 보유한 토큰 수량을 계산합니다.

    Args:
        tick_lower: 하한 틱
        tick_upper: 상한 틱
        sqrt_price_x64: 현재 sqrtPriceX64
        liquidity: 유동성

    Returns:
        (amount_a, amount_b) 튜플

    Raises:
        ClmmOverflowError: 결과 수량이 u64를 초과한 경우
    """
    sqrt_price_lower = get_sqrt_price_at_tick(tick_lower)
    sqrt_price_upper = get_sqrt_price_at_tick(tick_upper)

    if sqrt_price_x64 <= sqrt_price_lower:
        # 가격이 범위 아래: token A만 보유
        amount_a = (
            liquidity * (sqrt_price_upper - sqrt_price_lower) * Q64
            // (sqrt_price_lower * sqrt_price_upper)
        )
        return _check_u64(amount_a, "amount_a"), 0

    if sqrt_price_x64 >= sqrt_price_upper:
        # 가격이 범위 위: token B만 보유
        amount_b = liquidity * (sqrt_price_upper - sqrt_price_lower) // Q64
        return 0, _check_u64(amount_b, "amount_b")

    # 가격이 범위 내: 양쪽 토큰 보유
    amount_a = (
        liquidity * (sqrt_price_upper - sqrt_price_x64) * Q64
        // (sqrt_price_upper * sqrt_price_x64)
    )
    amount_b = liquidity * (sqrt_price_x64 - sqrt_price_lower) // Q64
    return _check_u64(amount_a, "amount_a"), _check_u64(amount_b, "amount_b")


def est_liquidity_from_amount_a(
    tick_lower: int,
    tick_upper: int,
    sqrt_price_x64: int,
    amount_a: int
) -> int:
    """token A 수량에서 유동성 추정

    공식: L = Δa × √P_upper × √P / (√P_upper - √P) / 2^64

    Args:
        tick_lower: 하한 틱
        tick_upper: 상한 틱
        sqrt_price_x64: 현재 sqrtPriceX64
        amount_a: token A 수량

    Returns:
        유동성. 분자나 분모가 0이면 0

    Raises:
        DomainError: 현재 가격이 상한보다 위인 경우 (token A만으로 예치 불가)
    """
    get_sqrt_price_at_tick(tick_lower)  # 하한 틱 범위 검증
    sqrt_price_upper = get_sqrt_price_at_tick(tick_upper)

    if sqrt_price_x64 > sqrt_price_upper:
        raise DomainError(
            f"가격이 범위 위에 있어 token A로 유동성을 추정할 수 없습니다: "
            f"{sqrt_price_x64} > {sqrt_price_upper}"
        )

    numerator = amount_a * sqrt_price_upper * sqrt_price_x64
    denominator = sqrt_price_upper - sqrt_price_x64
    # 가격이 상한과 같으면 분모가 0
    if numerator == 0 or denominator == 0:
        return 0

    return numerator // denominator // Q64


def get_amount_ratio(
    tick_lower: int,
    tick_upper: int,
    sqrt_price_x64: int
) -> Tuple[float, float]:
    """현재 가격에서 범위가 요구하는 token A / token B 가치 비율

    기준 수량의 token A로 얻을 수 있는 유동성을 추정하고, 그 유동성이 요구하는
    (A, B) 수량을 token B 가치로 환산하여 비율을 구합니다.

    Returns:
        (ratio_a, ratio_b), 합은 1.0
    """
    liquidity = est_liquidity_from_amount_a(tick_lower, tick_upper, sqrt_price_x64, REFERENCE_AMOUNT_A)
    amount_a, amount_b = calculate_amounts_by_liquidity(tick_lower, tick_upper, sqrt_price_x64, liquidity)

    current_price = sqrt_price_x64_to_price(sqrt_price_x64)
    value_a = amount_a * current_price
    total_value = value_a + amount_b

    logger.debug(
        "amount ratio: liquidity=%d amounts=(%d, %d) price=%s",
        liquidity, amount_a, amount_b, current_price,
    )

    if total_value == 0:
        # 가격이 상한에 있으면 가치는 전부 token B
        return 0.0, 1.0

    return value_a / total_value, amount_b / total_value


def apply_slippage(amount: int, slippage_bps: int) -> int:
    """슬리피지 허용치를 적용한 최소 수량

    Args:
        amount: 예상 수량
        slippage_bps: 허용 슬리피지 (basis points, 0 ~ 10000)

    Returns:
        amount × (1 - slippage_bps / 10000), 내림
    """
    if slippage_bps < 0 or slippage_bps > BPS_DENOMINATOR:
        raise DomainError(f"슬리피지는 0 ~ {BPS_DENOMINATOR} bps 범위여야 합니다: {slippage_bps}")
    return amount - amount * slippage_bps // BPS_DENOMINATOR
