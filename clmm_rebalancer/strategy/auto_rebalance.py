"""
AutoRebalance 전략 - 새 틱 범위 계산

외부 오케스트레이터가 매 평가 주기마다 온체인 값을 새로 읽어 호출하는 순수 함수.
내부 상태가 없으며, 가격이 허용 범위 안에 있으면 NotOutOfBand를 발생시킵니다.

허용 범위:
    min = √P_lower ± √P_lower × lower_bps / 10000  (direction=True면 +)
    max = √P_upper ∓ √P_upper × upper_bps / 10000  (direction=True면 -)

새 범위:
    √P_new_lower = √P - √P × multiplier / 10000
    √P_new_upper = √P + √P × multiplier / 10000
"""

import logging
from typing import Tuple

from ..constants import BPS_DENOMINATOR, MIN_SQRT_PRICE_X64, MAX_SQRT_PRICE_X64
from ..errors import DegenerateRangeError, DomainError, NotOutOfBand
from ..math.tick_math import (
    bound_tick,
    get_sqrt_price_at_tick,
    get_tick_at_sqrt_price,
    round_tick_to_spacing,
)
from .types import RebalanceThresholds, TickRange

logger = logging.getLogger(__name__)


def get_acceptable_sqrt_price_band(
    tick_lower: int,
    tick_upper: int,
    thresholds: RebalanceThresholds
) -> Tuple[int, int]:
    """현재 포지션에서 허용되는 sqrt price 구간

    Args:
        tick_lower: 포지션 하한 틱
        tick_upper: 포지션 상한 틱
        thresholds: 리밸런스 임계값

    Returns:
        (min_acceptable, max_acceptable)
    """
    sqrt_price_lower = get_sqrt_price_at_tick(tick_lower)
    sqrt_price_upper = get_sqrt_price_at_tick(tick_upper)

    lower_change = sqrt_price_lower * thresholds.lower_threshold_bps // BPS_DENOMINATOR
    upper_change = sqrt_price_upper * thresholds.upper_threshold_bps // BPS_DENOMINATOR

    if thresholds.lower_direction:
        min_acceptable = sqrt_price_lower + lower_change
    else:
        min_acceptable = sqrt_price_lower - lower_change

    if thresholds.upper_direction:
        max_acceptable = sqrt_price_upper - upper_change
    else:
        max_acceptable = sqrt_price_upper + upper_change

    return min_acceptable, max_acceptable


def get_new_tick_range(
    current_sqrt_price: int,
    current_tick: int,
    tick_lower: int,
    tick_upper: int,
    tick_spacing: int,
    thresholds: RebalanceThresholds
) -> TickRange:
    """가격이 허용 범위를 벗어났을 때 새 틱 범위 계산

    Args:
        current_sqrt_price: 현재 sqrtPriceX64
        current_tick: 현재 틱 (로그 용도)
        tick_lower: 기존 포지션 하한 틱
        tick_upper: 기존 포지션 상한 틱
        tick_spacing: 풀의 틱 간격
        thresholds: 리밸런스 임계값

    Returns:
        TickRange(lower, upper), 둘 다 tick_spacing의 배수

    Raises:
        NotOutOfBand: 가격이 허용 범위 안에 있는 경우 (오류 아님)
        DomainError: 현재 가격이나 틱 간격이 유효하지 않은 경우
        DegenerateRangeError: 클램핑/반올림 후 lower >= upper 인 경우
    """
    logger.debug(
        "get_new_tick_range: sqrt_price=%d tick=%d position=[%d, %d] spacing=%d thresholds=%s",
        current_sqrt_price, current_tick, tick_lower, tick_upper, tick_spacing, thresholds,
    )

    if current_sqrt_price < MIN_SQRT_PRICE_X64 or current_sqrt_price > MAX_SQRT_PRICE_X64:
        raise DomainError(f"현재 sqrtPriceX64가 유효 범위를 벗어났습니다: {current_sqrt_price}")
    if tick_spacing < 1:
        raise DomainError(f"틱 간격은 1 이상이어야 합니다: {tick_spacing}")

    min_acceptable, max_acceptable = get_acceptable_sqrt_price_band(tick_lower, tick_upper, thresholds)
    logger.debug("acceptable sqrt price band: [%d, %d]", min_acceptable, max_acceptable)

    if min_acceptable <= current_sqrt_price <= max_acceptable:
        raise NotOutOfBand(current_sqrt_price, min_acceptable, max_acceptable)

    change = current_sqrt_price * thresholds.range_multiplier_bps // BPS_DENOMINATOR
    new_sqrt_price_lower = max(current_sqrt_price - change, MIN_SQRT_PRICE_X64)
    new_sqrt_price_upper = min(current_sqrt_price + change, MAX_SQRT_PRICE_X64)

    new_tick_lower = round_tick_to_spacing(
        bound_tick(get_tick_at_sqrt_price(new_sqrt_price_lower)), tick_spacing
    )
    new_tick_upper = round_tick_to_spacing(
        bound_tick(get_tick_at_sqrt_price(new_sqrt_price_upper)), tick_spacing
    )

    if new_tick_lower >= new_tick_upper:
        raise DegenerateRangeError(new_tick_lower, new_tick_upper)

    logger.debug("new tick range: [%d, %d]", new_tick_lower, new_tick_upper)
    return TickRange(new_tick_lower, new_tick_upper)


def needs_rebalance(
    current_sqrt_price: int,
    tick_lower: int,
    tick_upper: int,
    thresholds: RebalanceThresholds
) -> bool:
    """가격이 허용 범위를 벗어났는지 여부"""
    min_acceptable, max_acceptable = get_acceptable_sqrt_price_band(tick_lower, tick_upper, thresholds)
    return not (min_acceptable <= current_sqrt_price <= max_acceptable)
