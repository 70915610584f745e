"""
Tick Math - Tick ↔ Sqrt Price 변환

CLMM 컨트랙트의 틱 수학 함수들. 온체인 컨트랙트와 동일한 정밀도로 구현.
sqrt price는 Q64.64 고정소수점 형식입니다.

핵심 공식:
    price = 1.0001^tick
    tick = log₁.₀₀₀₁(price)
    sqrtPriceX64 = sqrt(price) * 2^64

양수 틱은 96비트 스케일 상수표로 계산한 뒤 32비트 시프트로 Q64.64에 맞추고,
음수 틱은 64비트 스케일 상수표를 그대로 사용합니다.
"""

import math
from typing import Tuple

from ..constants import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_PRICE_X64,
    MAX_SQRT_PRICE_X64,
    U32_MAX,
)
from ..errors import DomainError
from .full_math import mul_shr


# sqrt(1.0001^(2^bit)) × 2^96, bit = 0..18
POSITIVE_TICK_FACTORS: Tuple[int, ...] = (
    79232123823359799118286999567,
    79236085330515764027303304731,
    79244008939048815603706035061,
    79259858533276714757314932305,
    79291567232598584799939703904,
    79355022692464371645785046466,
    79482085999252804386437311141,
    79736823300114093921829183326,
    80248749790819932309965073892,
    81282483887344747381513967011,
    83390072131320151908154831281,
    87770609709833776024991924138,
    97234110755111693312479820773,
    119332217159966728226237229890,
    179736315981702064433883588727,
    407748233172238350107850275304,
    2098478828474011932436660412517,
    55581415166113811149459800483533,
    38992368544603139932233054999993551,
)

# sqrt(1.0001^-(2^bit)) × 2^64, bit = 0..18
NEGATIVE_TICK_FACTORS: Tuple[int, ...] = (
    18445821805675392311,
    18444899583751176498,
    18443055278223354162,
    18439367220385604838,
    18431993317065449817,
    18417254355718160513,
    18387811781193591352,
    18329067761203520168,
    18212142134806087854,
    17980523815641551639,
    17526086738831147013,
    16651378430235024244,
    15030750278693429944,
    12247334978882834399,
    8131365268884726200,
    3584323654723342297,
    696457651847595233,
    26294789957452057,
    37481735321082,
)

POSITIVE_LADDER_SHIFT: int = 96
POSITIVE_LADDER_POST_SHIFT: int = 32
NEGATIVE_LADDER_SHIFT: int = 64
NEGATIVE_LADDER_POST_SHIFT: int = 0

# log₂(√1.0001)의 역수 근사값 및 틱 후보 오차 한계 (Q64)
LOG_SQRT_10001_FACTOR: int = 59543866431366
TICK_LOW_ERROR: int = 184467440737095516
TICK_HIGH_ERROR: int = 15793534762490258745
LOG_REFINEMENT_START_BIT: int = 31
LOG_REFINEMENT_END_BIT: int = 18


def _sqrt_price_ladder(abs_tick: int, factors: Tuple[int, ...], shift: int, post_shift: int) -> int:
    """abs_tick의 각 비트에 대해 해당 상수를 곱하는 비트 사다리

    1 << shift 에서 시작하므로 bit 0 상수를 곱하는 것은 초기값을 그 상수로 두는 것과 같습니다.
    """
    ratio = 1 << shift
    for bit, factor in enumerate(factors):
        if abs_tick & (1 << bit):
            ratio = mul_shr(ratio, factor, shift)
    return ratio >> post_shift


def get_sqrt_price_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX64 계산

    온체인 tick_math::get_sqrt_price_at_tick()과 동일한 구현.
    온체인 수준의 정밀도를 위해 정수 연산만 사용.

    Args:
        tick: 틱 인덱스 (-443636 ~ 443636)

    Returns:
        sqrtPriceX64 (Q64.64 형식)

    Raises:
        DomainError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise DomainError(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    if tick < 0:
        return _sqrt_price_ladder(
            -tick, NEGATIVE_TICK_FACTORS, NEGATIVE_LADDER_SHIFT, NEGATIVE_LADDER_POST_SHIFT
        )
    return _sqrt_price_ladder(
        tick, POSITIVE_TICK_FACTORS, POSITIVE_LADDER_SHIFT, POSITIVE_LADDER_POST_SHIFT
    )


def get_tick_at_sqrt_price(sqrt_price_x64: int) -> int:
    """sqrtPriceX64에서 틱 계산

    get_sqrt_price_at_tick(tick) <= sqrt_price_x64 를 만족하는 가장 큰 틱을 반환합니다.

    Args:
        sqrt_price_x64: sqrtPriceX64 (Q64.64 형식)

    Returns:
        틱 인덱스

    Raises:
        DomainError: sqrtPriceX64가 유효 범위를 벗어난 경우
    """
    if sqrt_price_x64 < MIN_SQRT_PRICE_X64 or sqrt_price_x64 > MAX_SQRT_PRICE_X64:
        raise DomainError(
            f"sqrtPriceX64가 유효 범위를 벗어났습니다: {sqrt_price_x64} "
            f"(범위: {MIN_SQRT_PRICE_X64} ~ {MAX_SQRT_PRICE_X64})"
        )

    # 최상위 비트 = 정수 log2
    msb = sqrt_price_x64.bit_length() - 1
    log_2_x32 = (msb - 64) << 32

    # [2^63, 2^64) 구간으로 정규화
    if msb >= 64:
        r = sqrt_price_x64 >> (msb - 63)
    else:
        r = sqrt_price_x64 << (63 - msb)

    # 제곱을 반복하며 log2의 소수 비트 추출
    for shift in range(LOG_REFINEMENT_START_BIT, LOG_REFINEMENT_END_BIT - 1, -1):
        r = (r * r) >> 63
        f = r >> 64
        log_2_x32 |= f << shift
        r >>= f

    log_sqrt_10001 = log_2_x32 * LOG_SQRT_10001_FACTOR

    tick_low = (log_sqrt_10001 - TICK_LOW_ERROR) >> 64
    tick_high = (log_sqrt_10001 + TICK_HIGH_ERROR) >> 64

    if tick_low == tick_high:
        return tick_low

    # 근사 오차는 최대 1틱이므로 정방향 변환으로 확인
    if get_sqrt_price_at_tick(tick_high) <= sqrt_price_x64:
        return tick_high
    return tick_low


def bound_tick(tick: int) -> int:
    """틱을 표현 가능한 범위로 포화(saturate)"""
    return max(MIN_TICK, min(MAX_TICK, tick))


def round_tick_to_spacing(tick: int, tick_spacing: int) -> int:
    """틱을 틱 간격의 배수로 0 방향 절삭

    양수 틱은 아래로, 음수 틱은 위(0 방향)로 이동합니다.
    리밸런스 범위가 간격 경계의 어느 쪽에 놓이는지가 이 비대칭으로 결정됩니다.

    Args:
        tick: 반올림할 틱
        tick_spacing: 틱 간격 (1 이상)

    Returns:
        틱 간격의 배수

    Example:
        >>> round_tick_to_spacing(65, 60)
        60
        >>> round_tick_to_spacing(-65, 60)
        -60
    """
    if tick_spacing < 1:
        raise DomainError(f"틱 간격은 1 이상이어야 합니다: {tick_spacing}")

    rem = abs(tick) % tick_spacing
    if tick < 0:
        return tick + rem
    return tick - rem


def is_valid_tick_range(tick_lower: int, tick_upper: int, tick_spacing: int) -> bool:
    """lower < upper, 범위 내, 간격의 배수인지 확인"""
    if tick_spacing < 1:
        return False
    return (
        MIN_TICK <= tick_lower < tick_upper <= MAX_TICK
        and tick_lower % tick_spacing == 0
        and tick_upper % tick_spacing == 0
    )


def tick_from_bits(bits: int) -> int:
    """온체인 I32 (u32 2의 보수 표현)을 틱으로 변환

    Example:
        >>> tick_from_bits(4294967236)
        -60
    """
    if bits < 0 or bits > U32_MAX:
        raise DomainError(f"u32 범위를 벗어난 값: {bits}")
    if bits >= 2 ** 31:
        return bits - 2 ** 32
    return bits


def tick_to_bits(tick: int) -> int:
    """틱을 온체인 I32 (u32 2의 보수 표현)으로 변환"""
    if tick < -(2 ** 31) or tick >= 2 ** 31:
        raise DomainError(f"i32 범위를 벗어난 틱: {tick}")
    return tick & U32_MAX


def tick_to_price(tick: int, decimals_a: int = 9, decimals_b: int = 9) -> float:
    """틱을 human-readable 가격으로 변환

    price = 1.0001^tick × 10^(decimals_a - decimals_b)

    Args:
        tick: 틱 인덱스
        decimals_a: token A 소수점 자릿수
        decimals_b: token B 소수점 자릿수

    Returns:
        가격 (token B per token A)
    """
    ratio = 1.0001 ** tick
    return ratio * (10 ** (decimals_a - decimals_b))


def price_to_tick(price: float, decimals_a: int = 9, decimals_b: int = 9) -> int:
    """Human-readable 가격을 틱으로 변환 (0 방향 절삭)

    tick = log₁.₀₀₀₁(price × 10^(decimals_b - decimals_a))
    """
    if price <= 0:
        raise DomainError("가격은 양수여야 합니다")

    ratio = price * (10 ** (decimals_b - decimals_a))
    tick = math.log(ratio) / math.log(1.0001)
    return int(tick)
