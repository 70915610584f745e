"""
Sqrt Price Math - sqrtPriceX64 관련 계산

CLMM 풀의 가격은 sqrtPriceX64 형식으로 저장됩니다.
sqrtPriceX64 = sqrt(price) * 2^64
"""

import math

from ..constants import Q64
from ..errors import DomainError


def sqrt_price_x64_to_price(
    sqrt_price_x64: int,
    decimals_a: int = 0,
    decimals_b: int = 0
) -> float:
    """sqrtPriceX64를 human-readable 가격으로 변환

    가격 = (sqrtPriceX64 / 2^64)^2 × 10^(decimals_a - decimals_b)

    Args:
        sqrt_price_x64: sqrtPriceX64 값
        decimals_a: token A 소수점 자릿수
        decimals_b: token B 소수점 자릿수

    Returns:
        가격 (token B per token A). decimals가 모두 0이면 최소 단위 기준 가격
    """
    # 정밀도를 위해 단계별 계산
    sqrt_price = sqrt_price_x64 / Q64
    price_raw = sqrt_price ** 2

    decimal_adjustment = 10 ** (decimals_a - decimals_b)
    return price_raw * decimal_adjustment


def price_to_sqrt_price_x64(
    price: float,
    decimals_a: int = 0,
    decimals_b: int = 0
) -> int:
    """Human-readable 가격을 sqrtPriceX64로 변환

    sqrtPriceX64 = sqrt(price × 10^(decimals_b - decimals_a)) × 2^64
    """
    if price <= 0:
        raise DomainError("가격은 양수여야 합니다")

    adjusted_price = price * (10 ** (decimals_b - decimals_a))
    return int(math.sqrt(adjusted_price) * Q64)
