"""
Full Math - 128비트 오버플로우 안전 곱셈/나눗셈

두 u128 피연산자의 곱을 정확하게 (최대 256비트) 계산한 뒤 나누기/시프트를 적용합니다.
최종 결과만 u128로 변환하며, 범위를 넘으면 절삭하지 않고 예외를 발생시킵니다.
"""

from ..constants import U128_MAX
from ..errors import ClmmOverflowError, DomainError


def _check_u128(value: int, name: str) -> int:
    if value < 0 or value > U128_MAX:
        raise ClmmOverflowError(f"{name}이(가) u128 범위를 벗어났습니다: {value}")
    return value


def _check_denom(denom: int) -> int:
    _check_u128(denom, "denom")
    if denom == 0:
        raise DomainError("분모는 0일 수 없습니다")
    return denom


def full_mul(num1: int, num2: int) -> int:
    """u128 × u128 전체 곱 (최대 256비트)"""
    return _check_u128(num1, "num1") * _check_u128(num2, "num2")


def mul_div_floor(num1: int, num2: int, denom: int) -> int:
    """floor(num1 * num2 / denom)"""
    return _check_u128(full_mul(num1, num2) // _check_denom(denom), "result")


def mul_div_round(num1: int, num2: int, denom: int) -> int:
    """round(num1 * num2 / denom), 0.5는 올림"""
    denom = _check_denom(denom)
    return _check_u128((full_mul(num1, num2) + (denom >> 1)) // denom, "result")


def mul_div_ceil(num1: int, num2: int, denom: int) -> int:
    """ceil(num1 * num2 / denom)"""
    denom = _check_denom(denom)
    return _check_u128((full_mul(num1, num2) + denom - 1) // denom, "result")


def mul_shr(num1: int, num2: int, shift: int) -> int:
    """(num1 * num2) >> shift"""
    return _check_u128(full_mul(num1, num2) >> shift, "result")


def mul_shl(num1: int, num2: int, shift: int) -> int:
    """(num1 * num2) << shift"""
    return _check_u128(full_mul(num1, num2) << shift, "result")
