"""
Full Math 테스트

128비트 곱셈/나눗셈 함수의 반올림 방식과 오버플로우 처리를 검증합니다.
"""

import pytest

from ..math.full_math import (
    full_mul,
    mul_div_floor,
    mul_div_round,
    mul_div_ceil,
    mul_shr,
    mul_shl,
)
from ..constants import Q64, U128_MAX
from ..errors import ClmmError, ClmmOverflowError, DomainError


class TestMulDiv:
    """mul_div_* 반올림 방식 테스트"""

    def test_floor(self):
        assert mul_div_floor(10, 10, 3) == 33

    def test_ceil(self):
        assert mul_div_ceil(10, 10, 3) == 34
        assert mul_div_ceil(10, 10, 4) == 25

    def test_round_half_up(self):
        """0.5는 올림"""
        assert mul_div_round(10, 10, 8) == 13
        assert mul_div_round(10, 10, 3) == 33

    def test_full_width_product(self):
        """중간 곱이 128비트를 넘어도 정확"""
        assert full_mul(U128_MAX, U128_MAX) == U128_MAX * U128_MAX
        assert mul_div_floor(U128_MAX, U128_MAX, U128_MAX) == U128_MAX


class TestShift:
    """mul_shr, mul_shl 테스트"""

    def test_mul_shr_identity(self):
        assert mul_shr(Q64, Q64, 64) == Q64

    def test_mul_shr_truncates(self):
        assert mul_shr(3, 3, 1) == 4

    def test_mul_shl(self):
        assert mul_shl(1, 1, 10) == 1024


class TestOverflow:
    """u128 범위 검사"""

    def test_result_overflow(self):
        with pytest.raises(ClmmOverflowError):
            mul_div_floor(U128_MAX, U128_MAX, 1)

    def test_shl_overflow(self):
        with pytest.raises(ClmmOverflowError):
            mul_shl(U128_MAX, 1, 1)

    def test_operand_out_of_range(self):
        with pytest.raises(ClmmOverflowError):
            full_mul(U128_MAX + 1, 1)
        with pytest.raises(ClmmOverflowError):
            full_mul(-1, 1)

    def test_overflow_is_clmm_error(self):
        with pytest.raises(ClmmError):
            mul_shl(U128_MAX, 2, 0)


class TestDenominator:
    """분모 검증"""

    @pytest.mark.parametrize("func", [mul_div_floor, mul_div_round, mul_div_ceil])
    def test_zero_denominator(self, func):
        with pytest.raises(DomainError):
            func(1, 1, 0)

    @pytest.mark.parametrize("func", [mul_div_floor, mul_div_round, mul_div_ceil])
    def test_denominator_out_of_range(self, func):
        with pytest.raises(ClmmOverflowError):
            func(1, 1, -3)
        with pytest.raises(ClmmOverflowError):
            func(1, 1, U128_MAX + 1)
