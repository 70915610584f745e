"""
Sqrt Price Math 테스트
"""

import pytest

from ..math.sqrt_price_math import sqrt_price_x64_to_price, price_to_sqrt_price_x64
from ..constants import Q64
from ..errors import DomainError


class TestSqrtPriceConversion:
    """sqrtPriceX64 ↔ 가격 변환"""

    def test_unit_price(self):
        assert sqrt_price_x64_to_price(Q64) == 1.0
        assert price_to_sqrt_price_x64(1.0) == Q64

    def test_square(self):
        assert sqrt_price_x64_to_price(2 * Q64) == 4.0
        assert price_to_sqrt_price_x64(4.0) == 2 * Q64

    def test_decimals(self):
        """token A 9자리, token B 6자리"""
        assert sqrt_price_x64_to_price(Q64, decimals_a=9, decimals_b=6) == pytest.approx(1000.0)
        assert price_to_sqrt_price_x64(1000.0, decimals_a=9, decimals_b=6) == pytest.approx(Q64, rel=1e-12)

    def test_round_trip(self):
        sqrt_price = price_to_sqrt_price_x64(2.5)
        assert sqrt_price_x64_to_price(sqrt_price) == pytest.approx(2.5, rel=1e-12)

    def test_invalid_price(self):
        with pytest.raises(DomainError):
            price_to_sqrt_price_x64(0)
        with pytest.raises(DomainError):
            price_to_sqrt_price_x64(-1.0)
