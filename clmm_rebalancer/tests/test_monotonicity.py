"""
예치 탐색 공간 단조성 검증 테스트
"""

import pandas as pd
import pytest

from ..analysis.monotonicity import COLUMNS, scan_swap_amounts, check_monotonicity
from ..zap.deposit_optimizer import AddLiquidityOnlyCoinARequest
from ..constants import Q64


def _request():
    return AddLiquidityOnlyCoinARequest(
        tick_lower=-600,
        tick_upper=600,
        sqrt_price_x64=Q64,
        coin_a_amount=1_000_000_000,
        coin_a_type="A",
        coin_b_type="B",
    )


class TestScanSwapAmounts:
    """scan_swap_amounts 테스트"""

    def test_shape(self):
        df = scan_swap_amounts(_request(), 1_000_000_000, num_points=101)
        assert list(df.columns) == COLUMNS
        assert len(df) == 101
        assert df["swap_amount"].iloc[0] == 0
        assert df["swap_amount"].iloc[-1] == 1_000_000_000
        assert df["swap_amount"].is_monotonic_increasing

    def test_too_few_points(self):
        with pytest.raises(ValueError):
            scan_swap_amounts(_request(), 1_000_000_000, num_points=1)


class TestCheckMonotonicity:
    """check_monotonicity 테스트"""

    def test_symmetric_range_is_monotone(self):
        df = scan_swap_amounts(_request(), 1_000_000_000, num_points=101)
        report = check_monotonicity(df)

        assert report["funded_monotone"]
        assert report["dust_monotone"]
        assert report["bisect_safe"]
        assert report["first_funded"] in (500_000_000, 510_000_000)

    def test_detects_violation(self):
        df = pd.DataFrame({
            "swap_amount": [0, 1, 2, 3],
            "funded": [False, True, False, True],
            "within_dust": [True, True, True, False],
        })
        report = check_monotonicity(df)

        assert not report["funded_monotone"]
        assert not report["bisect_safe"]
        assert report["first_funded"] == 1
        assert report["acceptable_count"] == 1

    def test_no_funded_rows(self):
        df = pd.DataFrame({
            "swap_amount": [0, 1],
            "funded": [False, False],
            "within_dust": [True, True],
        })
        report = check_monotonicity(df)

        assert report["first_funded"] is None
        assert report["acceptable_count"] == 0
