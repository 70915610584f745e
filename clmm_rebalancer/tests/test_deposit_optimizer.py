"""
단일 토큰 예치 최적화 테스트

고정 mark price를 돌려주는 가짜 견적 제공자로 스왑 수량 탐색을 검증합니다.
"""

import pytest

from ..zap.deposit_optimizer import (
    AddLiquidityOnlyCoinARequest,
    calculate_add_liquidity_only_coin_a,
    evaluate_swap_candidate,
    initial_swap_guess,
)
from ..zap.types import SwapQuote
from ..math.liquidity_math import apply_slippage
from ..constants import Q64, RATE_DENOMINATOR
from ..errors import DomainError, SearchExhausted

COIN_A = "0x2::sui::SUI"
COIN_B = "0xdba3::usdc::USDC"
TOTAL_A = 1_000_000_000


class FakeProvider:
    """고정 가격 견적 제공자"""

    def __init__(self, price: int):
        self.price = price
        self.mark_price_calls = []
        self.quote_calls = []

    def mark_price(self, from_coin, to_coin, reference_amount):
        self.mark_price_calls.append((from_coin, to_coin, reference_amount))
        return self.price

    def quote(self, from_coin, to_coin, amount_in):
        self.quote_calls.append((from_coin, to_coin, amount_in))
        return SwapQuote(
            from_coin=from_coin,
            to_coin=to_coin,
            amount_in=amount_in,
            amount_out=amount_in * self.price // RATE_DENOMINATOR,
        )


def _request(tick_lower=-600, tick_upper=600, sqrt_price=Q64, amount=TOTAL_A, **kwargs):
    return AddLiquidityOnlyCoinARequest(
        tick_lower=tick_lower,
        tick_upper=tick_upper,
        sqrt_price_x64=sqrt_price,
        coin_a_amount=amount,
        coin_a_type=COIN_A,
        coin_b_type=COIN_B,
        **kwargs
    )


class TestRequest:
    """요청 검증"""

    def test_negative_amount(self):
        with pytest.raises(DomainError):
            _request(amount=-1)

    def test_amount_above_u64(self):
        with pytest.raises(DomainError):
            _request(amount=2 ** 64)

    def test_invalid_remain_rate(self):
        with pytest.raises(DomainError):
            _request(max_remain_rate=RATE_DENOMINATOR + 1)


class TestEvaluateSwapCandidate:
    """evaluate_swap_candidate 테스트"""

    def test_no_swap_not_funded(self):
        """스왑하지 않으면 token B가 부족"""
        candidate = evaluate_swap_candidate(_request(), RATE_DENOMINATOR, 0)
        assert candidate.received_b == 0
        assert candidate.remaining_a == TOTAL_A
        assert candidate.required_b > 0
        assert not candidate.is_funded

    def test_swap_all_leaves_nothing(self):
        candidate = evaluate_swap_candidate(_request(), RATE_DENOMINATOR, TOTAL_A)
        assert candidate.remaining_a == 0
        assert candidate.liquidity == 0
        assert candidate.is_funded
        assert not candidate.is_within_dust

    def test_received_b_uses_mark_price(self):
        candidate = evaluate_swap_candidate(_request(), 2 * RATE_DENOMINATOR, 300)
        assert candidate.received_b == 600
        assert candidate.max_remain_b == 600 * 2_000_000 // RATE_DENOMINATOR


class TestInitialSwapGuess:

    def test_symmetric_range(self):
        assert initial_swap_guess(_request()) == pytest.approx(TOTAL_A // 2, rel=1e-3)

    def test_below_range(self):
        assert initial_swap_guess(_request(tick_lower=600, tick_upper=1200)) == 0


class TestCalculateAddLiquidityOnlyCoinA:
    """calculate_add_liquidity_only_coin_a 테스트"""

    def test_converges_at_unit_price(self):
        """가격 1, 대칭 범위: 약 절반을 스왑"""
        provider = FakeProvider(RATE_DENOMINATOR)
        plan = calculate_add_liquidity_only_coin_a(_request(), provider)

        assert 499_000_000 <= plan.swap_amount <= 500_600_000
        assert plan.liquidity > 0
        assert plan.amount_a <= plan.remaining_a
        assert plan.amount_b <= plan.received_b
        assert plan.leftover_b <= plan.received_b * 2_000_000 // RATE_DENOMINATOR
        assert plan.leftover_a <= plan.remaining_a * 2_000_000 // RATE_DENOMINATOR
        assert 1 <= plan.iterations <= 200

        assert provider.mark_price_calls == [(COIN_A, COIN_B, TOTAL_A)]
        assert provider.quote_calls == [(COIN_A, COIN_B, plan.swap_amount)]
        assert plan.swap_quote.amount_in == plan.swap_amount

    def test_converges_at_higher_price(self):
        """A 1개 = B 2개: 약 1/3을 스왑"""
        provider = FakeProvider(2 * RATE_DENOMINATOR)
        plan = calculate_add_liquidity_only_coin_a(_request(), provider)

        assert 333_000_000 <= plan.swap_amount <= 333_800_000
        assert plan.amount_b <= plan.received_b
        assert plan.leftover_b <= plan.received_b * 2_000_000 // RATE_DENOMINATOR

    def test_iteration_limit(self):
        """첫 추정이 잔여 허용치를 넘고 반복이 한 번뿐이면 실패"""
        provider = FakeProvider(2 * RATE_DENOMINATOR)
        with pytest.raises(SearchExhausted) as exc_info:
            calculate_add_liquidity_only_coin_a(_request(), provider, max_iterations=1)

        assert exc_info.value.iterations == 1
        assert exc_info.value.last_swap_amount == initial_swap_guess(_request())
        assert provider.quote_calls == []

    def test_below_range_exhausts(self):
        """가격이 범위 아래: 어떤 스왑 수량도 잔여 조건을 만족하지 못함"""
        provider = FakeProvider(RATE_DENOMINATOR)
        with pytest.raises(SearchExhausted) as exc_info:
            calculate_add_liquidity_only_coin_a(_request(tick_lower=600, tick_upper=1200), provider)

        assert exc_info.value.iterations == 1
        assert exc_info.value.last_swap_amount == 0

    def test_above_range(self):
        provider = FakeProvider(RATE_DENOMINATOR)
        with pytest.raises(DomainError):
            calculate_add_liquidity_only_coin_a(_request(tick_lower=-1200, tick_upper=-600), provider)

    def test_zero_swap_skips_quote(self):
        """스왑 수량이 0이면 최종 견적을 조회하지 않음"""
        provider = FakeProvider(RATE_DENOMINATOR)
        request = _request(tick_lower=600, tick_upper=1200, max_remain_rate=RATE_DENOMINATOR)
        plan = calculate_add_liquidity_only_coin_a(request, provider)

        assert plan.swap_amount == 0
        assert plan.swap_quote is None
        assert plan.route is None
        assert plan.amount_b == 0
        assert plan.liquidity > 0
        assert provider.quote_calls == []

    def test_zero_remain_rate_accepts_exact_fit(self):
        """잔여 허용치 0: 채택된 계획은 잔여가 정확히 0"""
        provider = FakeProvider(RATE_DENOMINATOR)
        plan = calculate_add_liquidity_only_coin_a(_request(amount=0, max_remain_rate=0), provider)

        assert plan.swap_amount == 0
        assert plan.liquidity == 0
        assert plan.leftover_a == 0
        assert plan.leftover_b == 0
        assert plan.iterations == 1
        assert provider.quote_calls == []

    def test_zero_remain_rate_exhausts_on_rounding(self):
        """잔여 허용치 0: 내림으로 1 단위라도 남으면 채택 불가"""
        provider = FakeProvider(RATE_DENOMINATOR)
        with pytest.raises(SearchExhausted):
            calculate_add_liquidity_only_coin_a(_request(max_remain_rate=0), provider)
        assert provider.quote_calls == []

    def test_scan_search(self):
        provider = FakeProvider(RATE_DENOMINATOR)
        plan = calculate_add_liquidity_only_coin_a(
            _request(), provider, search="scan", scan_points=2001
        )

        assert 499_000_000 <= plan.swap_amount <= 500_600_000
        assert plan.iterations == 2001
        assert plan.leftover_b <= plan.received_b * 2_000_000 // RATE_DENOMINATOR

    def test_scan_search_exhausted(self):
        provider = FakeProvider(RATE_DENOMINATOR)
        with pytest.raises(SearchExhausted):
            calculate_add_liquidity_only_coin_a(
                _request(tick_lower=600, tick_upper=1200), provider, search="scan", scan_points=50
            )

    def test_unknown_search(self):
        with pytest.raises(ValueError):
            calculate_add_liquidity_only_coin_a(_request(), FakeProvider(RATE_DENOMINATOR), search="ternary")

    def test_min_amounts(self):
        plan = calculate_add_liquidity_only_coin_a(_request(), FakeProvider(RATE_DENOMINATOR))
        assert plan.min_amounts(50) == (apply_slippage(plan.amount_a, 50), apply_slippage(plan.amount_b, 50))
