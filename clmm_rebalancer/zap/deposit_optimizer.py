"""
Single-Sided Deposit Optimizer - token A만으로 예치할 때의 스왑 수량 계산

token A 일부를 token B로 스왑한 뒤 남은 A와 받은 B를 범위에 예치할 때,
예치 후 남는 잔여 토큰(dust)이 허용 비율 이하가 되는 스왑 수량을 찾습니다.

탐색 방식:
    bisect: 단조성 가정 하의 이분 탐색 (기본값, 최대 200회)
    scan:   단조성을 보장할 수 없을 때 쓰는 등간격 선형 탐색

이분 탐색은 스왑 수량이 커질수록
- 예치 가능 여부(funded)는 False → True 로만 바뀌고
- 잔여 허용 여부(within dust)는 True → False 로만 바뀐다고 가정합니다.
이 곡선 형태에서는 성립하지만 호출마다 검증하지 않습니다.
(analysis.monotonicity 로 샘플 검증 가능)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import settings
from ..constants import (
    DEFAULT_MAX_REMAIN_RATE,
    MARK_PRICE_SCALE,
    RATE_DENOMINATOR,
    U64_MAX,
)
from ..errors import DomainError, SearchExhausted
from ..math.liquidity_math import (
    calculate_amounts_by_liquidity,
    est_liquidity_from_amount_a,
    get_amount_ratio,
)
from .types import QuoteProvider, SwapCandidate, ZapInPlan

logger = logging.getLogger(__name__)

SEARCH_BISECT = "bisect"
SEARCH_SCAN = "scan"
DEFAULT_SCAN_POINTS = 200


@dataclass(frozen=True)
class AddLiquidityOnlyCoinARequest:
    """token A만으로 유동성을 추가하는 요청

    max_remain_rate는 ppb 스케일 (1_000_000_000 = 100%)
    """
    tick_lower: int
    tick_upper: int
    sqrt_price_x64: int
    coin_a_amount: int
    coin_a_type: str
    coin_b_type: str
    max_remain_rate: int = DEFAULT_MAX_REMAIN_RATE

    def __post_init__(self):
        if self.coin_a_amount < 0 or self.coin_a_amount > U64_MAX:
            raise DomainError(f"coin_a_amount가 u64 범위를 벗어났습니다: {self.coin_a_amount}")
        if self.max_remain_rate < 0 or self.max_remain_rate > RATE_DENOMINATOR:
            raise DomainError(f"max_remain_rate가 유효 범위를 벗어났습니다: {self.max_remain_rate}")


def evaluate_swap_candidate(
    request: AddLiquidityOnlyCoinARequest,
    mark_price: int,
    swap_amount: int
) -> SwapCandidate:
    """스왑 수량 후보 하나를 평가

    swap_amount 만큼 A를 B로 바꾼 뒤 남은 A로 얻을 수 있는 유동성과
    그 유동성이 요구하는 (A, B) 수량을 계산합니다.
    """
    received_b = swap_amount * mark_price // MARK_PRICE_SCALE
    remaining_a = request.coin_a_amount - swap_amount

    liquidity = est_liquidity_from_amount_a(
        request.tick_lower, request.tick_upper, request.sqrt_price_x64, remaining_a
    )
    required_a, required_b = calculate_amounts_by_liquidity(
        request.tick_lower, request.tick_upper, request.sqrt_price_x64, liquidity
    )

    return SwapCandidate(
        swap_amount=swap_amount,
        remaining_a=remaining_a,
        received_b=received_b,
        liquidity=liquidity,
        required_a=required_a,
        required_b=required_b,
        max_remain_a=remaining_a * request.max_remain_rate // RATE_DENOMINATOR,
        max_remain_b=received_b * request.max_remain_rate // RATE_DENOMINATOR,
    )


def initial_swap_guess(request: AddLiquidityOnlyCoinARequest) -> int:
    """범위가 요구하는 token B 가치 비율만큼을 첫 스왑 수량으로 추정

    스왑한 A는 예치될 B 몫이 되므로 B 비율(ratio_b)을 곱합니다.
    온체인 구현은 A 비율을 곱하므로 같은 입력에서도 탐색 경로와
    채택되는 스왑 수량이 다를 수 있습니다 (둘 다 잔여 허용치는 만족).
    """
    _, ratio_b = get_amount_ratio(request.tick_lower, request.tick_upper, request.sqrt_price_x64)
    scaled_ratio = int(ratio_b * RATE_DENOMINATOR)
    return request.coin_a_amount * scaled_ratio // RATE_DENOMINATOR


def _bisect_swap_amount(
    request: AddLiquidityOnlyCoinARequest,
    mark_price: int,
    max_iterations: int
) -> Tuple[SwapCandidate, int]:
    low = 0
    high = request.coin_a_amount
    swap_amount = initial_swap_guess(request)
    last_swap_amount = None
    iterations = 0

    for i in range(max_iterations):
        if i > 0:
            swap_amount = (low + high) // 2
        iterations = i + 1
        last_swap_amount = swap_amount

        candidate = evaluate_swap_candidate(request, mark_price, swap_amount)
        logger.debug(
            "iteration %d: swap=%d liquidity=%d remaining=(%d, %d) required=(%d, %d)",
            iterations, swap_amount, candidate.liquidity,
            candidate.remaining_a, candidate.received_b,
            candidate.required_a, candidate.required_b,
        )

        if not candidate.is_funded:
            # B가 부족함: 더 많이 스왑해야 함
            low = swap_amount + 1
        elif not candidate.is_within_dust:
            # 쓰이지 않는 잔여가 너무 많음: 덜 스왑해야 함
            high = swap_amount - 1
        else:
            return candidate, iterations

        if low > high:
            break

    raise SearchExhausted(iterations, last_swap_amount)


def _scan_swap_amount(
    request: AddLiquidityOnlyCoinARequest,
    mark_price: int,
    num_points: int
) -> Tuple[SwapCandidate, int]:
    total = request.coin_a_amount
    steps = max(1, min(num_points, total + 1))
    best = None
    last_swap_amount = None

    for i in range(steps):
        swap_amount = total * i // (steps - 1) if steps > 1 else 0
        last_swap_amount = swap_amount
        candidate = evaluate_swap_candidate(request, mark_price, swap_amount)
        if candidate.is_acceptable and (best is None or candidate.liquidity > best.liquidity):
            best = candidate

    if best is None:
        raise SearchExhausted(steps, last_swap_amount)
    return best, steps


def calculate_add_liquidity_only_coin_a(
    request: AddLiquidityOnlyCoinARequest,
    provider: QuoteProvider,
    max_iterations: Optional[int] = None,
    search: str = SEARCH_BISECT,
    scan_points: int = DEFAULT_SCAN_POINTS
) -> ZapInPlan:
    """token A만으로 예치할 때 스왑 수량과 얻을 유동성 계산

    1. 제공자에서 A→B mark price 조회
    2. 범위의 가치 비율로 첫 스왑 수량 추정
    3. [0, coin_a_amount] 구간에서 스왑 수량 탐색
    4. 채택된 스왑 수량으로 최종 견적 조회

    Args:
        request: 예치 요청
        provider: 가격/스왑 견적 제공자
        max_iterations: 이분 탐색 최대 반복 횟수. None이면 설정값 사용
        search: "bisect" 또는 "scan"
        scan_points: scan 탐색 시 평가할 후보 수

    Returns:
        ZapInPlan (유동성, 스왑 수량, 예치 수량, 최종 견적)

    Raises:
        SearchExhausted: 한 번도 후보를 채택하지 못한 경우
        DomainError: 가격이 범위 위에 있는 경우
    """
    mark_price = provider.mark_price(request.coin_a_type, request.coin_b_type, request.coin_a_amount)
    logger.debug("mark price %s -> %s: %d", request.coin_a_type, request.coin_b_type, mark_price)

    if max_iterations is None:
        max_iterations = settings.MAX_SEARCH_ITERATIONS

    if search == SEARCH_BISECT:
        candidate, iterations = _bisect_swap_amount(request, mark_price, max_iterations)
    elif search == SEARCH_SCAN:
        candidate, iterations = _scan_swap_amount(request, mark_price, scan_points)
    else:
        raise ValueError(f"지원하지 않는 탐색 방식: {search}")

    swap_quote = None
    if candidate.swap_amount > 0:
        swap_quote = provider.quote(request.coin_a_type, request.coin_b_type, candidate.swap_amount)

    logger.info(
        "zap-in plan: swap=%d liquidity=%d leftover=(%d, %d) iterations=%d",
        candidate.swap_amount, candidate.liquidity,
        candidate.leftover_a, candidate.leftover_b, iterations,
    )

    return ZapInPlan(
        liquidity=candidate.liquidity,
        swap_amount=candidate.swap_amount,
        amount_a=candidate.required_a,
        amount_b=candidate.required_b,
        remaining_a=candidate.remaining_a,
        received_b=candidate.received_b,
        iterations=iterations,
        swap_quote=swap_quote,
    )
