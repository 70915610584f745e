"""
스왑 라우트 및 Zap 결과 데이터 타입

스왑 라우터 API가 반환하는 라우트 구조와 zap-in / zap-out 계산 결과.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Tuple

from ..math.liquidity_math import apply_slippage


@dataclass(frozen=True)
class SwapPath:
    """라우트의 한 단계 (풀 하나를 통한 스왑)"""
    id: str
    provider: str
    from_coin: str
    target: str
    direction: bool
    fee_rate: str
    lot_size: int
    amount_in: int
    amount_out: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwapPath":
        return cls(
            id=data["id"],
            provider=data.get("provider", ""),
            from_coin=data["from"],
            target=data["target"],
            direction=bool(data.get("direction", True)),
            fee_rate=str(data.get("fee_rate", "0")),
            lot_size=int(data.get("lot_size", 0)),
            amount_in=int(data["amount_in"]),
            amount_out=int(data["amount_out"]),
        )


@dataclass(frozen=True)
class SwapRoute:
    """분할 라우트 하나 (여러 풀을 거칠 수 있음)"""
    path: Tuple[SwapPath, ...]
    amount_in: int
    amount_out: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwapRoute":
        return cls(
            path=tuple(SwapPath.from_dict(p) for p in data.get("path", [])),
            amount_in=int(data["amount_in"]),
            amount_out=int(data["amount_out"]),
        )


@dataclass(frozen=True)
class RouteData:
    """스왑 라우터 응답의 data 필드"""
    routes: Tuple[SwapRoute, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteData":
        return cls(routes=tuple(SwapRoute.from_dict(r) for r in data.get("routes", [])))

    @property
    def amount_in(self) -> int:
        return sum(r.amount_in for r in self.routes)

    @property
    def amount_out(self) -> int:
        return sum(r.amount_out for r in self.routes)


@dataclass(frozen=True)
class SwapQuote:
    """가상 스왑의 견적 (한 번 받은 후 변경되지 않음)"""
    from_coin: str
    to_coin: str
    amount_in: int
    amount_out: int
    route: Optional[RouteData] = None


class QuoteProvider(Protocol):
    """가격/스왑 견적 제공자

    mark_price는 from_coin 1 단위당 to_coin 수량을 1e9 스케일로 반환합니다.
    """

    def mark_price(self, from_coin: str, to_coin: str, reference_amount: int) -> int:
        ...

    def quote(self, from_coin: str, to_coin: str, amount_in: int) -> SwapQuote:
        ...


@dataclass(frozen=True)
class SwapCandidate:
    """스왑 수량 후보 하나의 평가 결과"""
    swap_amount: int
    remaining_a: int
    received_b: int
    liquidity: int
    required_a: int
    required_b: int
    max_remain_a: int
    max_remain_b: int

    @property
    def is_funded(self) -> bool:
        """남은 잔고로 해당 유동성을 예치할 수 있는지"""
        return self.remaining_a >= self.required_a and self.received_b >= self.required_b

    @property
    def leftover_a(self) -> int:
        return self.remaining_a - self.required_a

    @property
    def leftover_b(self) -> int:
        return self.received_b - self.required_b

    @property
    def is_within_dust(self) -> bool:
        """잔여 토큰이 허용 비율 이하인지 (is_funded일 때만 의미 있음)"""
        return self.leftover_a <= self.max_remain_a and self.leftover_b <= self.max_remain_b

    @property
    def is_acceptable(self) -> bool:
        return self.is_funded and self.is_within_dust


@dataclass(frozen=True)
class ZapInPlan:
    """token A만으로 예치할 때의 스왑/예치 계획"""
    liquidity: int
    swap_amount: int
    amount_a: int
    amount_b: int
    remaining_a: int
    received_b: int
    iterations: int
    swap_quote: Optional[SwapQuote] = None

    @property
    def leftover_a(self) -> int:
        return self.remaining_a - self.amount_a

    @property
    def leftover_b(self) -> int:
        return self.received_b - self.amount_b

    @property
    def route(self) -> Optional[RouteData]:
        return self.swap_quote.route if self.swap_quote is not None else None

    def min_amounts(self, slippage_bps: int) -> Tuple[int, int]:
        """슬리피지를 반영한 최소 예치 수량 (amount_a, amount_b)"""
        return apply_slippage(self.amount_a, slippage_bps), apply_slippage(self.amount_b, slippage_bps)


@dataclass(frozen=True)
class ZapOutPlan:
    """포지션을 제거하고 token A로 모두 받을 때의 계획"""
    amount_a: int
    amount_b: int
    swap_quote: Optional[SwapQuote] = None

    @property
    def total_a(self) -> int:
        swapped = self.swap_quote.amount_out if self.swap_quote is not None else 0
        return self.amount_a + swapped
