"""
리밸런스 전략 데이터 타입 정의

온체인 전략 오브젝트의 필드를 Python dataclass로 정의.
모든 숫자 필드는 온체인 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple

from ..constants import BPS_DENOMINATOR, RATE_DENOMINATOR, DEFAULT_MAX_REMAIN_RATE
from ..errors import DomainError


class TickRange(NamedTuple):
    """새 포지션 범위 (lower < upper)"""
    lower: int
    upper: int


@dataclass(frozen=True)
class RebalanceThresholds:
    """포지션별 리밸런스 임계값

    - lower/upper_threshold_bps: 경계 sqrt price 대비 허용 편차 (0 ~ 10000)
    - lower/upper_direction: True면 경계를 안쪽으로 좁히고, False면 바깥쪽으로 넓힘
    - range_multiplier_bps: 새 범위의 현재 sqrt price 대비 반폭
    - max_remain_rate: 예치 후 남는 잔여 토큰 허용 비율 (ppb, 1e9 = 100%)
    """
    lower_threshold_bps: int
    upper_threshold_bps: int
    lower_direction: bool
    upper_direction: bool
    range_multiplier_bps: int
    max_remain_rate: int = DEFAULT_MAX_REMAIN_RATE

    def __post_init__(self):
        for name in ("lower_threshold_bps", "upper_threshold_bps"):
            value = getattr(self, name)
            if value < 0 or value > BPS_DENOMINATOR:
                raise DomainError(f"{name}은(는) 0 ~ {BPS_DENOMINATOR} 범위여야 합니다: {value}")
        if self.range_multiplier_bps < 0:
            raise DomainError(f"range_multiplier_bps는 음수일 수 없습니다: {self.range_multiplier_bps}")
        if self.max_remain_rate < 0 or self.max_remain_rate > RATE_DENOMINATOR:
            raise DomainError(
                f"max_remain_rate는 0 ~ {RATE_DENOMINATOR} 범위여야 합니다: {self.max_remain_rate}"
            )


@dataclass(frozen=True)
class AutoRebalanceStrategy:
    """온체인 AutoRebalance 전략 오브젝트

    last_rebalance_timestamp는 밀리초 단위입니다.
    """
    id: str
    owner: str
    description: str
    lower_sqrt_price_change_threshold_bps: int
    upper_sqrt_price_change_threshold_bps: int
    lower_sqrt_price_change_threshold_direction: bool
    upper_sqrt_price_change_threshold_direction: bool
    range_multiplier: int
    rebalance_cooldown_secs: int = 0
    rebalance_paused: bool = False
    lp_slippage_tolerance_bps: int = 0
    last_rebalance_timestamp: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AutoRebalanceStrategy":
        strategy_id = data["id"]
        if isinstance(strategy_id, dict):
            strategy_id = strategy_id.get("id", "")
        return cls(
            id=strategy_id,
            owner=data.get("owner", ""),
            description=data.get("description", ""),
            lower_sqrt_price_change_threshold_bps=int(data["lower_sqrt_price_change_threshold_bps"]),
            upper_sqrt_price_change_threshold_bps=int(data["upper_sqrt_price_change_threshold_bps"]),
            lower_sqrt_price_change_threshold_direction=_to_bool(data["lower_sqrt_price_change_threshold_direction"]),
            upper_sqrt_price_change_threshold_direction=_to_bool(data["upper_sqrt_price_change_threshold_direction"]),
            range_multiplier=int(data["range_multiplier"]),
            rebalance_cooldown_secs=int(data.get("rebalance_cooldown_secs", 0)),
            rebalance_paused=_to_bool(data.get("rebalance_paused", False)),
            lp_slippage_tolerance_bps=int(data.get("lp_slippage_tolerance_bps", 0)),
            last_rebalance_timestamp=int(data.get("last_rebalance_timestamp", 0)),
        )

    def thresholds(self, max_remain_rate: int = DEFAULT_MAX_REMAIN_RATE) -> RebalanceThresholds:
        """리밸런스 판단에 쓰이는 임계값"""
        return RebalanceThresholds(
            lower_threshold_bps=self.lower_sqrt_price_change_threshold_bps,
            upper_threshold_bps=self.upper_sqrt_price_change_threshold_bps,
            lower_direction=self.lower_sqrt_price_change_threshold_direction,
            upper_direction=self.upper_sqrt_price_change_threshold_direction,
            range_multiplier_bps=self.range_multiplier,
            max_remain_rate=max_remain_rate,
        )

    def is_rebalance_allowed(self, now_ms: int) -> bool:
        """일시정지 상태가 아니고 쿨다운이 지났는지 확인"""
        if self.rebalance_paused:
            return False
        return now_ms >= self.last_rebalance_timestamp + self.rebalance_cooldown_secs * 1000


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
