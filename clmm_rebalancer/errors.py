"""
CLMM 리밸런서 예외 정의

치명적인 오류는 모두 ClmmError를 상속합니다.
NotOutOfBand는 "리밸런스 불필요" 신호로, 오류가 아니므로 ClmmError를 상속하지 않습니다.
"""

from typing import Optional


class ClmmError(Exception):
    """CLMM 계산 오류 (치명적)"""
    pass


class DomainError(ClmmError, ValueError):
    """틱, sqrt price, 틱 간격 등이 유효 범위를 벗어난 경우"""
    pass


class ClmmOverflowError(ClmmError, OverflowError):
    """결과가 u64 / u128 범위를 초과한 경우 (절삭하지 않음)"""
    pass


class DegenerateRangeError(ClmmError):
    """클램핑/반올림 후 범위 폭이 0이거나 뒤집힌 경우"""

    def __init__(self, tick_lower: int, tick_upper: int):
        self.tick_lower = tick_lower
        self.tick_upper = tick_upper
        super().__init__(
            f"유효하지 않은 틱 범위: lower={tick_lower}, upper={tick_upper}"
        )


class SearchExhausted(ClmmError):
    """스왑 수량 탐색이 한 번도 후보를 채택하지 못하고 종료된 경우"""

    def __init__(self, iterations: int, last_swap_amount: Optional[int] = None):
        self.iterations = iterations
        self.last_swap_amount = last_swap_amount
        super().__init__(
            f"스왑 수량 탐색 실패: {iterations}회 반복 후 채택된 후보 없음 "
            f"(마지막 후보: {last_swap_amount})"
        )


class AggregatorError(ClmmError):
    """스왑 라우터 API 오류"""
    pass


class NotOutOfBand(Exception):
    """현재 가격이 허용 범위 안에 있어 리밸런스가 필요 없는 경우

    오케스트레이터는 이 신호를 "아무 작업도 하지 않음"으로 처리해야 하며
    오류로 기록하지 않습니다.
    """

    def __init__(self, current_sqrt_price: int, min_acceptable: int, max_acceptable: int):
        self.current_sqrt_price = current_sqrt_price
        self.min_acceptable = min_acceptable
        self.max_acceptable = max_acceptable
        super().__init__(
            f"가격이 허용 범위 안에 있음: {current_sqrt_price} "
            f"∈ [{min_acceptable}, {max_acceptable}]"
        )
