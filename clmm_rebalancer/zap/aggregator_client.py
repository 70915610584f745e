"""
스왑 라우터 (Aggregator) API 클라이언트

find_routes 엔드포인트에서 스왑 라우트와 mark price를 조회합니다.
QuoteProvider 프로토콜 구현체입니다.
"""

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..constants import MARK_PRICE_SCALE
from ..errors import AggregatorError
from .types import RouteData, SwapQuote

logger = logging.getLogger(__name__)


class AggregatorClient:
    """스왑 라우터 API 클라이언트

    사용법:
        client = AggregatorClient()
        price = client.mark_price(coin_a, coin_b, 1_000_000_000)
        quote = client.quote(coin_a, coin_b, 500_000_000)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            base_url: find_routes 엔드포인트 URL. None이면 설정값 사용
            timeout: 요청 타임아웃 (초)
            max_retries: 최대 시도 횟수
            retry_delay: 재시도 간 기본 대기 시간 (초)
            session: 재사용할 requests.Session
        """
        self.base_url = base_url or settings.AGGREGATOR_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.max_retries = max(1, max_retries if max_retries is not None else settings.MAX_RETRIES)
        self.retry_delay = retry_delay if retry_delay is not None else settings.RETRY_DELAY
        self._session = session or requests.Session()

    def _find_routes(self, from_coin: str, to_coin: str, amount: int) -> RouteData:
        """라우트 조회

        Raises:
            AggregatorError: 네트워크 오류, 비정상 응답 코드, 라우트 없음
        """
        params = {
            "from": from_coin,
            "target": to_coin,
            "amount": str(amount),
            "byAmountIn": "true",
            "depth": settings.AGGREGATOR_DEPTH,
            "providers": settings.AGGREGATOR_PROVIDERS,
            "v": settings.AGGREGATOR_VERSION,
        }

        last_error = None
        for attempt in range(self.max_retries):
            try:
                response = self._session.get(self.base_url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return self._parse_routes(response.json())

            except requests.exceptions.Timeout:
                last_error = AggregatorError(f"요청 타임아웃 ({self.timeout}초)")
            except requests.exceptions.RequestException as e:
                last_error = AggregatorError(f"네트워크 오류: {e}")
            except ValueError as e:
                last_error = AggregatorError(f"잘못된 응답 형식: {e}")

            logger.warning(
                "find_routes failed (attempt %d/%d): %s", attempt + 1, self.max_retries, last_error
            )
            if attempt < self.max_retries - 1:
                time.sleep(self.retry_delay * (attempt + 1))

        raise last_error

    @staticmethod
    def _parse_routes(body: Dict[str, Any]) -> RouteData:
        code = body.get("code")
        if code != 200:
            raise AggregatorError(f"라우터 오류 (code={code}): {body.get('msg', '')}")

        data = body.get("data")
        if not data:
            raise AggregatorError("응답에 'data' 필드가 없습니다")

        try:
            route_data = RouteData.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise AggregatorError(f"잘못된 라우트 형식: {e!r}") from e
        if not route_data.routes:
            raise AggregatorError("사용 가능한 스왑 라우트가 없습니다")
        return route_data

    def mark_price(self, from_coin: str, to_coin: str, reference_amount: int) -> int:
        """from_coin 1 단위당 to_coin 수량 (1e9 스케일)

        mark_price = Σ amount_out × 1e9 / Σ amount_in
        """
        route_data = self._find_routes(from_coin, to_coin, reference_amount)
        amount_in = route_data.amount_in
        if amount_in == 0:
            raise AggregatorError("라우트 입력 수량 합계가 0입니다")
        return route_data.amount_out * MARK_PRICE_SCALE // amount_in

    def quote(self, from_coin: str, to_coin: str, amount_in: int) -> SwapQuote:
        """amount_in 기준 스왑 견적"""
        route_data = self._find_routes(from_coin, to_coin, amount_in)
        return SwapQuote(
            from_coin=from_coin,
            to_coin=to_coin,
            amount_in=route_data.amount_in,
            amount_out=route_data.amount_out,
            route=route_data,
        )
