"""
CLMM 상수 정의

온체인 컨트랙트와 비트 단위로 일치해야 하는 상수들:
- Q64: 토큰 수량 변환에 사용되는 sqrt price 스케일 (2^64)
- TICK_BOUND: 유효 틱 범위 (±443636)
- MIN/MAX_SQRT_PRICE_X64: 유효 sqrt price 범위 (Q64.64)
"""

# Fixed-point 인코딩 상수
Q64: int = 2 ** 64

# 틱 범위 상수
TICK_BOUND: int = 443636
MIN_TICK: int = -TICK_BOUND
MAX_TICK: int = TICK_BOUND

# sqrt price 범위 (Q64.64)
MIN_SQRT_PRICE_X64: int = 4295048016
MAX_SQRT_PRICE_X64: int = 79226673515401279992447579055

# 정수 타입 최대값
U32_MAX: int = 2 ** 32 - 1
U64_MAX: int = 2 ** 64 - 1
U128_MAX: int = 2 ** 128 - 1

# basis points (10000 = 100%)
BPS_DENOMINATOR: int = 10_000

# parts per billion (1_000_000_000 = 100%), dust 비율과 mark price 스케일
RATE_DENOMINATOR: int = 1_000_000_000
MARK_PRICE_SCALE: int = 1_000_000_000

# 잔여 토큰 허용 비율 기본값 (0.2%)
DEFAULT_MAX_REMAIN_RATE: int = 2_000_000

# 스왑 수량 탐색 최대 반복 횟수
MAX_SEARCH_ITERATIONS: int = 200

# 가치 비율 추정에 사용하는 기준 token A 수량
REFERENCE_AMOUNT_A: int = 100_000_000
