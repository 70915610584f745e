"""
Math layer for CLMM Rebalancer

온체인 수준 정밀도의 수학 함수들:
- full_math: 128비트 오버플로우 안전 곱셈/나눗셈
- tick_math: Tick ↔ Sqrt Price 변환
- sqrt_price_math: sqrtPriceX64 ↔ 가격
- liquidity_math: 유동성 ↔ 토큰 수량
"""

from .full_math import (
    full_mul,
    mul_div_floor,
    mul_div_round,
    mul_div_ceil,
    mul_shr,
    mul_shl,
)
from .tick_math import (
    get_sqrt_price_at_tick,
    get_tick_at_sqrt_price,
    bound_tick,
    round_tick_to_spacing,
    is_valid_tick_range,
    tick_from_bits,
    tick_to_bits,
    tick_to_price,
    price_to_tick,
)
from .sqrt_price_math import (
    sqrt_price_x64_to_price,
    price_to_sqrt_price_x64,
)
from .liquidity_math import (
    calculate_amounts_by_liquidity,
    est_liquidity_from_amount_a,
    get_amount_ratio,
    apply_slippage,
)
