"""
Math layer for concentrated liquidity

Q64.96 정수 정밀도의 수학 함수들:
- tick_math: Tick ↔ Price 변환
- sqrt_price_math: Price ↔ sqrtPriceX96 변환
- liquidity_math: 유동성 추정, 조정(min), 수량 역산
- full_math: 정수 나눗셈 / 폭 검사 헬퍼
"""

from .tick_math import (
    get_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    get_tick_spacing_for_fee,
    tick_to_price,
    price_to_tick,
    round_tick_to_spacing,
)
from .sqrt_price_math import (
    sqrt_price_x96_to_price,
    price_to_sqrt_price_x96,
)
from .liquidity_math import (
    binding_token,
    get_amount0_for_liquidity,
    get_amount1_for_liquidity,
    get_amounts_for_liquidity,
    get_liquidity_for_amount0,
    get_liquidity_for_amount1,
    get_liquidity_for_amounts,
    reconcile_liquidity,
)
