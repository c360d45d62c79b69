"""
Concentrated Liquidity Calculator

Q64.96 정수 정밀도로 집중화된 유동성 포지션을 계산하는 라이브러리.
가격 범위와 두 토큰 예치량에서 틱, sqrtPriceX96, 유동성, 실제 예치 수량을 구합니다.
"""

__version__ = "0.1.0"

from .constants import Q96, TICK_BASE, MIN_TICK, MAX_TICK, FEE_TIERS, TICK_SPACINGS
from .exceptions import ConfigError, DomainError, FixedPointOverflowError
from .position import (
    DepositAmounts,
    LiquidityQuote,
    PriceRange,
    quote_deposit,
    quote_liquidity,
    to_smallest_unit,
)
