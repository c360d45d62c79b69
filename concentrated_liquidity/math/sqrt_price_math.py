"""
Sqrt Price Math - sqrtPriceX96 변환

가격은 내부적으로 sqrtPriceX96 형식으로 다룹니다.
sqrtPriceX96 = ⌊sqrt(price) * 2^96⌋

제곱근은 실수 연산으로 먼저 구하고, 2^96을 곱한 뒤 한 번만 내림합니다.
미리 스케일한 정수에 정수 제곱근을 적용하면 반올림 동작이 달라집니다.

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
"""

import math

from ..constants import Q96, Q192, UINT160_MAX
from ..exceptions import DomainError
from .full_math import adjust_for_decimals, check_uint


def price_to_sqrt_price_x96(
    price: float,
    decimals0: int = 18,
    decimals1: int = 18
) -> int:
    """Human-readable 가격을 sqrtPriceX96으로 변환

    sqrtPriceX96 = ⌊sqrt(price * 10^(decimals1 - decimals0)) * 2^96⌋

    Args:
        price: 가격 (token1/token0 기준)
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        sqrtPriceX96 값 (가격 0이면 0)

    Raises:
        DomainError: 가격이 음수이거나 유한하지 않은 경우
        FixedPointOverflowError: 결과가 uint160을 넘는 경우

    Example:
        >>> price_to_sqrt_price_x96(5000)
        5602277097478614198912276234240
    """
    if not math.isfinite(price) or price < 0:
        raise DomainError(
            f"price must be non-negative and finite, got {price}", stage="sqrt_price"
        )

    adjusted_price = adjust_for_decimals(price, decimals0, decimals1, stage="sqrt_price")
    sqrt_price = math.sqrt(adjusted_price)
    sqrt_price_x96 = math.floor(sqrt_price * Q96)

    return check_uint(sqrt_price_x96, UINT160_MAX, "sqrtPriceX96", stage="sqrt_price")


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimals0: int = 18,
    decimals1: int = 18
) -> float:
    """sqrtPriceX96을 human-readable 가격으로 변환

    가격 = sqrtPriceX96^2 / 2^192 / 10^(decimals1 - decimals0)
    """
    if sqrt_price_x96 < 0:
        raise DomainError(
            f"sqrtPriceX96 must be non-negative, got {sqrt_price_x96}", stage="sqrt_price"
        )

    # 제곱은 정수로, 나눗셈은 한 번에
    price_raw = sqrt_price_x96 ** 2 / Q192
    return price_raw / 10 ** (decimals1 - decimals0)
