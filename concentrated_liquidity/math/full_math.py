"""
Full Math - 정수 나눗셈 / 폭 검사 헬퍼

Python int는 임의 정밀도이므로 Solidity FullMath의 512비트 중간값 처리가
필요 없습니다. 곱셈을 모두 끝낸 뒤 한 번에 나누는 것만 지키면 됩니다.

References:
- Uniswap V3 Core: contracts/libraries/FullMath.sol
"""

import math
from typing import Optional

from ..exceptions import FixedPointOverflowError


def mul_div(a: int, b: int, denominator: int) -> int:
    """(a * b) // denominator 내림"""
    return (a * b) // denominator


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator 올림"""
    product = a * b
    result = product // denominator
    if product % denominator > 0:
        result += 1
    return result


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result


def check_uint(value: int, max_value: int, name: str, stage: Optional[str] = None) -> int:
    """결과값이 [0, max_value] 범위인지 확인하고 그대로 반환

    Raises:
        FixedPointOverflowError: max_value를 넘는 경우
    """
    if value > max_value:
        raise FixedPointOverflowError(
            f"{name} does not fit in {max_value.bit_length()} bits: {value}",
            stage=stage,
        )
    return value


def adjust_for_decimals(price: float, decimals0: int, decimals1: int, stage: str) -> float:
    """price × 10^(decimals1 - decimals0), 유한한 float가 아니면 오류

    Raises:
        FixedPointOverflowError: 조정된 가격이 float 범위를 넘는 경우
    """
    try:
        adjusted = price * 10 ** (decimals1 - decimals0)
    except OverflowError:
        adjusted = math.inf
    if not math.isfinite(adjusted):
        raise FixedPointOverflowError(
            f"price {price} overflows after decimal adjustment "
            f"(decimals0={decimals0}, decimals1={decimals1})",
            stage=stage,
        )
    return adjusted
