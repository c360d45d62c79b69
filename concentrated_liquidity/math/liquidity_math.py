"""
Liquidity Math - 유동성 계산

특정 가격 범위에서의 토큰 수량과 유동성 간의 변환.
모든 연산은 Q64.96 정수 영역에서 수행하며, 곱셈을 모두 끝낸 뒤 나눕니다.

References:
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
- 백서 Section 6.2.1: Concentrated Liquidity

핵심 공식:
    L = Δx * √P_a * √P_b / (√P_b - √P_a)  # token0 기준
    L = Δy / (√P_b - √P_a)                # token1 기준
    Δx = L * (√P_b - √P_a) / (√P_a * √P_b)
    Δy = L * (√P_b - √P_a)

두 토큰으로 각각 구한 L 중 작은 값을 택하면 예치 비율이 현재 풀의
비율과 같아지고, 예치가 현재 가격을 움직이지 않습니다.
"""

from typing import Tuple

from ..constants import Q96, UINT128_MAX, UINT256_MAX
from ..exceptions import DomainError
from .full_math import check_uint, div_rounding_up, mul_div, mul_div_rounding_up


def _ordered(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, stage: str) -> Tuple[int, int]:
    """두 경계를 오름차순으로 정렬하고 폭 0인 범위를 거부"""
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 < 0:
        raise DomainError(
            f"sqrt price must be non-negative, got {sqrt_ratio_a_x96}", stage=stage
        )
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise DomainError(
            f"price range has zero width (sqrt price {sqrt_ratio_a_x96} on both bounds)",
            stage=stage,
        )
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def _require_non_negative(value: int, name: str, stage: str) -> None:
    if value < 0:
        raise DomainError(f"{name} must be non-negative, got {value}", stage=stage)


# === LiquidityEstimator ===

def get_liquidity_for_amount0(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int
) -> int:
    """amount0만으로 얻을 수 있는 유동성

    공식: L = Δx * √P_a * √P_b / 2^96 / (√P_b - √P_a)

    Args:
        sqrt_ratio_a_x96: 범위 한쪽 경계 sqrtPriceX96
        sqrt_ratio_b_x96: 범위 다른 쪽 경계 sqrtPriceX96
        amount0: token0 수량 (최소 단위)

    Returns:
        유동성 (내림)

    Raises:
        DomainError: 폭 0인 범위이거나 amount0 < 0인 경우
        FixedPointOverflowError: 결과가 uint128을 넘는 경우
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96, "liquidity")
    _require_non_negative(amount0, "amount0", "liquidity")

    liquidity = (amount0 * sqrt_a * sqrt_b) // (Q96 * (sqrt_b - sqrt_a))
    return check_uint(liquidity, UINT128_MAX, "liquidity", stage="liquidity")


def get_liquidity_for_amount1(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount1: int
) -> int:
    """amount1만으로 얻을 수 있는 유동성

    공식: L = Δy * 2^96 / (√P_b - √P_a)

    Raises:
        DomainError: 폭 0인 범위이거나 amount1 < 0인 경우
        FixedPointOverflowError: 결과가 uint128을 넘는 경우
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96, "liquidity")
    _require_non_negative(amount1, "amount1", "liquidity")

    liquidity = mul_div(amount1, Q96, sqrt_b - sqrt_a)
    return check_uint(liquidity, UINT128_MAX, "liquidity", stage="liquidity")


# === LiquidityReconciler ===

def reconcile_liquidity(liquidity0: int, liquidity1: int) -> int:
    """두 유동성 후보 중 작은 값

    큰 후보는 작은 후보를 이미 포함하므로, 작은 값으로 수량을 다시 계산하면
    초과분 토큰만 줄어듭니다.
    """
    return min(liquidity0, liquidity1)


def binding_token(liquidity0: int, liquidity1: int) -> int:
    """유동성을 제한하는 토큰 (0 또는 1, 같으면 0)"""
    return 0 if liquidity0 <= liquidity1 else 1


# === AmountProjector ===

def get_amount0_for_liquidity(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> int:
    """유동성에 해당하는 token0 수량

    공식: Δx = L * 2^96 * (√P_b - √P_a) / √P_a / √P_b

    Args:
        sqrt_ratio_a_x96: 범위 한쪽 경계 sqrtPriceX96
        sqrt_ratio_b_x96: 범위 다른 쪽 경계 sqrtPriceX96
        liquidity: 유동성
        round_up: True면 올림 (예치자가 내야 할 양), False면 내림

    Returns:
        amount0 (token0 수량, 최소 단위)

    Raises:
        DomainError: 폭 0인 범위, 하한 sqrt price 0, 또는 음수 유동성
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96, "amounts")
    _require_non_negative(liquidity, "liquidity", "amounts")
    if sqrt_a == 0:
        raise DomainError("lower sqrt price must be positive for token0 amounts", stage="amounts")

    numerator1 = liquidity << 96
    numerator2 = sqrt_b - sqrt_a

    if round_up:
        amount0 = div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_b),
            sqrt_a
        )
    else:
        amount0 = mul_div(numerator1, numerator2, sqrt_a) // sqrt_b
    return check_uint(amount0, UINT256_MAX, "amount0", stage="amounts")


def get_amount1_for_liquidity(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> int:
    """유동성에 해당하는 token1 수량

    공식: Δy = L * (√P_b - √P_a) / 2^96
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96, "amounts")
    _require_non_negative(liquidity, "liquidity", "amounts")

    if round_up:
        amount1 = mul_div_rounding_up(liquidity, sqrt_b - sqrt_a, Q96)
    else:
        amount1 = mul_div(liquidity, sqrt_b - sqrt_a, Q96)
    return check_uint(amount1, UINT256_MAX, "amount1", stage="amounts")


# === 현재 가격을 포함한 범위 ===

def _check_in_range(sqrt_ratio_x96: int, sqrt_a: int, sqrt_b: int) -> None:
    if not sqrt_a <= sqrt_ratio_x96 <= sqrt_b:
        raise DomainError(
            f"current sqrt price {sqrt_ratio_x96} is outside [{sqrt_a}, {sqrt_b}]",
            stage="range",
        )


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """토큰 수량에서 민트 가능한 유동성

    token0은 [현재, 상한] 구간을, token1은 [하한, 현재] 구간을 채웁니다.
    현재 가격이 경계와 같으면 해당 쪽 구간의 폭이 0이므로 반대쪽 토큰만 사용합니다.

    Args:
        sqrt_ratio_x96: 현재 sqrtPriceX96
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        amount0: token0 수량
        amount1: token1 수량

    Returns:
        유동성 (두 후보 중 작은 값)

    Raises:
        DomainError: 현재 가격이 범위 밖이거나 범위 폭이 0인 경우
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96, "range")
    _check_in_range(sqrt_ratio_x96, sqrt_a, sqrt_b)

    if sqrt_ratio_x96 == sqrt_a:
        return get_liquidity_for_amount0(sqrt_a, sqrt_b, amount0)
    if sqrt_ratio_x96 == sqrt_b:
        return get_liquidity_for_amount1(sqrt_a, sqrt_b, amount1)

    liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_b, amount0)
    liquidity1 = get_liquidity_for_amount1(sqrt_a, sqrt_ratio_x96, amount1)
    return reconcile_liquidity(liquidity0, liquidity1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int
) -> Tuple[int, int]:
    """유동성에서 토큰 수량 계산

    Returns:
        (amount0, amount1) 튜플 (내림)

    Raises:
        DomainError: 현재 가격이 범위 밖이거나 범위 폭이 0인 경우
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96, "range")
    _check_in_range(sqrt_ratio_x96, sqrt_a, sqrt_b)

    amount0 = 0
    amount1 = 0
    if sqrt_ratio_x96 < sqrt_b:
        amount0 = get_amount0_for_liquidity(sqrt_ratio_x96, sqrt_b, liquidity)
    if sqrt_ratio_x96 > sqrt_a:
        amount1 = get_amount1_for_liquidity(sqrt_a, sqrt_ratio_x96, liquidity)

    return amount0, amount1
