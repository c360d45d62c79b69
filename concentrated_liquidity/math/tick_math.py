"""
Tick Math - Tick ↔ Price 변환

가격과 이산 틱 인덱스 사이의 변환, 그리고 틱과 sqrtPriceX96 사이의
정수 전용 변환 (온체인 TickMath와 동일한 결과).

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol
- 백서 Section 6.1: Ticks and Tick Spacing

핵심 공식:
    price = 1.0001^tick
    tick = ⌊log₁.₀₀₀₁(price)⌋
"""

import math

from ..constants import (
    FEE_TIERS,
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    TICK_BASE,
    TICK_SPACINGS,
    UINT256_MAX,
)
from ..exceptions import DomainError
from .full_math import adjust_for_decimals


# abs_tick의 각 비트에 대응하는 1/√1.0001^(2^k) (Q128.128)
_SQRT_RATIO_FACTORS = (
    (0x2, 0xfff97272373d413259a46990580e213a),
    (0x4, 0xfff2e50f5f656932ef12357cf3c7fdcc),
    (0x8, 0xffe5caca7e10e4e61c3624eaa0941cd0),
    (0x10, 0xffcb9843d60f6159c9db58835c926644),
    (0x20, 0xff973b41fa98c081472e6896dfb254c0),
    (0x40, 0xff2ea16466c96a3843ec78b326b52861),
    (0x80, 0xfe5dee046a99a2a811c461f1969c3053),
    (0x100, 0xfcbe86c7900a88aedcffc83b479aa3a4),
    (0x200, 0xf987a7253ac413176f2b074cf7815e54),
    (0x400, 0xf3392b0822b70005940c7a398e4b70f3),
    (0x800, 0xe7159475a2c29b7443b29c7fa6e889d9),
    (0x1000, 0xd097f3bdfd2022b8845ad8f792aa5825),
    (0x2000, 0xa9f746462d870fdf8a65dc1f90e061e5),
    (0x4000, 0x70d869a156d2a1b890bb3df62baf32f7),
    (0x8000, 0x31be135f97d08fd981231505542fcfa6),
    (0x10000, 0x9aa508b5b7a84e1c677de54f3e99bc9),
    (0x20000, 0x5d6af8dedb81196699c329225ee604),
    (0x40000, 0x2216e584f5fa1ea926041bedfe98),
    (0x80000, 0x48a170391f7dc42444e8fa2),
)

_SQRT_RATIO_ODD = 0xfffcb933bd6fad37aa2d162d1a594001

# log_√1.0001(2) (Q128.128) 및 틱 후보 오차 보정값
_LOG_SQRT10001_MULTIPLIER = 255738958999603826347141
_TICK_LOW_OFFSET = 3402992956809132418596140100660247210
_TICK_HIGH_OFFSET = 291339464771989622907027621153398088495


def _decimal_adjustment(decimals0: int, decimals1: int) -> float:
    return 10 ** (decimals1 - decimals0)


def price_to_tick(price: float, decimals0: int = 18, decimals1: int = 18) -> int:
    """가격을 틱으로 변환 (내림)

    tick = ⌊log₁.₀₀₀₁(price × 10^(decimals1 - decimals0))⌋

    반올림이 아니라 내림이어야 tick → price가 입력 가격을 넘지 않습니다.
    부동소수점 오차로 1.0001^tick이 입력보다 커지면 한 틱 내립니다.

    Args:
        price: 가격 (token1/token0, human-readable)
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        틱 인덱스

    Raises:
        DomainError: 가격이 0 이하이거나 유한하지 않은 경우
        FixedPointOverflowError: 소수점 조정 후 가격이 float 범위를 넘는 경우

    Example:
        >>> price_to_tick(5000)
        85176
    """
    if not math.isfinite(price) or price <= 0:
        raise DomainError(f"price must be positive and finite, got {price}", stage="tick")

    ratio = adjust_for_decimals(price, decimals0, decimals1, stage="tick")
    if ratio <= 0:
        raise DomainError(f"price {price} underflows after decimal adjustment", stage="tick")
    tick = math.floor(math.log(ratio) / math.log(TICK_BASE))
    if TICK_BASE ** tick > ratio:
        tick -= 1
    return tick


def tick_to_price(tick: int, decimals0: int = 18, decimals1: int = 18) -> float:
    """틱을 human-readable 가격으로 변환

    price = 1.0001^tick × 10^(decimals0 - decimals1)
    """
    return TICK_BASE ** tick / _decimal_adjustment(decimals0, decimals1)


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산

    Solidity TickMath.getSqrtRatioAtTick()과 같은 결과를 정수 연산만으로 계산.

    Args:
        tick: 틱 인덱스 (MIN_TICK ~ MAX_TICK)

    Returns:
        sqrtPriceX96 (Q64.96, 올림)

    Raises:
        DomainError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise DomainError(
            f"tick {tick} is outside [{MIN_TICK}, {MAX_TICK}]", stage="tick"
        )

    abs_tick = abs(tick)
    ratio = _SQRT_RATIO_ODD if abs_tick & 0x1 else 1 << 128
    for bit, factor in _SQRT_RATIO_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = UINT256_MAX // ratio

    # Q128.128 -> Q64.96
    return (ratio >> 32) + (1 if ratio & 0xFFFFFFFF else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """sqrtPriceX96 이하인 가장 큰 틱

    Solidity TickMath.getTickAtSqrtRatio()와 같은 결과.
    최상위 비트는 int.bit_length()로 구합니다.

    Raises:
        DomainError: sqrtPriceX96이 [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 밖인 경우
    """
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise DomainError(
            f"sqrtPriceX96 {sqrt_price_x96} is outside "
            f"[{MIN_SQRT_RATIO}, {MAX_SQRT_RATIO})",
            stage="tick",
        )

    ratio = sqrt_price_x96 << 32
    msb = ratio.bit_length() - 1

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    # 제곱을 반복하며 소수부 14비트 추출
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * _LOG_SQRT10001_MULTIPLIER

    tick_low = (log_sqrt10001 - _TICK_LOW_OFFSET) >> 128
    tick_high = (log_sqrt10001 + _TICK_HIGH_OFFSET) >> 128

    if tick_low == tick_high:
        return tick_low
    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96:
        return tick_high
    return tick_low


def round_tick_to_spacing(tick: int, tick_spacing: int) -> int:
    """틱을 가장 가까운 유효 틱(tick_spacing의 배수)으로 반올림

    정확히 중간이면 위쪽 틱을 선택합니다.
    """
    if tick_spacing <= 0:
        raise DomainError(f"tick spacing must be positive, got {tick_spacing}", stage="tick")

    lower = (tick // tick_spacing) * tick_spacing
    upper = lower + tick_spacing
    return lower if tick - lower < upper - tick else upper


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    """수수료 티어에 해당하는 틱 간격"""
    if fee_tier not in TICK_SPACINGS:
        supported = ", ".join(f"{fee} ({label})" for fee, label in FEE_TIERS.items())
        raise DomainError(
            f"unsupported fee tier: {fee_tier}, expected one of {supported}", stage="tick"
        )
    return TICK_SPACINGS[fee_tier]
