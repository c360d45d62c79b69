"""
Position quoting pipeline

가격 범위와 두 토큰 예치량으로부터 민트할 유동성과 실제 사용될 토큰 수량 계산.

    가격 → 틱 / sqrtPriceX96 → 토큰별 유동성 후보 → min(L) → 실제 수량

모든 값은 불변(frozen) dataclass이며 각 단계는 입력만으로 결과가 정해집니다.
"""

import logging
import math
from dataclasses import asdict, dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Optional, Tuple, Union

from .config import settings
from .exceptions import DomainError
from .math.liquidity_math import (
    binding_token,
    get_amounts_for_liquidity,
    get_liquidity_for_amount0,
    get_liquidity_for_amount1,
    reconcile_liquidity,
)
from .math.sqrt_price_math import price_to_sqrt_price_x96
from .math.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio, price_to_tick

logger = logging.getLogger(__name__)

TokenQuantity = Union[int, float, str, Decimal]


def to_smallest_unit(quantity: TokenQuantity, decimals: int) -> int:
    """Human-readable 토큰 수량을 최소 단위 정수로 변환 (소수점 이하 버림)

    float는 repr 문자열을 거쳐 Decimal로 바꾸므로 1.1 같은 값이
    1.100000000000000088...로 늘어나지 않습니다.

    Example:
        >>> to_smallest_unit("1.5", 18)
        1500000000000000000
    """
    try:
        value = Decimal(str(quantity)) if isinstance(quantity, float) else Decimal(quantity)
    except (InvalidOperation, TypeError, ValueError):
        raise DomainError(f"invalid token quantity: {quantity!r}", stage="deposit") from None

    if not value.is_finite() or value < 0:
        raise DomainError(
            f"token quantity must be non-negative and finite, got {quantity}", stage="deposit"
        )
    if decimals < 0:
        raise DomainError(f"decimals must be non-negative, got {decimals}", stage="deposit")

    with localcontext() as ctx:
        ctx.prec = max(80, value.adjusted() + decimals + 10)
        scaled = value.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


@dataclass(frozen=True)
class PriceRange:
    """현재 가격을 포함하는 가격 범위 (sqrtPriceX96)

    불변 조건: lower < upper, lower <= current <= upper
    """
    sqrt_price_x96: int
    sqrt_price_lower_x96: int
    sqrt_price_upper_x96: int
    tick: Optional[int] = None
    tick_lower: Optional[int] = None
    tick_upper: Optional[int] = None

    def __post_init__(self):
        if self.sqrt_price_lower_x96 < 0:
            raise DomainError("sqrt prices must be non-negative", stage="range")
        if self.sqrt_price_lower_x96 >= self.sqrt_price_upper_x96:
            raise DomainError(
                "lower bound sqrt price must be less than upper bound sqrt price "
                f"({self.sqrt_price_lower_x96} >= {self.sqrt_price_upper_x96})",
                stage="range",
            )
        if not self.sqrt_price_lower_x96 <= self.sqrt_price_x96 <= self.sqrt_price_upper_x96:
            raise DomainError(
                f"current sqrt price {self.sqrt_price_x96} is outside "
                f"[{self.sqrt_price_lower_x96}, {self.sqrt_price_upper_x96}]",
                stage="range",
            )

    @classmethod
    def from_prices(
        cls,
        price: float,
        price_lower: float,
        price_upper: float,
        decimals0: int = 18,
        decimals1: int = 18,
    ) -> "PriceRange":
        """Human-readable 가격 세 개로 범위 생성

        Raises:
            DomainError: 가격이 양수가 아니거나, 소수점 자릿수가 음수이거나,
                lower >= upper이거나, 현재 가격이 [lower, upper] 밖인 경우
        """
        for name, value in (("price", price), ("lower price", price_lower),
                            ("upper price", price_upper)):
            if not math.isfinite(value) or value <= 0:
                raise DomainError(f"{name} must be positive, got {value}", stage="range")
        for name, value in (("decimals0", decimals0), ("decimals1", decimals1)):
            if value < 0:
                raise DomainError(f"{name} must be non-negative, got {value}", stage="range")
        if price_lower >= price_upper:
            raise DomainError(
                "lower bound price must be less than upper bound price "
                f"({price_lower} >= {price_upper})",
                stage="range",
            )
        if not price_lower <= price <= price_upper:
            raise DomainError(
                f"current price {price} must lie within [{price_lower}, {price_upper}]",
                stage="range",
            )

        return cls(
            sqrt_price_x96=price_to_sqrt_price_x96(price, decimals0, decimals1),
            sqrt_price_lower_x96=price_to_sqrt_price_x96(price_lower, decimals0, decimals1),
            sqrt_price_upper_x96=price_to_sqrt_price_x96(price_upper, decimals0, decimals1),
            tick=price_to_tick(price, decimals0, decimals1),
            tick_lower=price_to_tick(price_lower, decimals0, decimals1),
            tick_upper=price_to_tick(price_upper, decimals0, decimals1),
        )

    @classmethod
    def from_ticks(cls, tick: int, tick_lower: int, tick_upper: int) -> "PriceRange":
        """틱 세 개로 범위 생성 (TickMath 정수 변환 사용)"""
        if tick_lower >= tick_upper:
            raise DomainError(
                f"lower tick must be less than upper tick ({tick_lower} >= {tick_upper})",
                stage="range",
            )
        return cls(
            sqrt_price_x96=get_sqrt_ratio_at_tick(tick),
            sqrt_price_lower_x96=get_sqrt_ratio_at_tick(tick_lower),
            sqrt_price_upper_x96=get_sqrt_ratio_at_tick(tick_upper),
            tick=tick,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
        )

    def ticks(self) -> Tuple[int, int, int]:
        """(tick, tick_lower, tick_upper), 없으면 sqrtPriceX96에서 계산"""
        return (
            self.tick if self.tick is not None else get_tick_at_sqrt_ratio(self.sqrt_price_x96),
            self.tick_lower if self.tick_lower is not None
            else get_tick_at_sqrt_ratio(self.sqrt_price_lower_x96),
            self.tick_upper if self.tick_upper is not None
            else get_tick_at_sqrt_ratio(self.sqrt_price_upper_x96),
        )


@dataclass(frozen=True)
class DepositAmounts:
    """예치할 토큰 수량 (최소 단위 정수)"""
    amount0: int
    amount1: int

    def __post_init__(self):
        if self.amount0 < 0 or self.amount1 < 0:
            raise DomainError(
                f"deposit amounts must be non-negative, got ({self.amount0}, {self.amount1})",
                stage="deposit",
            )

    @classmethod
    def from_decimal(
        cls,
        amount0: TokenQuantity,
        amount1: TokenQuantity,
        decimals0: int = 18,
        decimals1: int = 18,
    ) -> "DepositAmounts":
        return cls(
            amount0=to_smallest_unit(amount0, decimals0),
            amount1=to_smallest_unit(amount1, decimals1),
        )


@dataclass(frozen=True)
class LiquidityQuote:
    """파이프라인 결과

    liquidity0 / liquidity1: 토큰별 유동성 후보 (현재 가격이 경계에 있어
        해당 토큰 구간의 폭이 0이면 None)
    binding_token: 유동성을 제한한 토큰 (0 또는 1)
    amount0 / amount1: 조정된 유동성으로 역산한 실제 사용 수량
    """
    tick: int
    tick_lower: int
    tick_upper: int
    sqrt_price_x96: int
    sqrt_price_lower_x96: int
    sqrt_price_upper_x96: int
    deposit0: int
    deposit1: int
    liquidity0: Optional[int]
    liquidity1: Optional[int]
    liquidity: int
    binding_token: int
    amount0: int
    amount1: int

    @property
    def unused0(self) -> int:
        return self.deposit0 - self.amount0

    @property
    def unused1(self) -> int:
        return self.deposit1 - self.amount1

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["unused0"] = self.unused0
        data["unused1"] = self.unused1
        return data


def quote_liquidity(price_range: PriceRange, deposit: DepositAmounts) -> LiquidityQuote:
    """범위와 예치량으로 유동성과 실제 수량 계산

    token0은 [현재, 상한], token1은 [하한, 현재] 구간의 유동성을 정합니다.
    두 후보 중 작은 값으로 수량을 다시 계산하므로 반환 수량은 예치량을 넘지 않습니다.
    """
    sqrt_price = price_range.sqrt_price_x96
    sqrt_lower = price_range.sqrt_price_lower_x96
    sqrt_upper = price_range.sqrt_price_upper_x96

    liquidity0: Optional[int] = None
    liquidity1: Optional[int] = None

    if sqrt_price < sqrt_upper:
        liquidity0 = get_liquidity_for_amount0(sqrt_price, sqrt_upper, deposit.amount0)
    if sqrt_price > sqrt_lower:
        liquidity1 = get_liquidity_for_amount1(sqrt_lower, sqrt_price, deposit.amount1)

    if liquidity1 is None:
        liquidity, binding = liquidity0, 0
    elif liquidity0 is None:
        liquidity, binding = liquidity1, 1
    else:
        liquidity = reconcile_liquidity(liquidity0, liquidity1)
        binding = binding_token(liquidity0, liquidity1)

    logger.debug(
        "liquidity candidates L0=%s L1=%s -> L=%s (token%d binds)",
        liquidity0, liquidity1, liquidity, binding,
    )

    amount0, amount1 = get_amounts_for_liquidity(sqrt_price, sqrt_lower, sqrt_upper, liquidity)
    logger.debug("projected amounts amount0=%d amount1=%d", amount0, amount1)

    tick, tick_lower, tick_upper = price_range.ticks()
    return LiquidityQuote(
        tick=tick,
        tick_lower=tick_lower,
        tick_upper=tick_upper,
        sqrt_price_x96=sqrt_price,
        sqrt_price_lower_x96=sqrt_lower,
        sqrt_price_upper_x96=sqrt_upper,
        deposit0=deposit.amount0,
        deposit1=deposit.amount1,
        liquidity0=liquidity0,
        liquidity1=liquidity1,
        liquidity=liquidity,
        binding_token=binding,
        amount0=amount0,
        amount1=amount1,
    )


def quote_deposit(
    price: float,
    price_lower: float,
    price_upper: float,
    amount0: TokenQuantity,
    amount1: TokenQuantity,
    decimals0: Optional[int] = None,
    decimals1: Optional[int] = None,
) -> LiquidityQuote:
    """Human-readable 가격과 수량으로 포지션 견적

    Args:
        price: 현재 가격 (token1/token0)
        price_lower: 범위 하한 가격
        price_upper: 범위 상한 가격
        amount0: 예치할 token0 수량 (예: "1")
        amount1: 예치할 token1 수량 (예: "5000")
        decimals0: token0 소수점 자릿수 (기본: settings.TOKEN0_DECIMALS)
        decimals1: token1 소수점 자릿수 (기본: settings.TOKEN1_DECIMALS)

    Raises:
        DomainError: 가격 범위 또는 수량이 유효하지 않은 경우

    Example:
        >>> quote = quote_deposit(5000, 4545, 5500, 1, 5000)
        >>> quote.liquidity
        1517882343751509783892
    """
    if decimals0 is None:
        decimals0 = settings.TOKEN0_DECIMALS
    if decimals1 is None:
        decimals1 = settings.TOKEN1_DECIMALS

    price_range = PriceRange.from_prices(price, price_lower, price_upper, decimals0, decimals1)
    logger.debug(
        "ticks current=%d lower=%d upper=%d",
        price_range.tick, price_range.tick_lower, price_range.tick_upper,
    )

    deposit = DepositAmounts.from_decimal(amount0, amount1, decimals0, decimals1)
    return quote_liquidity(price_range, deposit)
