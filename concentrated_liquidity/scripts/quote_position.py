#!/usr/bin/env python3
"""
Quote Position - 가격 범위와 예치량으로 유동성 견적

Usage:
    # 현재가 5000, 범위 4545~5500, 1 ETH + 5000 USDC
    python -m concentrated_liquidity.scripts.quote_position \\
        --price 5000 --lower 4545 --upper 5500 --amount0 1 --amount1 5000

    # YAML 파일에서 읽기 (명령행 인자가 우선)
    python -m concentrated_liquidity.scripts.quote_position --config position.yaml

    # JSON 출력
    python -m concentrated_liquidity.scripts.quote_position --config position.yaml --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from concentrated_liquidity.config import settings
from concentrated_liquidity.exceptions import ConfigError, DomainError, FixedPointOverflowError
from concentrated_liquidity.position import LiquidityQuote, quote_deposit

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("price", "lower", "upper", "amount0", "amount1")
OPTIONAL_KEYS = ("decimals0", "decimals1")


def load_position_config(path: Path) -> Dict[str, Any]:
    """YAML 포지션 파일 로드

    Raises:
        ConfigError: 파일을 읽을 수 없거나 매핑이 아니거나 모르는 키가 있는 경우
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read position file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"position file {path} must contain a mapping")

    unknown = sorted(set(data) - set(REQUIRED_KEYS) - set(OPTIONAL_KEYS))
    if unknown:
        raise ConfigError(f"unknown keys in {path}: {unknown}")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Quote liquidity and exact token amounts for a concentrated-liquidity position",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m concentrated_liquidity.scripts.quote_position --price 5000 --lower 4545 --upper 5500 --amount0 1 --amount1 5000
  python -m concentrated_liquidity.scripts.quote_position --config position.yaml --json
        """
    )

    # 가격 범위
    parser.add_argument("--price", type=float, help="Current price (token1 per token0)")
    parser.add_argument("--lower", type=float, help="Lower bound price")
    parser.add_argument("--upper", type=float, help="Upper bound price")

    # 예치량 (문자열 그대로 Decimal로 스케일)
    parser.add_argument("--amount0", type=str, help="token0 amount to deposit, in whole tokens")
    parser.add_argument("--amount1", type=str, help="token1 amount to deposit, in whole tokens")
    parser.add_argument("--decimals0", type=int, default=None,
                        help=f"token0 decimals (default: {settings.TOKEN0_DECIMALS})")
    parser.add_argument("--decimals1", type=int, default=None,
                        help=f"token1 decimals (default: {settings.TOKEN1_DECIMALS})")

    parser.add_argument("--config", type=Path, help="YAML file with any of the keys above")
    parser.add_argument("--json", action="store_true", help="Print the quote as JSON")
    return parser


def resolve_inputs(args: argparse.Namespace) -> Dict[str, Any]:
    """YAML 값 위에 명령행 인자를 덮어써 입력 확정"""
    values: Dict[str, Any] = load_position_config(args.config) if args.config else {}
    for key in REQUIRED_KEYS + OPTIONAL_KEYS:
        arg_value = getattr(args, key)
        if arg_value is not None:
            values[key] = arg_value

    missing = [key for key in REQUIRED_KEYS if values.get(key) is None]
    if missing:
        raise ConfigError(f"missing required inputs: {', '.join(missing)}")

    for key, cast in (("price", float), ("lower", float), ("upper", float),
                      ("decimals0", int), ("decimals1", int)):
        if values.get(key) is None:
            continue
        try:
            values[key] = cast(values[key])
        except (TypeError, ValueError):
            raise ConfigError(f"{key} must be a number, got {values[key]!r}") from None

    logger.debug("resolved inputs: %s", values)
    return values


def print_quote(quote: LiquidityQuote) -> None:
    print("=" * 60)
    print("Concentrated liquidity quote")
    print("-" * 60)
    print(f"  Ticks (current / lower / upper): "
          f"{quote.tick} / {quote.tick_lower} / {quote.tick_upper}")
    print(f"  sqrtPriceX96 current: {quote.sqrt_price_x96}")
    print(f"  sqrtPriceX96 lower:   {quote.sqrt_price_lower_x96}")
    print(f"  sqrtPriceX96 upper:   {quote.sqrt_price_upper_x96}")
    print("-" * 60)
    print(f"  L from token0: {quote.liquidity0 if quote.liquidity0 is not None else '-'}")
    print(f"  L from token1: {quote.liquidity1 if quote.liquidity1 is not None else '-'}")
    print(f"  Liquidity:     {quote.liquidity} (token{quote.binding_token} binds)")
    print("-" * 60)
    print(f"  amount0: {quote.amount0} (unused {quote.unused0})")
    print(f"  amount1: {quote.amount1} (unused {quote.unused1})")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    try:
        values = resolve_inputs(args)
        quote = quote_deposit(
            price=values["price"],
            price_lower=values["lower"],
            price_upper=values["upper"],
            amount0=values["amount0"],
            amount1=values["amount1"],
            decimals0=values.get("decimals0"),
            decimals1=values.get("decimals1"),
        )
    except (DomainError, FixedPointOverflowError) as e:
        stage = f"[{e.stage}] " if e.stage else ""
        print(f"❌ {stage}{e}")
        return 1
    except ConfigError as e:
        print(f"❌ [config] {e}")
        return 1

    if args.json:
        print(json.dumps(quote.to_dict(), indent=2))
    else:
        print_quote(quote)
    return 0


if __name__ == "__main__":
    sys.exit(main())
