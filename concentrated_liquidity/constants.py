"""
집중화된 유동성 상수 정의

고정소수점 인코딩과 틱 범위에 사용되는 불변 상수들:
- Q96: sqrt price 인코딩에 사용 (2^96)
- TICK_BASE: 틱 하나당 가격 배율 (1.0001)
- FEE_TIERS / TICK_SPACINGS: 수수료 티어별 틱 간격
- UINT*_MAX: 결과값 폭 검사용 상한
"""

from typing import Dict

# Fixed-point 인코딩 상수 (Q64.96)
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# price(i) = 1.0001^i
TICK_BASE: float = 1.0001

# 수수료 티어 (hundredths of a bip)
# 500 = 0.05%, 3000 = 0.30%, 10000 = 1.00%
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# get_sqrt_ratio_at_tick(MIN_TICK), get_sqrt_ratio_at_tick(MAX_TICK)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# 결과값 폭 (sqrtPriceX96: uint160, liquidity: uint128, amount: uint256)
UINT256_MAX: int = 2 ** 256 - 1
UINT160_MAX: int = 2 ** 160 - 1
UINT128_MAX: int = 2 ** 128 - 1
