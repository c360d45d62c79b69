"""
예외 정의

모든 실패는 입력 검증 실패입니다. 재시도할 일시적 오류는 없으며,
예외는 문제가 발생한 연산에서 바로 발생해 호출자까지 그대로 전파됩니다.
"""

from typing import Optional


class DomainError(ValueError):
    """입력이 연산의 정의역을 벗어난 경우

    - 0 이하(또는 유한하지 않은) 가격
    - 폭이 0인 가격 범위 (lower == upper)
    - 범위 밖의 현재 가격
    - 음수 토큰 수량 / 유동성
    - TickMath 범위를 벗어난 틱 또는 sqrt ratio

    Attributes:
        stage: 실패한 파이프라인 단계 ("tick", "sqrt_price", "range",
            "liquidity", "amounts", "deposit")
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class FixedPointOverflowError(OverflowError):
    """결과값이 선언된 정수 폭을 넘는 경우

    중간 곱셈은 Python 임의 정밀도 정수로 계산하므로 넘치지 않습니다.
    sqrtPriceX96(uint160), liquidity(uint128), amount(uint256) 결과만 검사합니다.
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class ConfigError(ValueError):
    """설정 값 또는 포지션 설정 파일이 잘못된 경우"""
