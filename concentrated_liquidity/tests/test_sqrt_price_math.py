"""
Sqrt Price Math 테스트

가격 → sqrtPriceX96 변환 (실수 제곱근 후 한 번 내림)을 검증합니다.
"""

import math

import numpy as np
import pytest

from ..constants import Q96
from ..exceptions import DomainError, FixedPointOverflowError
from ..math.sqrt_price_math import price_to_sqrt_price_x96, sqrt_price_x96_to_price


class TestPriceToSqrtPriceX96:
    """price_to_sqrt_price_x96 테스트"""

    def test_known_values(self):
        """실수 제곱근 × 2^96 내림 값"""
        assert price_to_sqrt_price_x96(5000) == 5602277097478614198912276234240
        assert price_to_sqrt_price_x96(4545) == 5341294542274603406682713227264
        assert price_to_sqrt_price_x96(4500) == 5314786713428871004159001755648
        assert price_to_sqrt_price_x96(5500) == 5875717789736564987741329162240

    def test_price_1(self):
        assert price_to_sqrt_price_x96(1.0) == Q96

    def test_price_0(self):
        """가격 0은 허용, 결과 0"""
        assert price_to_sqrt_price_x96(0) == 0

    def test_float_sqrt_not_integer_sqrt(self):
        """정수 제곱근(isqrt(price * 2^192))이 아닌 float 경로"""
        expected = math.floor(math.sqrt(2.0) * Q96)
        assert price_to_sqrt_price_x96(2.0) == expected

    def test_decimal_adjustment(self):
        """WETH(18)/USDC(6) 가격 3000 → sqrt(3000e-12) * 2^96"""
        expected = math.floor(math.sqrt(3000 * 10 ** -12) * Q96)
        assert price_to_sqrt_price_x96(3000, 18, 6) == expected

    def test_strictly_monotonic(self):
        """가격이 커지면 sqrtPriceX96도 반드시 커짐"""
        prices = np.geomspace(1e-9, 1e9, 800)
        values = [price_to_sqrt_price_x96(float(p)) for p in prices]
        assert all(a < b for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("price", [-1e-18, -5000.0, float("nan"), float("-inf")])
    def test_invalid_price(self, price):
        with pytest.raises(DomainError) as exc_info:
            price_to_sqrt_price_x96(price)
        assert exc_info.value.stage == "sqrt_price"

    def test_overflow_uint160(self):
        """sqrt(price) >= 2^64이면 uint160 초과"""
        with pytest.raises(FixedPointOverflowError):
            price_to_sqrt_price_x96(2.0 ** 130)

    def test_overflow_is_overflow_error(self):
        with pytest.raises(OverflowError):
            price_to_sqrt_price_x96(1e300)

    def test_decimal_adjustment_overflow(self):
        """유한한 가격이라도 10^(decimals1 - decimals0)를 곱해 inf가 되면 오류"""
        with pytest.raises(FixedPointOverflowError) as exc_info:
            price_to_sqrt_price_x96(1e300, 0, 18)
        assert exc_info.value.stage == "sqrt_price"


class TestSqrtPriceX96ToPrice:
    """sqrt_price_x96_to_price 테스트"""

    def test_q96_is_price_1(self):
        assert sqrt_price_x96_to_price(Q96) == 1.0

    def test_inverse(self):
        for price in [0.001, 1.5, 4545, 5000, 1e6]:
            sqrt_price = price_to_sqrt_price_x96(price)
            assert sqrt_price_x96_to_price(sqrt_price) == pytest.approx(price, rel=1e-12)

    def test_decimal_adjustment(self):
        sqrt_price = price_to_sqrt_price_x96(3000, 18, 6)
        assert sqrt_price_x96_to_price(sqrt_price, 18, 6) == pytest.approx(3000, rel=1e-9)

    def test_negative(self):
        with pytest.raises(DomainError):
            sqrt_price_x96_to_price(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
