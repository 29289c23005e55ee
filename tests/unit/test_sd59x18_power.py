"""
Тесты для степеней и корней SD59x18

Проверяет:
1. sqrt: округление вниз, границы входа
2. gm: геометрическое среднее, знаки операндов
3. powu: возведение в целую степень, 0^0 и знак результата
4. pow_: fixed-point степень и соглашения для нулевого основания
"""

import math

import pytest

from src.core.math.errors import DomainError, FixedPointOverflowError
from src.core.math.sd59x18 import (
    E,
    MAX_VALUE,
    MIN_VALUE,
    SCALE,
    SQRT_MAX_INPUT,
    gm,
    mul,
    pow_,
    powu,
    sqrt,
)

# =============================================================================
# ТЕСТЫ SQRT
# =============================================================================


class TestSqrt:
    """Тесты для sqrt"""

    @pytest.mark.parametrize(
        "x, expected",
        [
            (0, 0),
            (SCALE, SCALE),
            (4 * SCALE, 2 * SCALE),
            (2 * SCALE, 1_414213562373095048),
            (1, 1_000000000),  # sqrt(1e-18) = 1e-9
            (100 * SCALE, 10 * SCALE),
        ],
    )
    def test_known_values(self, x: int, expected: int) -> None:
        assert sqrt(x) == expected

    def test_rounds_down(self) -> None:
        """sqrt(x)^2 <= x в raw масштабе"""
        for x in (2 * SCALE, 3 * SCALE, E, 12345):
            r = sqrt(x)
            assert r * r <= x * SCALE < (r + 1) * (r + 1)

    def test_square_of_root(self) -> None:
        """mul(sqrt(x), sqrt(x)) <= x и отличается меньше чем на единицу"""
        for x in (2 * SCALE, 3 * SCALE, E, 10**30):
            r = sqrt(x)
            assert 0 <= x - mul(r, r) < SCALE

    def test_max_input(self) -> None:
        assert sqrt(SQRT_MAX_INPUT) == math.isqrt(SQRT_MAX_INPUT * SCALE)

    def test_input_too_large(self) -> None:
        with pytest.raises(FixedPointOverflowError):
            sqrt(SQRT_MAX_INPUT + 1)
        with pytest.raises(FixedPointOverflowError):
            sqrt(MAX_VALUE)

    def test_negative_rejected(self) -> None:
        with pytest.raises(DomainError):
            sqrt(-1)
        with pytest.raises(DomainError):
            sqrt(MIN_VALUE)


# =============================================================================
# ТЕСТЫ GM
# =============================================================================


class TestGm:
    """Тесты для gm"""

    def test_known_values(self) -> None:
        assert gm(SCALE, 4 * SCALE) == 2 * SCALE
        assert gm(SCALE, 3 * SCALE) == 1732050807568877293
        assert gm(2 * SCALE, 2 * SCALE) == 2 * SCALE

    def test_same_sign_negative(self) -> None:
        """Оба операнда отрицательны — произведение положительно"""
        assert gm(-SCALE, -4 * SCALE) == 2 * SCALE

    def test_zero_operand(self) -> None:
        assert gm(0, -5 * SCALE) == 0
        assert gm(0, MAX_VALUE) == 0
        assert gm(5 * SCALE, 0) == 0

    def test_mixed_signs_rejected(self) -> None:
        with pytest.raises(DomainError):
            gm(-SCALE, SCALE)
        with pytest.raises(DomainError):
            gm(SCALE, -1)

    def test_product_overflow(self) -> None:
        with pytest.raises(FixedPointOverflowError):
            gm(MAX_VALUE, 2)
        with pytest.raises(FixedPointOverflowError):
            gm(MIN_VALUE, MIN_VALUE)


# =============================================================================
# ТЕСТЫ POWU
# =============================================================================


class TestPowu:
    """Тесты для powu"""

    @pytest.mark.parametrize(
        "x, n, expected",
        [
            (2 * SCALE, 10, 1024 * SCALE),
            (2 * SCALE, 1, 2 * SCALE),
            (-2 * SCALE, 3, -8 * SCALE),
            (-2 * SCALE, 4, 16 * SCALE),
            (SCALE, 1000, SCALE),
            (500000000000000000, 2, 250000000000000000),
        ],
    )
    def test_known_values(self, x: int, n: int, expected: int) -> None:
        assert powu(x, n) == expected

    def test_zero_exponent(self) -> None:
        """x^0 = 1, включая 0^0"""
        assert powu(0, 0) == SCALE
        assert powu(E, 0) == SCALE
        assert powu(-E, 0) == SCALE

    def test_zero_base(self) -> None:
        assert powu(0, 5) == 0

    def test_largest_power_of_ten(self) -> None:
        assert powu(10 * SCALE, 58) == 10**58 * SCALE

    def test_overflow(self) -> None:
        with pytest.raises(FixedPointOverflowError):
            powu(10 * SCALE, 77)
        with pytest.raises(FixedPointOverflowError):
            powu(MAX_VALUE, 2)

    def test_matches_repeated_mul_for_exact_values(self) -> None:
        x = 3 * SCALE
        assert powu(x, 3) == mul(mul(x, x), x)

    def test_negative_exponent_rejected(self) -> None:
        with pytest.raises(DomainError):
            powu(2 * SCALE, -1)

    def test_min_value_base_rejected(self) -> None:
        with pytest.raises(DomainError):
            powu(MIN_VALUE, 2)

    def test_exponent_must_be_int(self) -> None:
        with pytest.raises(TypeError):
            powu(2 * SCALE, 2.0)  # type: ignore[arg-type]


# =============================================================================
# ТЕСТЫ POW
# =============================================================================


class TestPow:
    """Тесты для pow_"""

    def test_square_root_via_half(self) -> None:
        assert pow_(4 * SCALE, 500000000000000000) == 2 * SCALE
        assert pow_(2 * SCALE, 500000000000000000) == 1_414213562373095048

    def test_integer_exponents_of_two(self) -> None:
        assert pow_(2 * SCALE, 3 * SCALE) == 8 * SCALE
        assert pow_(2 * SCALE, -SCALE) == 500000000000000000

    def test_zero_base(self) -> None:
        """0^0 = 1, иначе 0"""
        assert pow_(0, 0) == SCALE
        assert pow_(0, SCALE) == 0
        assert pow_(0, -SCALE) == 0

    def test_zero_exponent(self) -> None:
        assert pow_(E, 0) == SCALE

    def test_unit_base(self) -> None:
        assert pow_(SCALE, 123 * SCALE) == SCALE

    def test_close_to_powu(self) -> None:
        """Для целого показателя совпадает с powu в пределах погрешности log2"""
        assert pow_(3 * SCALE, 4 * SCALE) == pytest.approx(powu(3 * SCALE, 4), rel=1e-15)

    def test_negative_base_rejected(self) -> None:
        with pytest.raises(DomainError):
            pow_(-SCALE, 2 * SCALE)

    def test_overflow(self) -> None:
        with pytest.raises(FixedPointOverflowError):
            pow_(2 * SCALE, 200 * SCALE)
