"""
Wide Math — беззнаковые примитивы шириной 256 бит

Модуль содержит фундамент всего fixed-point ядра:
- mul_div: точное floor(a*b/c) с промежуточным произведением шире 256 бит
- mul_div_fixed_point: тот же примитив с делителем SCALE и округлением
  к ближайшему (остаток >= HALF_SCALE округляется вверх)
- mul_div_signed: знаковая обёртка (знак + модуль)
- sqrt_uint: целый квадратный корень (Babylonian iteration, округление вниз)
- most_significant_bit: позиция старшего установленного бита
- exp2_binary: двоичная экспонента в формате 192.64 → unsigned 60.18

Python int не ограничен по ширине, поэтому переполнение контейнера
проверяется явно на каждой границе, а не ловится через wrap-around.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все операнды и результаты — unsigned-256: [0, 2**256)
2. Деление на ноль → DomainError
3. Частное >= 2**256 → FixedPointOverflowError
4. Все операции детерминированы и не имеют состояния
"""

import math
from typing import Final

from src.core.math.errors import DomainError, FixedPointOverflowError

# =============================================================================
# КОНТЕЙНЕР И МАСШТАБ
# =============================================================================

# Ширина нативного слова (бит)
WORD_BITS: Final[int] = 256

# Максимальное unsigned-256 значение
UINT256_MAX: Final[int] = (1 << WORD_BITS) - 1

# Максимальное / минимальное signed-256 значения
INT256_MAX: Final[int] = (1 << (WORD_BITS - 1)) - 1
INT256_MIN: Final[int] = -(1 << (WORD_BITS - 1))

# Количество дробных десятичных знаков и масштаб
DECIMALS: Final[int] = 18
SCALE: Final[int] = 10**DECIMALS

# Половина масштаба: порог округления к ближайшему
HALF_SCALE: Final[int] = SCALE // 2


# =============================================================================
# ВАЛИДАЦИЯ ОПЕРАНДОВ
# =============================================================================


def _require_int(operation: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{operation}: operand must be an int, got {type(value).__name__}")


def _require_uint256(operation: str, value: int) -> None:
    _require_int(operation, value)
    if value < 0 or value > UINT256_MAX:
        raise DomainError(operation, f"operand {value} is outside the unsigned 256-bit range", value)


# =============================================================================
# WIDE MUL-DIV
# =============================================================================


def mul_div(a: int, b: int, c: int) -> int:
    """
    Точное floor(a * b / c) для unsigned-256 операндов.

    Произведение a*b может занимать до 512 бит; результат точен,
    пока частное помещается в 256 бит.

    Args:
        a: Множитель (unsigned-256)
        b: Множитель (unsigned-256)
        c: Делитель (unsigned-256, != 0)

    Returns:
        floor(a * b / c)

    Raises:
        DomainError: Если c == 0 или операнд вне unsigned-256
        FixedPointOverflowError: Если частное >= 2**256

    Examples:
        >>> mul_div(2**255, 4, 8)
        28948022309329048855892746252171976963317496166410141009864396001978282409984
        >>> mul_div(7, 3, 2)
        10
    """
    for operand in (a, b, c):
        _require_uint256("mul_div", operand)

    if c == 0:
        raise DomainError("mul_div", "division by zero", a, b, c)

    result = (a * b) // c

    if result > UINT256_MAX:
        raise FixedPointOverflowError("mul_div", "quotient exceeds 256 bits", a, b, c)

    return result


def mul_div_fixed_point(a: int, b: int) -> int:
    """
    Fixed-point вариант mul_div: делитель равен SCALE, округление к ближайшему.

    Если остаток от деления a*b на SCALE >= HALF_SCALE, частное округляется
    вверх. Используется умножением fixed-point чисел для сохранения точности.

    Args:
        a: Множитель (unsigned-256, уже масштабирован на SCALE)
        b: Множитель (unsigned-256, уже масштабирован на SCALE)

    Returns:
        round_half_up(a * b / SCALE)

    Raises:
        FixedPointOverflowError: Если результат не помещается в 256 бит

    Examples:
        >>> mul_div_fixed_point(1_500000000000000000, 2_000000000000000000)
        3000000000000000000
        >>> mul_div_fixed_point(1, HALF_SCALE)
        1
    """
    _require_uint256("mul_div_fixed_point", a)
    _require_uint256("mul_div_fixed_point", b)

    quotient, remainder = divmod(a * b, SCALE)

    # Остаток >= 0.5 ulp: округляем вверх
    if remainder >= HALF_SCALE:
        quotient += 1

    if quotient > UINT256_MAX:
        raise FixedPointOverflowError("mul_div_fixed_point", "product exceeds 256 bits after scaling", a, b)

    return quotient


def mul_div_signed(x: int, y: int, d: int) -> int:
    """
    Знаковый x * y / d через разложение на знак и модуль.

    Модули считаются через mul_div (округление вниз по модулю, т.е. к нулю),
    затем восстанавливается знак: результат отрицателен, если среди операндов
    нечётное число отрицательных.

    Raises:
        DomainError: Если любой операнд равен INT256_MIN или d == 0
        FixedPointOverflowError: Если модуль результата > INT256_MAX
    """
    for operand in (x, y, d):
        _require_int("mul_div_signed", operand)
        if operand == INT256_MIN:
            raise DomainError("mul_div_signed", "operand equals the minimum signed value", x, y, d)
        if operand > INT256_MAX:
            raise DomainError("mul_div_signed", f"operand {operand} is outside the signed 256-bit range", x, y, d)

    r_abs = mul_div(abs(x), abs(y), abs(d))
    if r_abs > INT256_MAX:
        raise FixedPointOverflowError("mul_div_signed", "result exceeds the signed 256-bit range", x, y, d)

    negatives = (x < 0) + (y < 0) + (d < 0)
    return -r_abs if negatives % 2 == 1 else r_abs


# =============================================================================
# БИТОВЫЕ ПРИМИТИВЫ И КОРЕНЬ
# =============================================================================


def most_significant_bit(x: int) -> int:
    """
    Индекс старшего установленного бита (0-based).

    Raises:
        DomainError: Если x <= 0
    """
    _require_uint256("most_significant_bit", x)
    if x == 0:
        raise DomainError("most_significant_bit", "zero has no set bits", x)
    return x.bit_length() - 1


def sqrt_uint(x: int) -> int:
    """
    Целый квадратный корень floor(sqrt(x)) через итерацию Герона (Babylonian).

    Начальное приближение 2**ceil(bits/2) >= sqrt(x), поэтому
    последовательность монотонно убывает до floor(sqrt(x)).

    Examples:
        >>> sqrt_uint(16)
        4
        >>> sqrt_uint(15)
        3
        >>> sqrt_uint(0)
        0
    """
    _require_uint256("sqrt_uint", x)
    if x == 0:
        return 0

    result = 1 << ((x.bit_length() + 1) >> 1)
    while True:
        candidate = (result + x // result) >> 1
        if candidate >= result:
            return result
        result = candidate


# =============================================================================
# ДВОИЧНАЯ ЭКСПОНЕНТА (192.64)
# =============================================================================

# Количество дробных бит входа exp2_binary
EXP2_FRACTION_BITS: Final[int] = 64

# Вход exp2_binary должен быть < 192 в формате 192.64
EXP2_BINARY_INPUT_LIMIT: Final[int] = 192 << EXP2_FRACTION_BITS

# Защитные биты при построении таблицы множителей
_EXP2_GUARD_BITS: Final[int] = 128


def _build_exp2_factors() -> tuple[int, ...]:
    """
    Таблица множителей 2^(2^-k), k = 1..64, в формате 64.64.

    Каждый множитель получается последовательным извлечением корня из 2.0
    с запасом точности в _EXP2_GUARD_BITS и округлением к ближайшему.
    """
    precision = EXP2_FRACTION_BITS + _EXP2_GUARD_BITS
    half_guard = 1 << (_EXP2_GUARD_BITS - 1)

    factors = []
    value = 2 << precision
    for _ in range(EXP2_FRACTION_BITS):
        value = math.isqrt(value << precision)
        factors.append((value + half_guard) >> _EXP2_GUARD_BITS)
    return tuple(factors)


# EXP2_FACTORS[k - 1] == round(2^(2^-k) * 2**64)
EXP2_FACTORS: Final[tuple[int, ...]] = _build_exp2_factors()


def exp2_binary(x: int) -> int:
    """
    Двоичная экспонента 2^x для x в формате unsigned 192.64.

    Алгоритм:
    1. Старт с 0.5 в формате 64.192 (1 << 191)
    2. Для каждого установленного дробного бита 2^-k умножаем на 2^(2^-k)
    3. Масштабируем на SCALE и сдвигаем на (191 - целая часть x):
       одновременно умножение на 2^n и компенсация стартового 0.5

    Args:
        x: Показатель в формате 192.64 (x < 192 << 64)

    Returns:
        2^x в формате unsigned 60.18-decimal

    Raises:
        FixedPointOverflowError: Если x >= 192 (не помещается в 192.64)
    """
    _require_uint256("exp2_binary", x)
    if x >= EXP2_BINARY_INPUT_LIMIT:
        raise FixedPointOverflowError("exp2_binary", "exponent must be less than 192", x)

    result = 1 << 191
    for k, factor in enumerate(EXP2_FACTORS, start=1):
        if x & (1 << (EXP2_FRACTION_BITS - k)):
            result = (result * factor) >> EXP2_FRACTION_BITS

    result *= SCALE
    result >>= 191 - (x >> EXP2_FRACTION_BITS)
    return result
