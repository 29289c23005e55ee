"""
SD59x18 — знаковая fixed-point арифметика с 18 десятичными знаками

Число представляется знаковым целым `value` в диапазоне signed-256 и
интерпретируется как value / 10**18. Все функции модуля принимают и
возвращают raw int значения (уже масштабированные на SCALE).

Слои:
- Знаковая диспетчеризация: mul/div раскладывают операнды на знак и модуль
  и опираются на wide mul-div примитивы (wide_math)
- Элементарные операции: add, sub, avg, abs_, neg, floor, ceil, frac,
  from_int, to_int, inv
- Степени и корни: sqrt, gm, powu, pow_
- Трансцендентные: log2, ln, log10, exp2, exp

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат всегда в [MIN_VALUE, MAX_VALUE], иначе FixedPointOverflowError
2. Операнд вне области определения → DomainError
3. exp/exp2 для глубоко отрицательных входов возвращают ровно 0 (saturate)
4. Деление со знаком усекается к нулю (как в эталонной арифметике)
5. Функции чистые: нет состояния между вызовами
"""

import logging
from typing import Final

from src.core.math.errors import DomainError, FixedPointOverflowError
from src.core.math.wide_math import (
    DECIMALS,
    HALF_SCALE,
    INT256_MAX,
    INT256_MIN,
    SCALE,
    exp2_binary,
    most_significant_bit,
    mul_div,
    mul_div_fixed_point,
    sqrt_uint,
)

_log = logging.getLogger(__name__)

# =============================================================================
# ГРАНИЦЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Полный диапазон signed-256
MIN_VALUE: Final[int] = INT256_MIN
MAX_VALUE: Final[int] = INT256_MAX

# Наибольшее / наименьшее значения с нулевой дробной частью
MAX_WHOLE: Final[int] = MAX_VALUE - MAX_VALUE % SCALE
MIN_WHOLE: Final[int] = -MAX_WHOLE

# Границы from_int (целая часть MAX_VALUE / MIN_VALUE, усечение к нулю)
MAX_INT: Final[int] = MAX_VALUE // SCALE
MIN_INT: Final[int] = -MAX_INT

# SCALE * SCALE: числитель fixed-point инверсии
DOUBLE_SCALE: Final[int] = SCALE * SCALE

# =============================================================================
# МАТЕМАТИЧЕСКИЕ КОНСТАНТЫ (SD59x18)
# =============================================================================

UNIT: Final[int] = SCALE
E: Final[int] = 2_718281828459045235
PI: Final[int] = 3_141592653589793238
LOG2_E: Final[int] = 1_442695040888963407
LOG2_10: Final[int] = 3_321928094887362347

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ И ГРАНИЦЫ ВХОДОВ
# =============================================================================

# Количество итераций уточнения дробной части log2: delta стартует с
# HALF_SCALE и делится пополам, пока не станет нулём
LOG2_ITERATIONS: Final[int] = HALF_SCALE.bit_length()

# sqrt: x * SCALE должно помещаться в контейнер
SQRT_MAX_INPUT: Final[int] = MAX_VALUE // SCALE

# exp2: 2^192 не помещается во внутренний формат 192.64
EXP2_MAX_INPUT: Final[int] = 192 * SCALE

# exp2: ниже этого входа 1/2^(-x) усекается до нуля
EXP2_MIN_INPUT: Final[int] = -59_794705707972522261

# exp: выше этого входа exp2 получает показатель >= 192
EXP_MAX_INPUT: Final[int] = 133_084258667509499441

# exp: ниже этого входа exp2 получает показатель < EXP2_MIN_INPUT
EXP_MIN_INPUT: Final[int] = -41_446531673892822322

# log10: точные результаты для всех представимых степеней десяти (10^0 .. 10^76)
LOG10_EXACT: Final[dict[int, int]] = {10**k: (k - DECIMALS) * SCALE for k in range(77)}


# =============================================================================
# ВНУТРЕННИЕ ХЕЛПЕРЫ
# =============================================================================


def _require_sd(operation: str, *values: int) -> None:
    for value in values:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{operation}: operand must be an int, got {type(value).__name__}")
        if value < MIN_VALUE or value > MAX_VALUE:
            raise DomainError(operation, f"operand {value} is outside the SD59x18 range", *values)


def _checked(operation: str, result: int, *operands: int) -> int:
    if result < MIN_VALUE or result > MAX_VALUE:
        raise FixedPointOverflowError(operation, f"result {result} is outside the SD59x18 range", *operands)
    return result


def _sdiv(a: int, b: int) -> int:
    """Знаковое деление с усечением к нулю."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _smod(a: int, b: int) -> int:
    """Остаток со знаком делимого (пара к _sdiv)."""
    return a - b * _sdiv(a, b)


# =============================================================================
# ЭЛЕМЕНТАРНЫЕ ОПЕРАЦИИ
# =============================================================================


def add(x: int, y: int) -> int:
    """
    Сложение x + y.

    Raises:
        FixedPointOverflowError: Если сумма вне [MIN_VALUE, MAX_VALUE]
    """
    _require_sd("add", x, y)
    return _checked("add", x + y, x, y)


def sub(x: int, y: int) -> int:
    """
    Вычитание x - y.

    Raises:
        FixedPointOverflowError: Если разность вне [MIN_VALUE, MAX_VALUE]
    """
    _require_sd("sub", x, y)
    return _checked("sub", x - y, x, y)


def neg(x: int) -> int:
    """
    Смена знака -x.

    Raises:
        FixedPointOverflowError: Если x == MIN_VALUE
    """
    _require_sd("neg", x)
    return _checked("neg", -x, x)


def abs_(x: int) -> int:
    """
    Модуль |x|.

    Raises:
        DomainError: Если x == MIN_VALUE (модуль не представим)

    Examples:
        >>> abs_(-3_000000000000000000)
        3000000000000000000
    """
    _require_sd("abs", x)
    if x == MIN_VALUE:
        raise DomainError("abs", "input equals MIN_VALUE", x)
    return -x if x < 0 else x


def avg(x: int, y: int) -> int:
    """
    Среднее арифметическое с округлением вниз.

    Каждый операнд делится пополам арифметическим сдвигом (округление
    к -inf); поправка компенсирует двойное усечение остатка 0.5.
    Никогда не переполняется.

    Examples:
        >>> avg(1, 3)
        2
        >>> avg(-1, -2)
        -2
    """
    _require_sd("avg", x, y)
    # Оба нечётные: остаток 0.5 усечён дважды
    return (x >> 1) + (y >> 1) + (x & y & 1)


def frac(x: int) -> int:
    """
    Дробная часть x: остаток x mod SCALE со знаком x.

    Examples:
        >>> frac(-1_250000000000000000)
        -250000000000000000
    """
    _require_sd("frac", x)
    return _smod(x, SCALE)


def floor(x: int) -> int:
    """
    Округление вниз до целого.

    Raises:
        FixedPointOverflowError: Если x < MIN_WHOLE

    Examples:
        >>> floor(-1_500000000000000000)
        -2000000000000000000
    """
    _require_sd("floor", x)
    if x < MIN_WHOLE:
        raise FixedPointOverflowError("floor", "input is below MIN_WHOLE", x)

    remainder = _smod(x, SCALE)
    if remainder == 0:
        return x

    result = x - remainder
    if x < 0:
        result -= SCALE
    return result


def ceil(x: int) -> int:
    """
    Округление вверх до целого.

    Raises:
        FixedPointOverflowError: Если x > MAX_WHOLE

    Examples:
        >>> ceil(1_100000000000000000)
        2000000000000000000
        >>> ceil(-1_900000000000000000)
        -1000000000000000000
    """
    _require_sd("ceil", x)
    if x > MAX_WHOLE:
        raise FixedPointOverflowError("ceil", "input is above MAX_WHOLE", x)

    remainder = _smod(x, SCALE)
    if remainder == 0:
        return x

    result = x - remainder
    if x > 0:
        result += SCALE
    return result


def from_int(n: int) -> int:
    """
    Конверсия целого числа в SD59x18: n * SCALE.

    Raises:
        FixedPointOverflowError: Если n вне [MIN_INT, MAX_INT]
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"from_int: operand must be an int, got {type(n).__name__}")
    if n < MIN_INT:
        raise FixedPointOverflowError("from_int", "integer is below the representable range", n)
    if n > MAX_INT:
        raise FixedPointOverflowError("from_int", "integer is above the representable range", n)
    return n * SCALE


def to_int(x: int) -> int:
    """Конверсия SD59x18 в целое с усечением к нулю."""
    _require_sd("to_int", x)
    return _sdiv(x, SCALE)


# =============================================================================
# УМНОЖЕНИЕ И ДЕЛЕНИЕ (знак + модуль)
# =============================================================================


def mul(x: int, y: int) -> int:
    """
    Fixed-point умножение x * y с округлением модуля к ближайшему.

    Raises:
        DomainError: Если любой операнд равен MIN_VALUE
        FixedPointOverflowError: Если модуль результата > MAX_VALUE

    Examples:
        >>> mul(1_500000000000000000, -2_000000000000000000)
        -3000000000000000000
    """
    _require_sd("mul", x, y)
    if x == MIN_VALUE or y == MIN_VALUE:
        raise DomainError("mul", "input equals MIN_VALUE", x, y)

    r_abs = mul_div_fixed_point(abs(x), abs(y))
    if r_abs > MAX_VALUE:
        raise FixedPointOverflowError("mul", "product exceeds MAX_VALUE", x, y)

    return -r_abs if (x < 0) != (y < 0) else r_abs


def div(x: int, y: int) -> int:
    """
    Fixed-point деление x / y с усечением модуля к нулю.

    Raises:
        DomainError: Если y == 0 или любой операнд равен MIN_VALUE
        FixedPointOverflowError: Если модуль результата > MAX_VALUE

    Examples:
        >>> div(10_000000000000000000, 4_000000000000000000)
        2500000000000000000
    """
    _require_sd("div", x, y)
    if x == MIN_VALUE or y == MIN_VALUE:
        raise DomainError("div", "input equals MIN_VALUE", x, y)
    if y == 0:
        raise DomainError("div", "division by zero", x, y)

    r_abs = mul_div(abs(x), SCALE, abs(y))
    if r_abs > MAX_VALUE:
        raise FixedPointOverflowError("div", "quotient exceeds MAX_VALUE", x, y)

    return -r_abs if (x < 0) != (y < 0) else r_abs


def inv(x: int) -> int:
    """
    Обратное значение 1 / x (усечение к нулю).

    Raises:
        DomainError: Если x == 0
    """
    _require_sd("inv", x)
    if x == 0:
        raise DomainError("inv", "division by zero", x)
    return _sdiv(DOUBLE_SCALE, x)


# =============================================================================
# СТЕПЕНИ И КОРНИ
# =============================================================================


def sqrt(x: int) -> int:
    """
    Квадратный корень с округлением вниз.

    Корень считается от x * SCALE: множитель SCALE компенсирует масштаб,
    который теряется при перемножении двух корней.

    Raises:
        DomainError: Если x < 0
        FixedPointOverflowError: Если x > SQRT_MAX_INPUT
    """
    _require_sd("sqrt", x)
    if x < 0:
        raise DomainError("sqrt", "negative input", x)
    if x > SQRT_MAX_INPUT:
        raise FixedPointOverflowError("sqrt", "input is too large to scale", x)
    return sqrt_uint(x * SCALE)


def gm(x: int, y: int) -> int:
    """
    Геометрическое среднее sqrt(x * y).

    Произведение raw значений уже несёт один множитель SCALE, поэтому
    повторное масштабирование не требуется.

    Raises:
        FixedPointOverflowError: Если x * y вне контейнера
        DomainError: Если x * y < 0 (операнды разных знаков)
    """
    _require_sd("gm", x, y)
    if x == 0:
        return 0

    xy = x * y
    if xy < MIN_VALUE or xy > MAX_VALUE:
        raise FixedPointOverflowError("gm", "product overflows", x, y)
    if xy < 0:
        raise DomainError("gm", "negative product", x, y)

    return sqrt_uint(xy)


def powu(x: int, n: int) -> int:
    """
    Возведение в целую неотрицательную степень (exponentiation by squaring).

    Каждый шаг возведения в квадрат и умножения идёт через
    mul_div_fixed_point. По соглашению 0^0 = 1.

    Args:
        x: Основание (SD59x18)
        n: Показатель (обычное целое, n >= 0)

    Raises:
        DomainError: Если n < 0 или x == MIN_VALUE
        FixedPointOverflowError: Если модуль результата > MAX_VALUE

    Examples:
        >>> powu(2_000000000000000000, 10)
        1024000000000000000000
    """
    _require_sd("powu", x)
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"powu: exponent must be an int, got {type(n).__name__}")
    if n < 0:
        raise DomainError("powu", "exponent must be non-negative", x, n)

    x_abs = abs_(x)

    # Первая итерация вынесена до цикла
    r_abs = x_abs if n & 1 else SCALE

    remaining = n >> 1
    while remaining > 0:
        x_abs = mul_div_fixed_point(x_abs, x_abs)
        if remaining & 1:
            r_abs = mul_div_fixed_point(r_abs, x_abs)
        remaining >>= 1

    if r_abs > MAX_VALUE:
        raise FixedPointOverflowError("powu", "result exceeds MAX_VALUE", x, n)

    return -r_abs if x < 0 and n & 1 else r_abs


def pow_(x: int, y: int) -> int:
    """
    Возведение в fixed-point степень: 2^(log2(x) * y).

    x == 0 даёт 1 при y == 0, иначе 0. Наследует ограничения log2, mul, exp2.
    """
    _require_sd("pow", x, y)
    if x == 0:
        return SCALE if y == 0 else 0
    return exp2(mul(log2(x), y))


# =============================================================================
# ЛОГАРИФМЫ
# =============================================================================


def log2(x: int) -> int:
    """
    Двоичный логарифм (итеративная битовая аппроксимация).

    Алгоритм:
    1. Для x < 1 используем log2(x) = -log2(1/x)
    2. Целая часть — индекс старшего бита x / SCALE
    3. Дробная часть: мантисса y в [1, 2) многократно возводится в квадрат;
       если y^2 в [2, 4), к результату добавляется вес 2^-m, а y делится на 2

    Точность ограничена LOG2_ITERATIONS шагами уточнения: результат
    является аппроксимацией, а не точным значением.

    Raises:
        DomainError: Если x <= 0

    Examples:
        >>> log2(8_000000000000000000)
        3000000000000000000
        >>> log2(500000000000000000)
        -1000000000000000000
    """
    _require_sd("log2", x)
    if x <= 0:
        raise DomainError("log2", "logarithm input must be positive", x)

    if x >= SCALE:
        sign = 1
    else:
        sign = -1
        x = DOUBLE_SCALE // x

    n = most_significant_bit(x // SCALE)
    result = n * SCALE

    # y = x * 2^(-n), y в [1, 2)
    y = x >> n
    if y == SCALE:
        return result * sign

    delta = HALF_SCALE
    while delta > 0:
        y = (y * y) // SCALE
        if y >= 2 * SCALE:
            result += delta
            y >>= 1
        delta >>= 1

    return result * sign


def ln(x: int) -> int:
    """
    Натуральный логарифм: log2(x) / log2(e).

    Raises:
        DomainError: Если x <= 0
    """
    return _sdiv(log2(x) * SCALE, LOG2_E)


def log10(x: int) -> int:
    """
    Десятичный логарифм.

    Для точных степеней десяти (10^-18 .. 10^58 в терминах числа)
    возвращается точный результат без ошибки округления; остальные входы
    считаются как log2(x) / log2(10).

    Raises:
        DomainError: Если x <= 0

    Examples:
        >>> log10(100_000000000000000000)
        2000000000000000000
        >>> log10(1)
        -18000000000000000000
    """
    _require_sd("log10", x)
    if x <= 0:
        raise DomainError("log10", "logarithm input must be positive", x)

    exact = LOG10_EXACT.get(x)
    if exact is not None:
        return exact

    return _sdiv(log2(x) * SCALE, LOG2_10)


# =============================================================================
# ЭКСПОНЕНТЫ
# =============================================================================


def exp2(x: int) -> int:
    """
    Двоичная экспонента 2^x.

    - x < 0: 2^x = 1 / 2^(-x); при x < EXP2_MIN_INPUT результат ровно 0
    - x >= 0: вход переводится в формат 192.64 и считается exp2_binary

    Raises:
        FixedPointOverflowError: Если x >= EXP2_MAX_INPUT (192.0)

    Examples:
        >>> exp2(3_000000000000000000)
        8000000000000000000
    """
    _require_sd("exp2", x)
    if x < 0:
        if x < EXP2_MIN_INPUT:
            _log.debug("exp2 saturated to zero for x=%d", x)
            return 0
        return DOUBLE_SCALE // exp2(-x)

    if x >= EXP2_MAX_INPUT:
        raise FixedPointOverflowError("exp2", "input must be less than 192", x)

    x192x64 = (x << 64) // SCALE
    return exp2_binary(x192x64)


def exp(x: int) -> int:
    """
    Натуральная экспонента e^x = 2^(x * log2(e)).

    Raises:
        FixedPointOverflowError: Если x >= EXP_MAX_INPUT (ln(MAX_VALUE / SCALE))
    """
    _require_sd("exp", x)
    if x < EXP_MIN_INPUT:
        _log.debug("exp saturated to zero for x=%d", x)
        return 0
    if x >= EXP_MAX_INPUT:
        raise FixedPointOverflowError("exp", "input is too large", x)

    double_scale_product = x * LOG2_E
    return exp2(_sdiv(double_scale_product + HALF_SCALE, SCALE))
