"""
FixedPoint — Value object знакового 59.18-decimal числа

Immutable Pydantic модель с единственным полем `value` (raw int,
интерпретируется как value / 10**18). Все арифметические методы делегируют
в ядро src.core.math.sd59x18 и возвращают новый экземпляр.

Поддерживает:
- Конверсию из/в целые числа и десятичные строки
- Python-операторы: + - * / abs, унарный минус, сравнения
- JSON-контракт (contracts/schema/fixed_point.json)
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Final, List

from pydantic import BaseModel, Field, field_validator

from src.core.contracts.validators import validate_fixed_point, validate_fixed_point_batch
from src.core.math import sd59x18
from src.core.math.errors import FixedPointOverflowError
from src.core.math.sd59x18 import DECIMALS, MAX_VALUE, MIN_VALUE, SCALE

# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================

# Идентификатор формата в JSON-контракте
CONTRACT_FORMAT: Final[str] = "SD59x18"

_DECIMAL_RE: Final[re.Pattern[str]] = re.compile(r"^([+-])?(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True)
class DecimalFormat:
    """
    Параметры форматирования десятичной строки.

    trim_trailing_zeros: убирать хвостовые нули дробной части
    min_fraction_digits: минимум знаков после точки при обрезке (0 — без точки)
    """

    trim_trailing_zeros: bool = True
    min_fraction_digits: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.min_fraction_digits <= DECIMALS:
            raise ValueError(
                f"min_fraction_digits must be in [0, {DECIMALS}], got {self.min_fraction_digits}"
            )


# Компактный вывод: "1.5", "4.0", "-0.000000000000000001"
DEFAULT_FORMAT: Final[DecimalFormat] = DecimalFormat()

# Канонический вывод контракта: всегда 18 знаков после точки
CANONICAL_FORMAT: Final[DecimalFormat] = DecimalFormat(trim_trailing_zeros=False)


# =============================================================================
# FIXED POINT MODEL
# =============================================================================


class FixedPoint(BaseModel):
    """
    Знаковое fixed-point число SD59x18.

    Immutable модель (frozen=True): любая операция создаёт новый экземпляр.
    Значение всегда в [MIN_VALUE, MAX_VALUE]; bool/float/str как raw value
    не принимаются (strict int).
    """

    value: int = Field(..., strict=True, description="Raw значение, масштабированное на 10**18")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_range(cls, v: int) -> int:
        """Raw значение должно помещаться в signed-256."""
        if v < MIN_VALUE or v > MAX_VALUE:
            raise ValueError(f"value {v} is outside the SD59x18 range [{MIN_VALUE}, {MAX_VALUE}]")
        return v

    # -------------------------------------------------------------------------
    # Конструкторы и конверсии
    # -------------------------------------------------------------------------

    @classmethod
    def from_int(cls, n: int) -> "FixedPoint":
        """Целое число n → FixedPoint(n * SCALE)."""
        return cls(value=sd59x18.from_int(n))

    def to_int(self) -> int:
        """Целая часть с усечением к нулю."""
        return sd59x18.to_int(self.value)

    @classmethod
    def from_decimal_string(cls, text: str) -> "FixedPoint":
        """
        Парсинг десятичной строки ('1.5', '-42', '+0.000000000000000001').

        Raises:
            ValueError: Если строка некорректна или содержит > 18 дробных знаков
            FixedPointOverflowError: Если число вне диапазона SD59x18
        """
        match = _DECIMAL_RE.match(text.strip())
        if match is None:
            raise ValueError(f"invalid decimal string: {text!r}")

        sign, whole, fraction = match.groups()
        fraction = fraction or ""
        if len(fraction) > DECIMALS:
            raise ValueError(f"decimal string has more than {DECIMALS} fractional digits: {text!r}")

        magnitude = int(whole) * SCALE + int(fraction.ljust(DECIMALS, "0"))
        value = -magnitude if sign == "-" else magnitude

        if value < MIN_VALUE or value > MAX_VALUE:
            raise FixedPointOverflowError("from_decimal_string", "number is outside the SD59x18 range", value)

        return cls(value=value)

    def to_decimal_string(self, fmt: DecimalFormat = DEFAULT_FORMAT) -> str:
        """
        Десятичное представление без потери точности.

        Examples:
            >>> FixedPoint(value=1_500000000000000000).to_decimal_string()
            '1.5'
            >>> FixedPoint(value=-1).to_decimal_string()
            '-0.000000000000000001'
        """
        whole, fraction = divmod(abs(self.value), SCALE)
        digits = str(fraction).rjust(DECIMALS, "0")

        if fmt.trim_trailing_zeros:
            digits = digits.rstrip("0")
            if len(digits) < fmt.min_fraction_digits:
                digits = digits.ljust(fmt.min_fraction_digits, "0")

        sign = "-" if self.value < 0 else ""
        if digits:
            return f"{sign}{whole}.{digits}"
        return f"{sign}{whole}"

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в JSON-контракт fixed_point."""
        data = {
            "format": CONTRACT_FORMAT,
            "value": self.to_decimal_string(CANONICAL_FORMAT),
        }
        validate_fixed_point(data)
        return data

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "FixedPoint":
        """
        Десериализация из JSON-контракта fixed_point.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        validate_fixed_point(data)
        return cls.from_decimal_string(data["value"])

    # -------------------------------------------------------------------------
    # Арифметика ядра
    # -------------------------------------------------------------------------

    def add(self, other: "FixedPoint") -> "FixedPoint":
        return FixedPoint(value=sd59x18.add(self.value, other.value))

    def sub(self, other: "FixedPoint") -> "FixedPoint":
        return FixedPoint(value=sd59x18.sub(self.value, other.value))

    def mul(self, other: "FixedPoint") -> "FixedPoint":
        return FixedPoint(value=sd59x18.mul(self.value, other.value))

    def div(self, other: "FixedPoint") -> "FixedPoint":
        return FixedPoint(value=sd59x18.div(self.value, other.value))

    def avg(self, other: "FixedPoint") -> "FixedPoint":
        return FixedPoint(value=sd59x18.avg(self.value, other.value))

    def abs(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.abs_(self.value))

    def neg(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.neg(self.value))

    def inv(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.inv(self.value))

    def floor(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.floor(self.value))

    def ceil(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.ceil(self.value))

    def frac(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.frac(self.value))

    def sqrt(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.sqrt(self.value))

    def gm(self, other: "FixedPoint") -> "FixedPoint":
        """Геометрическое среднее sqrt(self * other)."""
        return FixedPoint(value=sd59x18.gm(self.value, other.value))

    def powu(self, n: int) -> "FixedPoint":
        """Возведение в целую неотрицательную степень n."""
        return FixedPoint(value=sd59x18.powu(self.value, n))

    def pow(self, other: "FixedPoint") -> "FixedPoint":
        """Возведение в fixed-point степень."""
        return FixedPoint(value=sd59x18.pow_(self.value, other.value))

    def log2(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.log2(self.value))

    def ln(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.ln(self.value))

    def log10(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.log10(self.value))

    def exp2(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.exp2(self.value))

    def exp(self) -> "FixedPoint":
        return FixedPoint(value=sd59x18.exp(self.value))

    # -------------------------------------------------------------------------
    # Python-операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: "FixedPoint") -> "FixedPoint":
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "FixedPoint") -> "FixedPoint":
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: "FixedPoint") -> "FixedPoint":
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: "FixedPoint") -> "FixedPoint":
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.div(other)

    def __neg__(self) -> "FixedPoint":
        return self.neg()

    def __abs__(self) -> "FixedPoint":
        return self.abs()

    def __lt__(self, other: "FixedPoint") -> bool:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "FixedPoint") -> bool:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "FixedPoint") -> bool:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "FixedPoint") -> bool:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.value >= other.value

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.value / SCALE

    def __bool__(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        return self.to_decimal_string()


# =============================================================================
# BATCH CONTRACT
# =============================================================================


def dump_batch(values: List[FixedPoint]) -> Dict[str, Any]:
    """Сериализация списка значений в контракт fixed_point_batch."""
    data = {
        "format": CONTRACT_FORMAT,
        "values": [v.to_decimal_string(CANONICAL_FORMAT) for v in values],
    }
    validate_fixed_point_batch(data)
    return data


def load_batch(data: Dict[str, Any]) -> List[FixedPoint]:
    """
    Десериализация контракта fixed_point_batch (порядок сохраняется).

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    validate_fixed_point_batch(data)
    return [FixedPoint.from_decimal_string(text) for text in data["values"]]
