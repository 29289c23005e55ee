"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных fixed-point значений.
"""

from .validators import (
    ContractValidator,
    FixedPointBatchValidator,
    FixedPointValidator,
    SchemaLoader,
    validate_fixed_point,
    validate_fixed_point_batch,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FixedPointValidator",
    "FixedPointBatchValidator",
    # Functions
    "validate_fixed_point",
    "validate_fixed_point_batch",
]
