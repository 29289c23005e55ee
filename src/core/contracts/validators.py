"""
JSON Schema Contract Validators

Модуль для валидации сериализованных fixed-point значений согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- fixed_point.json: одно SD59x18 значение в канонической десятичной записи
- fixed_point_batch.json: упорядоченный список SD59x18 значений
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

_log = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Корень проекта: 4 уровня вверх от этого файла
        if schema_dir is None:
            schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        self._schema_dir = schema_dir
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'fixed_point')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        try:
            self.validator.validate(data)
        except ValidationError as e:
            _log.debug("%s contract rejected: %s", self.schema_name, e.message)
            raise

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class FixedPointValidator(ContractValidator):
    """Валидатор для fixed_point контракта."""

    def __init__(self):
        super().__init__("fixed_point")


class FixedPointBatchValidator(ContractValidator):
    """Валидатор для fixed_point_batch контракта."""

    def __init__(self):
        super().__init__("fixed_point_batch")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_fixed_point(data: Dict[str, Any]) -> None:
    """
    Валидация fixed_point данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    FixedPointValidator().validate(data)


def validate_fixed_point_batch(data: Dict[str, Any]) -> None:
    """
    Валидация fixed_point_batch данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    FixedPointBatchValidator().validate(data)
