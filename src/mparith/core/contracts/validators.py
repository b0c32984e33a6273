"""
JSON Schema Contract Validators

Проверка JSON документов движка по схемам (jsonschema, Draft 2020-12).

Схемы (каталог schema/ рядом с модулем):
- bignum_record.json — сериализованное значение
- mp_config.json — конфигурация движка
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

from mparith.core.domain.record import BignumRecord


class SchemaLoader:
    """
    Загрузчик схем из package data с кэшем валидаторов.

    Args:
        schema_dir: Каталог схем (по умолчанию schema/ рядом с модулем)

    Raises:
        RuntimeError: Каталог не существует
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема schema_name.json после meta-validation.

        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema

    def validator(self, schema_name: str) -> Draft202012Validator:
        """Валидатор схемы schema_name, один на загрузчик."""
        if schema_name not in self._validators:
            self._validators[schema_name] = Draft202012Validator(self.load_schema(schema_name))
        return self._validators[schema_name]


_SCHEMA_LOADER = SchemaLoader()


def validate_bignum_record(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Документ не соответствует bignum_record
    """
    _SCHEMA_LOADER.validator("bignum_record").validate(data)


def validate_mp_config(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Документ не соответствует mp_config
    """
    _SCHEMA_LOADER.validator("mp_config").validate(data)


def parse_bignum_record(data: Dict[str, Any]) -> BignumRecord:
    """
    JSON документ → BignumRecord: сначала схема, затем инварианты модели.

    Raises:
        jsonschema.ValidationError: Документ не соответствует схеме
        pydantic.ValidationError: Нарушена каноническая форма нуля
    """
    validate_bignum_record(data)
    return BignumRecord(**data)
