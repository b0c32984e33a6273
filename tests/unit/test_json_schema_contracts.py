"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Детекция нарушений constraints (min/max/enum)
- Интеграция с Pydantic моделями и загрузкой конфигурации
"""

import json

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from mparith.core.contracts import (
    SchemaLoader,
    parse_bignum_record,
    validate_bignum_record,
    validate_mp_config,
)
from mparith.core.domain.bignum import Bignum
from mparith.core.domain.config import load_config
from mparith.core.math.conversions import bignum_to_record, record_to_bignum, string_to_mp


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_record():
    """Валидный bignum_record (π, 3 цифры)."""
    return {"sign": "+", "exponent": 0, "digits": [3, 1415926, 5358979]}


@pytest.fixture
def valid_config():
    """Валидный mp_config."""
    return {
        "long_digits": 5,
        "longlong_digits": 8,
        "int_bits": 32,
        "bits_radix_bits": 23,
        "max_exponent": 1000,
        "arena_limit_digits": 100000,
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    @pytest.mark.parametrize("name", ["bignum_record", "mp_config"])
    def test_packaged_schemas_load(self, name) -> None:
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schemas_are_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("mp_config") is loader.load_schema("mp_config")

    def test_validator_shared_per_loader(self) -> None:
        loader = SchemaLoader()
        validator = loader.validator("bignum_record")
        assert validator is loader.validator("bignum_record")
        assert validator.schema is loader.load_schema("bignum_record")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_unknown_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_contract")

    def test_invalid_schema_rejected(self, tmp_path) -> None:
        """Схема, не проходящая meta-validation"""
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# BIGNUM RECORD
# =============================================================================


class TestBignumRecordContract:
    """Тесты контракта bignum_record"""

    def test_valid(self, valid_record) -> None:
        validate_bignum_record(valid_record)
        assert SchemaLoader().validator("bignum_record").is_valid(valid_record)

    def test_canonical_zero_valid(self) -> None:
        validate_bignum_record({"sign": "+", "exponent": 0, "digits": [0]})

    @pytest.mark.parametrize("field", ["sign", "exponent", "digits"])
    def test_missing_required(self, valid_record, field) -> None:
        del valid_record[field]
        with pytest.raises(ValidationError, match=field):
            validate_bignum_record(valid_record)

    def test_digit_out_of_range(self, valid_record) -> None:
        valid_record["digits"][1] = 10_000_000
        with pytest.raises(ValidationError):
            validate_bignum_record(valid_record)

    def test_bad_sign(self, valid_record) -> None:
        valid_record["sign"] = "plus"
        with pytest.raises(ValidationError):
            validate_bignum_record(valid_record)

    def test_empty_digits(self, valid_record) -> None:
        valid_record["digits"] = []
        assert not SchemaLoader().validator("bignum_record").is_valid(valid_record)

    def test_extra_field(self, valid_record) -> None:
        valid_record["radix"] = 10
        with pytest.raises(ValidationError):
            validate_bignum_record(valid_record)

    def test_iter_errors_collects_all(self) -> None:
        data = {"sign": "?", "exponent": "zero", "digits": [-1]}
        errors = list(SchemaLoader().validator("bignum_record").iter_errors(data))
        assert len(errors) == 3


class TestParseBignumRecord:
    """Тесты parse_bignum_record: схема, затем инварианты модели"""

    def test_parse(self, valid_record) -> None:
        record = parse_bignum_record(valid_record)
        assert record.digits == [3, 1415926, 5358979]
        assert record.sign == "+"

    def test_schema_error_first(self, valid_record) -> None:
        valid_record["exponent"] = 1.5
        with pytest.raises(ValidationError):
            parse_bignum_record(valid_record)

    def test_non_canonical_zero(self) -> None:
        """Схема пропускает, модель отклоняет ведущий ноль"""
        data = {"sign": "+", "exponent": 0, "digits": [0, 5]}
        assert SchemaLoader().validator("bignum_record").is_valid(data)
        with pytest.raises(PydanticValidationError, match="leading digit is zero"):
            parse_bignum_record(data)

    def test_negative_zero(self) -> None:
        with pytest.raises(PydanticValidationError, match="zero must have exponent 0"):
            parse_bignum_record({"sign": "-", "exponent": 0, "digits": [0]})

    def test_document_round_trip(self, ctx) -> None:
        """Bignum → JSON документ → Bignum"""
        x = string_to_mp(ctx, Bignum.empty(3), "-2.5e-9", 3)
        document = json.loads(bignum_to_record(ctx, x, 3).model_dump_json())
        validate_bignum_record(document)

        z = record_to_bignum(ctx, Bignum.empty(3), parse_bignum_record(document), 3)
        assert z.digits == x.digits
        assert z.exponent == x.exponent
        assert z.negative


# =============================================================================
# MP CONFIG
# =============================================================================


class TestMPConfigContract:
    """Тесты контракта mp_config"""

    def test_valid(self, valid_config) -> None:
        validate_mp_config(valid_config)
        assert SchemaLoader().validator("mp_config").is_valid(valid_config)

    def test_empty_document_uses_defaults(self) -> None:
        validate_mp_config({})

    @pytest.mark.parametrize(
        "field, value",
        [
            ("int_bits", 4),
            ("int_bits", 2048),
            ("bits_radix_bits", 24),
            ("long_digits", 1),
            ("max_exponent", 0),
            ("arena_limit_digits", -5),
        ],
    )
    def test_constraint_violations(self, valid_config, field, value) -> None:
        valid_config[field] = value
        with pytest.raises(ValidationError):
            validate_mp_config(valid_config)

    def test_unknown_field(self, valid_config) -> None:
        valid_config["radix"] = 100
        with pytest.raises(ValidationError):
            validate_mp_config(valid_config)


class TestLoadConfig:
    """Тесты загрузки конфигурации из файла"""

    def test_load(self, tmp_path, valid_config) -> None:
        path = tmp_path / "mp.json"
        path.write_text(json.dumps(valid_config), encoding="utf-8")
        config = load_config(path)
        assert config.int_bits == 32
        assert config.long_digits == 5
        assert config.int_max == 2**31 - 1

    def test_load_str_path(self, tmp_path) -> None:
        path = tmp_path / "mp.json"
        path.write_text("{}", encoding="utf-8")
        assert load_config(str(path)).int_bits == 64

    @pytest.mark.parametrize("field, value", [("int_bits", 4), ("bits_radix_bits", 24)])
    def test_load_invalid(self, tmp_path, valid_config, field, value) -> None:
        valid_config[field] = value
        path = tmp_path / "mp.json"
        path.write_text(json.dumps(valid_config), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)
