"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей, типов и pattern
"""

import pytest
from jsonschema import ValidationError

from rate_oracle.core.contracts import (
    RateStateValidator,
    RelayMessageValidator,
    SchemaLoader,
    validate_rate_state,
    validate_relay_message,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_rate_state():
    return {
        "rate": "1000000001547125957863212448",
        "index": "1030000000000000000000000000",
        "timestamp": "1700000000",
    }


@pytest.fixture
def valid_relay_message(valid_rate_state):
    return {"schema_version": "1", **valid_rate_state}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Загрузка схем."""

    @pytest.mark.parametrize("name", ["rate_state", "relay_message"])
    def test_schemas_load(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["type"] == "object"

    def test_cache(self):
        loader = SchemaLoader()
        assert loader.load_schema("rate_state") is loader.load_schema("rate_state")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(schema_dir=tmp_path / "nope")

    def test_invalid_schema(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(schema_dir=tmp_path).load_schema("broken")


# =============================================================================
# RATE STATE CONTRACT
# =============================================================================


class TestRateStateContract:
    """rate_state.json."""

    def test_valid(self, valid_rate_state):
        validate_rate_state(valid_rate_state)
        assert RateStateValidator().is_valid(valid_rate_state)

    @pytest.mark.parametrize("field", ["rate", "index", "timestamp"])
    def test_required(self, valid_rate_state, field):
        del valid_rate_state[field]
        with pytest.raises(ValidationError):
            validate_rate_state(valid_rate_state)

    @pytest.mark.parametrize("value", ["-1", "1.5", "1e27", "", " 1"])
    def test_pattern(self, valid_rate_state, value):
        valid_rate_state["rate"] = value
        assert not RateStateValidator().is_valid(valid_rate_state)

    def test_iter_errors_collects_all(self):
        errors = list(RateStateValidator().iter_errors({"rate": 1}))
        # rate неверного типа + два отсутствующих поля
        assert len(errors) == 3


# =============================================================================
# RELAY MESSAGE CONTRACT
# =============================================================================


class TestRelayMessageContract:
    """relay_message.json."""

    def test_valid(self, valid_relay_message):
        validate_relay_message(valid_relay_message)

    def test_schema_version_const(self, valid_relay_message):
        valid_relay_message["schema_version"] = "2"
        with pytest.raises(ValidationError):
            validate_relay_message(valid_relay_message)

    def test_timestamp_too_long(self, valid_relay_message):
        valid_relay_message["timestamp"] = "1" * 14
        assert not RelayMessageValidator().is_valid(valid_relay_message)
