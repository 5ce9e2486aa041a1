"""Tests for ConfigProperties and property merging."""

from __future__ import annotations

import pytest

from budautoconf import ConfigProperties, ConfigurationError
from budautoconf._internal.config import merge_properties, normalize_key


class TestNormalizeKey:
    """Tests for key normalisation."""

    def test_env_var_and_property_forms_match(self) -> None:
        """Environment variable names map onto dotted property keys."""
        assert normalize_key("OTEL_TRACES_EXPORTER") == "otel.traces.exporter"
        assert normalize_key("otel.traces.exporter") == "otel.traces.exporter"
        assert normalize_key("otel-traces-exporter") == "otel.traces.exporter"


class TestPropertyPrecedence:
    """Tests for the merge order of property sources."""

    def test_environment_wins_over_supplied_and_later_supplier_wins(self) -> None:
        """Ambient environment beats supplied maps; later supplied maps beat earlier ones."""
        supplied = merge_properties([lambda: {"A": "2", "B": "3"}, lambda: {"B": "4"}])
        config = ConfigProperties.create(supplied, environ={"A": "1"})

        assert config.get_string("A") == "1"
        assert config.get_string("B") == "4"

    def test_process_properties_win_over_environment(self) -> None:
        """Process properties have the highest priority."""
        config = ConfigProperties.create(
            {"otel.service.name": "supplied"},
            environ={"OTEL_SERVICE_NAME": "from-env"},
            process_properties={"otel.service.name": "from-process"},
        )
        assert config.get_string("otel.service.name") == "from-process"

    def test_env_key_visible_under_dotted_name(self) -> None:
        """An OTEL_* variable is readable through its property key."""
        config = ConfigProperties.create(environ={"OTEL_LOGS_EXPORTER": "logging"})
        assert config.get_string("otel.logs.exporter") == "logging"

    def test_snapshot_is_not_affected_by_source_changes(self) -> None:
        """The snapshot copies its sources."""
        source = {"otel.service.name": "before"}
        config = ConfigProperties(source)
        source["otel.service.name"] = "after"
        assert config.get_string("otel.service.name") == "before"


class TestTypedGetters:
    """Tests for the typed accessors."""

    def test_get_string_blank_is_missing(self) -> None:
        """Blank values fall back to the default."""
        config = ConfigProperties({"key": "   "})
        assert config.get_string("key") is None
        assert config.get_string("key", "fallback") == "fallback"

    def test_get_bool(self) -> None:
        """Only 'true' (any case) is True."""
        config = ConfigProperties({"a": "TRUE", "b": "yes", "c": "false"})
        assert config.get_bool("a") is True
        assert config.get_bool("b") is False
        assert config.get_bool("c") is False
        assert config.get_bool("missing", default=True) is True

    def test_get_int_and_float(self) -> None:
        """Numbers are parsed; absent keys use the default."""
        config = ConfigProperties({"i": "42", "f": "0.25"})
        assert config.get_int("i") == 42
        assert config.get_float("f") == 0.25
        assert config.get_int("missing", 7) == 7

    def test_get_int_invalid_raises(self) -> None:
        """Unparseable integers raise ConfigurationError naming the key."""
        config = ConfigProperties({"otel.bsp.max.queue.size": "lots"})
        with pytest.raises(ConfigurationError, match="Must be an integer") as exc_info:
            config.get_int("otel.bsp.max.queue.size")
        assert exc_info.value.key == "otel.bsp.max.queue.size"

    def test_get_float_invalid_raises(self) -> None:
        """Unparseable numbers raise ConfigurationError."""
        config = ConfigProperties({"ratio": "half"})
        with pytest.raises(ConfigurationError, match="Must be a number"):
            config.get_float("ratio")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("250", 250), ("250ms", 250), ("5s", 5000), ("2m", 120000), ("1h", 3600000), ("1d", 86400000)],
    )
    def test_get_duration_millis(self, value: str, expected: int) -> None:
        """Durations accept bare milliseconds and unit suffixes."""
        config = ConfigProperties({"d": value})
        assert config.get_duration_millis("d") == expected

    def test_get_duration_invalid_raises(self) -> None:
        """Unknown units raise ConfigurationError."""
        config = ConfigProperties({"d": "5 weeks"})
        with pytest.raises(ConfigurationError, match="Invalid duration"):
            config.get_duration_millis("d")

    def test_get_list(self) -> None:
        """Lists are comma separated with blanks dropped."""
        config = ConfigProperties({"l": " otlp, ,logging "})
        assert config.get_list("l") == ["otlp", "logging"]
        assert config.get_list("missing", ["none"]) == ["none"]

    def test_get_map(self) -> None:
        """Maps are comma separated key=value pairs."""
        config = ConfigProperties({"m": "service.namespace=bud, team = core"})
        assert config.get_map("m") == {"service.namespace": "bud", "team": "core"}
        assert config.get_map("missing") == {}

    def test_get_map_invalid_raises(self) -> None:
        """Entries without '=' are rejected."""
        config = ConfigProperties({"m": "novalue"})
        with pytest.raises(ConfigurationError, match="Invalid map property"):
            config.get_map("m")

    def test_contains_and_as_dict(self) -> None:
        """Membership checks use normalised keys."""
        config = ConfigProperties({"otel.service.name": "svc"})
        assert "OTEL_SERVICE_NAME" in config
        assert config.as_dict() == {"otel.service.name": "svc"}
