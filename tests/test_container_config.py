from unittest import mock

import pytest

from containerized import (
    Container,
    MissingConfigValue,
    config_value,
    initialize,
    nested_config_value,
)
from containerized.config import ContainerConfigWrapper


class Configurable:
    required = config_value("REQUIRED")
    optional = config_value("OPTIONAL", default=None)
    envvar = config_value("ENVVAR", fallback_to_envvar=True)
    host = nested_config_value("db.primary.host")
    port = nested_config_value(["db", "primary", "port"], default=5432)


def _filled(config) -> Configurable:
    configurable = Configurable()
    initialize(config).fill(configurable)
    return configurable


def test_config_simple() -> None:
    configurable = _filled(
        {
            "REQUIRED": 1,
            "OPTIONAL": 2,
            "ENVVAR": 3,
            "db": {"primary": {"host": "db.local", "port": 6432}},
        }
    )

    assert configurable.required == 1
    assert configurable.optional == 2
    assert configurable.envvar == 3
    assert configurable.host == "db.local"
    assert configurable.port == 6432


def test_config_required() -> None:
    configurable = _filled({"OPTIONAL": 2})

    with pytest.raises(MissingConfigValue):
        _ = configurable.required
    with pytest.raises(KeyError):
        _ = configurable.host


def test_config_optional() -> None:
    configurable = _filled({"REQUIRED": 1, "db": {"primary": {"host": "db.local"}}})

    assert configurable.optional is None
    assert configurable.port == 5432


def test_config_envvar() -> None:
    configurable = _filled({"REQUIRED": 1})

    with mock.patch.dict("os.environ", {"ENVVAR": "value"}):
        assert configurable.envvar == "value"


def test_config_envvar_missing() -> None:
    configurable = _filled({})

    with mock.patch.dict("os.environ", {}, clear=True):
        with pytest.raises(MissingConfigValue):
            _ = configurable.envvar


def test_config_memoized() -> None:
    config = {"REQUIRED": "first"}
    configurable = _filled(config)

    assert configurable.required == "first"
    config["REQUIRED"] = "second"
    assert configurable.required == "first"


def test_config_assignment_overrides() -> None:
    configurable = Configurable()
    configurable.required = "assigned"
    Container().fill(configurable)

    assert configurable.required == "assigned"


def test_wrapper() -> None:
    wrapper = ContainerConfigWrapper()
    wrapper._from_dict({"a": {"b": {"c": 1}}, "empty": None})

    assert "a" in wrapper
    assert "missing" not in wrapper
    assert wrapper["empty"] is None
    assert wrapper.get("missing", 2) == 2
    assert wrapper.get_nested("a.b.c") == 1
    assert wrapper.get_nested(["a", "b"]) == {"c": 1}
    assert wrapper.get_nested("a.x.c", "default") == "default"
    assert wrapper.get_nested("a.b.c.d") is None
    with pytest.raises(KeyError):
        _ = wrapper["missing"]
