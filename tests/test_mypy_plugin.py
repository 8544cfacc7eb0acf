import pytest
from mypy.options import Options
from mypy.plugins import attrs

from containerized.mypy_plugin import (
    ContainerizedMypyPlugin,
    ContainerizedMypyPluginLegacy,
    plugin,
)


def test_plugin_version_gate() -> None:
    with pytest.raises(ValueError):
        plugin("0.5.0")

    assert plugin("1.4.1") is ContainerizedMypyPluginLegacy
    assert plugin("1.5.0") is ContainerizedMypyPlugin
    assert plugin("1.10.0") is ContainerizedMypyPlugin


def test_hooks() -> None:
    instance = ContainerizedMypyPlugin(Options())

    assert instance.get_class_decorator_hook("containerized.define") is attrs.attr_tag_callback
    assert instance.get_class_decorator_hook("attr.define") is None
    assert instance.get_class_decorator_hook_2("attr.define") is None

    maker = instance.get_class_decorator_hook_2("containerized.inject_attrs.define")
    assert maker is not None
    assert maker.keywords["slots_default"] is False


def test_legacy_hooks() -> None:
    instance = ContainerizedMypyPluginLegacy(Options())

    maker = instance.get_class_decorator_hook_2("containerized.define")
    assert maker is not None
    assert "slots_default" not in maker.keywords
