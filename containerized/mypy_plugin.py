from functools import partial
from typing import Callable, Optional, Type

from mypy.plugin import ClassDefContext, Plugin
from mypy.plugins import attrs
from packaging import version

# containerized.define is re-exported, mypy reports the defining module
_DEFINE_FULLNAMES = frozenset(
    {
        "containerized.define",
        "containerized.inject_attrs.define",
    }
)


class ContainerizedMypyPlugin(Plugin):
    """
    Makes mypy treat containerized.define exactly like attr.define, so the
    attrs plugin generates the __init__ signature for decorated classes.
    Both hooks mirror what mypy's default plugin registers for attr.define.
    """

    # containerized.define turns slots off
    _slots_default: Optional[bool] = False

    def get_class_decorator_hook(
        self, fullname: str
    ) -> Optional[Callable[[ClassDefContext], None]]:
        if fullname in _DEFINE_FULLNAMES:
            return attrs.attr_tag_callback
        return None

    def get_class_decorator_hook_2(
        self, fullname: str
    ) -> Optional[Callable[[ClassDefContext], bool]]:
        if fullname not in _DEFINE_FULLNAMES:
            return None
        if self._slots_default is None:
            return partial(attrs.attr_class_maker_callback, auto_attribs_default=None)
        # slots default was added in mypy 1.5
        return partial(
            attrs.attr_class_maker_callback,
            auto_attribs_default=None,
            slots_default=self._slots_default,
        )


class ContainerizedMypyPluginLegacy(ContainerizedMypyPlugin):
    _slots_default = None


def plugin(mypy_version: str) -> Type[Plugin]:
    if version.parse(mypy_version) < version.parse("0.6.0"):
        raise ValueError(
            "mypy version must be at least 0.6.0 to use the containerized plugin. "
            f"You are using version {mypy_version}"
        )

    if version.parse(mypy_version) < version.parse("1.5.0"):
        return ContainerizedMypyPluginLegacy

    return ContainerizedMypyPlugin
