"""attrs support: declare lazy cells as attrs fields.

@define
class Greeter:
    greeting: Containerized[str] = cell_field(str)

Greeter() gets a fresh, empty cell. Greeter(greeting="hi") gets a cell that
was assigned "hi" and never consults a container.
"""
from functools import partial
from typing import Any, Dict, Optional, Type, TypeVar

from attr import define as attr_define, field

from .cell import Containerized, LazyCell
from .keys import TypeKey, check_key

_T = TypeVar("_T")
_P = TypeVar("_P")

_DEFINE_KWARGS_DEFAULT_VAL: Dict[str, Any] = {}


# Only __init__ is generated. Slots stay off so inject() descriptors can keep
# their cells in the instance __dict__, and eq/hash stay off so instances
# holding cells compare by identity. Every flag exists in attrs 21.3.0.
_ATTRS_DEFINE_INIT_ONLY: Dict[str, bool] = {
    "init": True,
    "repr": False,
    "str": False,
    "slots": False,
    "frozen": False,
    "weakref_slot": False,
    "eq": False,
    "order": False,
    "match_args": False,
}


def _to_cell(key: Any, value: Any) -> LazyCell:
    if isinstance(value, LazyCell):
        return value
    cell: Containerized = Containerized(key)
    cell.set(value)
    return cell


def cell_field(key: "TypeKey[_T]", **attr_field_kwargs) -> Any:
    """
    Wrapper around attr.field for a Containerized cell resolving key.

    Each instance gets its own cell. A non-cell value passed for the field
    is stored as the directly assigned value of a new cell.
    """
    check_key(key)
    attr_field_kwargs.setdefault("factory", partial(Containerized, key))
    return field(converter=partial(_to_cell, key), **attr_field_kwargs)


def define(
    maybe_cls: Optional[Type[_T]] = None,
    define_kwargs: Dict[str, Any] = _DEFINE_KWARGS_DEFAULT_VAL,
):
    """attr.define that generates only __init__ unless define_kwargs says otherwise."""
    attrs_kwargs: Dict[str, Any] = {}
    if define_kwargs is not _DEFINE_KWARGS_DEFAULT_VAL:
        attrs_kwargs = define_kwargs
    else:
        attrs_kwargs = dict(_ATTRS_DEFINE_INIT_ONLY)

    def define_inner(cls: Type[_P]) -> Type[_P]:
        return attr_define(cls, **attrs_kwargs)

    if maybe_cls is None:
        return define_inner

    return define_inner(maybe_cls)
