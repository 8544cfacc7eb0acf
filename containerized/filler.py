"""Walks an object graph and attaches a container to every lazy cell in it."""
import logging
import types
import weakref
from collections import deque
from typing import Any, Iterator, List, Optional, Set

from .cell import Injected, LazyCell
from .model import Resolver

LOG = logging.getLogger(__name__)

# Values that never hold cells, and which are not walked into.
_ATOMIC_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    range,
    slice,
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.CodeType,
    types.FrameType,
    *weakref.ProxyTypes,
)

_MISSING = object()


def _injected(cls: type) -> Iterator[Injected]:
    """Yield the inject() descriptors declared on cls and its bases."""
    seen: Set[str] = set()
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, Injected) and attr.name is not None:
                yield attr


def _slot_names(cls: type) -> Iterator[str]:
    """Yield the attribute names of the __slots__ declared on cls and its bases."""
    for klass in cls.__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                # private slots are stored under their mangled name
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            yield slot


def _storage(obj: Any) -> Optional[dict]:
    """Return the instance __dict__ of obj, or None when it has none or it cannot be read."""
    try:
        storage = getattr(obj, "__dict__", None)
    except Exception:  # pylint: disable=broad-except
        LOG.debug("skipping __dict__ of unreadable %s", type(obj).__name__, exc_info=True)
        return None
    return storage if type(storage) is dict else None


def _children(obj: Any, storage: Optional[dict]) -> Iterator[Any]:
    """Yield the values structurally reachable from obj in one step."""
    cls = type(obj)
    if issubclass(cls, dict):
        yield from dict.values(obj)
    elif issubclass(cls, (list, tuple, set, frozenset, deque)):
        try:
            items = list(obj)
        except Exception:  # pylint: disable=broad-except
            LOG.debug("skipping items of unreadable %s", cls.__name__, exc_info=True)
            items = []
        yield from items

    # only storage that already exists is visited: unset slots and
    # functools.cached_property values that were never computed are skipped
    if storage is not None:
        yield from list(storage.values())

    for name in _slot_names(cls):
        try:
            value = getattr(obj, name, _MISSING)
        except Exception:  # pylint: disable=broad-except
            LOG.debug("skipping unreadable slot %s of %s", name, cls.__name__, exc_info=True)
            continue
        if value is not _MISSING:
            yield value


def fill_graph(root: Any, container: Resolver) -> int:
    """Attach container to every lazy cell reachable from root.

    The walk tracks visited objects by identity, so reference cycles are
    safe. Cells are attached but never resolved, and the values of cells are
    not walked. Nodes are classified by their concrete type, so proxies are
    never dereferenced, and attributes that fail to read are skipped: the
    walk itself never raises.

    Parameters:
        root: the object whose graph should be wired.
        container: the container cells should resolve from.
    Returns:
        The number of cells attached.
    """
    attached = 0
    visited: Set[int] = set()
    stack: List[Any] = [root]

    while stack:
        obj = stack.pop()
        cls = type(obj)
        if issubclass(cls, _ATOMIC_TYPES) or issubclass(cls, Resolver):
            continue
        if id(obj) in visited:
            continue
        visited.add(id(obj))

        if issubclass(cls, LazyCell):
            obj._attach(container)
            attached += 1
            continue

        storage = _storage(obj)
        if storage is not None:
            for descriptor in _injected(cls):
                cell = descriptor.cell_for(obj)
                if id(cell) not in visited:
                    visited.add(id(cell))
                    cell._attach(container)
                    attached += 1

        stack.extend(_children(obj, storage))

    LOG.debug("filled %d cell(s) reachable from %s", attached, type(root).__name__)
    return attached
