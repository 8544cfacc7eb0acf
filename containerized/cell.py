"""Lazy cells are the injection slots that a container fills.

A cell starts out empty: no container and no value. Container.fill attaches a
container to every cell reachable from an object, and the first access of the
cell resolves its value from that container and caches it.

Cells can be held directly:

class Greeter:
    def __init__(self):
        self.greeting = Containerized(str)

    def greet(self):
        return self.greeting.get()

or declared on the class with inject(), which keeps one cell per instance and
makes attribute access resolve transparently:

class Greeter:
    greeting = inject(str)

    def greet(self):
        return self.greeting
"""

import abc
import copy
import logging
import os
from functools import partial
from threading import RLock
from typing import Any, Callable, Dict, Generic, Optional, Sequence, TypeVar, Union, cast, overload

from .errors import CellNotFilled, ContainerError, MissingConfigValue
from .keys import TypeKey, check_key, key_name
from .model import Resolver

LOG = logging.getLogger(__name__)

T = TypeVar("T")


class _Missing:
    """Marker for a cell without a cached value (None is a valid value)."""

    def __bool__(self):
        return False

    def __repr__(self) -> str:
        return "<missing>"

    def __reduce__(self) -> str:
        # copies and unpickled cells must see the same marker
        return "_MISSING"


_MISSING: Any = _Missing()


class _RaiseKeyError:
    """
    Placeholder to indicate a config cell should raise instead of returning a default.
    DO NOT instantiate this class directly, instead use the `RAISE_KEY_ERROR` singleton.
    """

    def __bool__(self):
        return False


# Placeholder to indicate a config cell should raise instead of returning a default.
RAISE_KEY_ERROR = _RaiseKeyError()


class LazyCell(abc.ABC, Generic[T]):
    """A deferred, memoized value provided by the container that filled the cell."""

    def __init__(self) -> None:
        self._container: Optional[Resolver] = None
        self._value: Any = _MISSING
        self._lock = RLock()
        # id of the instance an Injected descriptor created this cell for
        self._owner: Optional[int] = None

    @abc.abstractmethod
    def _provide(self, container: Resolver) -> T:
        """Produce the value for this cell. Called at most once per cell."""
        ...

    def _attach(self, container: Resolver) -> None:
        self._container = container

    @property
    def container(self) -> Optional[Resolver]:
        """The container that last filled this cell, if any."""
        return self._container

    @property
    def filled(self) -> bool:
        return self._container is not None

    @property
    def resolved(self) -> bool:
        return self._value is not _MISSING

    def get(self) -> T:
        """Return the cell's value, resolving it on first access.

        Raises:
            CellNotFilled: the cell has no value and no container has filled it.
            DependencyNotBound: the filling container has no factory for the key.
        """
        value = self._value
        if value is not _MISSING:
            return value

        with self._lock:
            # another thread may have resolved the cell while we waited
            if self._value is _MISSING:
                container = self._container
                if container is None:
                    raise CellNotFilled(self)
                LOG.debug("resolving %r", self)
                self._value = self._provide(container)
            return self._value

    @property
    def value(self) -> T:
        return self.get()

    def try_get(self, default: Optional[T] = None) -> Optional[T]:
        """Like get, but return default when the value cannot be determined."""
        try:
            return self.get()
        except ContainerError:
            return default

    def set(self, value: T) -> None:
        """Assign a value directly. The container is never consulted afterwards."""
        with self._lock:
            self._value = value

    def __copy__(self) -> "LazyCell[T]":
        """A new cell in the same state: same container, same value if resolved."""
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._lock = RLock()
        return clone

    def __getstate__(self) -> Dict[str, Any]:
        # locks and containers (which hold locks) are not copied or pickled:
        # a restored cell keeps its value but must be filled again
        state = self.__dict__.copy()
        del state["_lock"]
        state["_container"] = None
        return state

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._lock = RLock()

    def _describe(self) -> str:
        return ""

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else ("filled" if self.filled else "empty")
        return f"<{type(self).__name__}[{self._describe()}] {state}>"


class Containerized(LazyCell[T]):
    """A cell resolved with container.resolve(key)."""

    def __init__(self, key: "TypeKey[T]") -> None:
        super().__init__()
        self._key = check_key(key)

    @property
    def key(self) -> "TypeKey[T]":
        return cast("TypeKey[T]", self._key)

    def _provide(self, container: Resolver) -> T:
        return container.resolve(self.key)

    def _describe(self) -> str:
        return key_name(self._key)


class ConfigCell(LazyCell[T]):
    """A cell resolved from the configuration of the filling container."""

    def __init__(
        self,
        keys: Sequence[str],
        default: Union[T, _RaiseKeyError] = RAISE_KEY_ERROR,
        fallback_to_envvar: bool = False,
    ) -> None:
        super().__init__()
        self._keys = tuple(keys)
        self._default = default
        self._fallback_to_envvar = fallback_to_envvar

    @property
    def keys(self) -> Sequence[str]:
        return self._keys

    def _provide(self, container: Resolver) -> T:
        found = container.config.get_nested(self._keys, _MISSING)
        if found is not _MISSING:
            return found
        if self._fallback_to_envvar and len(self._keys) == 1 and self._keys[0] in os.environ:
            return cast(T, os.environ[self._keys[0]])
        if isinstance(self._default, _RaiseKeyError):
            raise MissingConfigValue(".".join(self._keys))
        return self._default

    def _describe(self) -> str:
        return "config:" + ".".join(self._keys)


class Injected(Generic[T]):
    """Class level declaration of a lazy cell that every instance gets its own copy of.

    The cell is stored in the instance __dict__ under the attribute name, so
    the owning class needs a __dict__ (no __slots__ only classes). Reading the
    attribute returns the cell's value and assigning to it sets the value.
    """

    def __init__(self, make_cell: Callable[[], LazyCell[T]]) -> None:
        self._make_cell = make_cell
        self._name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    @property
    def name(self) -> Optional[str]:
        return self._name

    def cell_for(self, obj: Any) -> LazyCell[T]:
        """Return the cell backing this attribute on obj, creating it if needed."""
        if self._name is None:
            raise TypeError("a cell descriptor must be assigned to a class attribute")
        storage = getattr(obj, "__dict__", None)
        if not isinstance(storage, dict):
            raise TypeError(
                f"cell descriptors need instances with a __dict__, {type(obj).__name__} has none"
            )
        cell = storage.get(self._name)
        if cell is None:
            cell = self._make_cell()
            cell._owner = id(obj)
            cell = storage.setdefault(self._name, cell)
        elif cell._owner != id(obj):
            # obj is a shallow copy of the owner and shares its cell
            with cell._lock:
                cell = copy.copy(cell)
            cell._owner = id(obj)
            storage[self._name] = cell
        return cell

    @overload
    def __get__(self, obj: None, owner: Optional[type] = None) -> "Injected[T]": ...

    @overload
    def __get__(self, obj: object, owner: Optional[type] = None) -> T: ...

    def __get__(self, obj, owner=None):
        if obj is None:
            return self
        return self.cell_for(obj).get()

    def __set__(self, obj: Any, value: T) -> None:
        self.cell_for(obj).set(value)

    def __repr__(self) -> str:
        return f"<Injected {self._name}>"


def inject(key: "TypeKey[T]") -> Injected[T]:
    """Declare an attribute whose value is resolved lazily from the filling container."""
    check_key(key)
    return Injected(partial(Containerized, key))


def config_value(
    name: str,
    default: Union[T, _RaiseKeyError] = RAISE_KEY_ERROR,
    fallback_to_envvar: bool = False,
) -> Injected[T]:
    """
    Declare an attribute holding a top level value from the container config.

    Parameters:
        name:
            Name of the configuration value.
        default:
            Value used when name does not exist, use RAISE_KEY_ERROR to fail.
        fallback_to_envvar:
            True to fallback to the same name environment variable if not in config.

    Returns:
        A descriptor whose per-instance ConfigCell resolves once filled.
    """
    return Injected(partial(ConfigCell, (name,), default, fallback_to_envvar))


def nested_config_value(
    keys: Union[Sequence[str], str], default: Union[T, _RaiseKeyError] = RAISE_KEY_ERROR
) -> Injected[T]:
    """
    Declare an attribute holding a nested value from the container config.

    Parameters:
        keys: This can be a sequence of names, or a dotted name like
            "my.nested.config.value". If a name contains a period, pass
            keys as a pre-split sequence.
        default: The default to return if the key does not exist.
            RAISE_KEY_ERROR (the default) makes access raise MissingConfigValue.
    """
    path = keys.split(".") if isinstance(keys, str) else keys
    return Injected(partial(ConfigCell, tuple(path), default))
