"""The Registry is the storage behind a container: one factory per key."""
import functools
import logging
from threading import RLock
from typing import Any, Callable, Dict, Hashable, Optional, TypeVar

from typing_extensions import Concatenate, ParamSpec

from .keys import check_key, key_name
from .types import Factory

LOG = logging.getLogger(__name__)

R = TypeVar("R")
P = ParamSpec("P")


def _synchronized(
    func: Callable[Concatenate["Registry", P], R]
) -> Callable[Concatenate["Registry", P], R]:
    """Decorator to synchronize method access with a reentrant lock."""

    @functools.wraps(func)
    def wrapper(self: "Registry", *args: P.args, **kwargs: P.kwargs) -> R:
        with self._lock:
            return func(self, *args, **kwargs)

    return wrapper


class Registry:
    """Maps keys to the zero-argument factories bound for them.

    The registry only stores factories, it never calls them.
    """

    def __init__(self) -> None:
        self._factories: Dict[Hashable, Factory] = {}
        self._lock = RLock()

    @_synchronized
    def bind(self, key: Any, factory: Factory) -> None:
        """Store a factory for a key, replacing any factory bound before.

        Parameters:
            key: a class or Token identifying what the factory produces.
            factory: zero-argument callable producing the value.
        Raises:
            TypeError: if the key is invalid or the factory is not callable.
        """
        check_key(key)
        if not callable(factory):
            raise TypeError(f"factory for {key_name(key)} must be callable, got {factory!r}")

        if key in self._factories:
            LOG.debug("rebinding %s (last bind wins)", key_name(key))
        else:
            LOG.debug("binding %s", key_name(key))
        self._factories[key] = factory

    @_synchronized
    def lookup(self, key: Any) -> Optional[Factory]:
        """Return the factory bound for key, or None."""
        check_key(key)
        return self._factories.get(key)

    @_synchronized
    def __contains__(self, key: Any) -> bool:
        try:
            check_key(key)
        except TypeError:
            # nothing can be bound under an invalid key
            return False
        return key in self._factories

    @_synchronized
    def __len__(self) -> int:
        return len(self._factories)
