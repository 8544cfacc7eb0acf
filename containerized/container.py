"""The Container binds factories to keys, resolves them, and fills lazy cells."""
import logging
from typing import Any, Callable, Optional, TypeVar, overload

from .config import ContainerConfigWrapper, ContainerInitConfig
from .errors import DependencyNotBound
from .filler import fill_graph
from .keys import TypeKey, key_name
from .model import Resolver
from .registry import Registry

LOG = logging.getLogger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[[], Any])


def initialize(config: Optional[ContainerInitConfig] = None) -> "Container":
    """Initialize a new container instance."""
    LOG.debug("initializing a new container instance")
    return Container(config)


class Container(Resolver):
    """Resolution authority for every lazy cell it fills."""

    def __init__(self, config: Optional[ContainerInitConfig] = None) -> None:
        self._registry = Registry()
        self._config = ContainerConfigWrapper()

        if config is not None:
            self._config._from_dict(config)

    @property
    def config(self) -> ContainerConfigWrapper:
        return self._config

    @property
    def registry(self) -> Registry:
        return self._registry

    @overload
    def bind(self, key: "TypeKey[T]", factory: Callable[[], T]) -> None: ...

    @overload
    def bind(self, key: "TypeKey[T]", factory: None = None) -> Callable[[F], F]: ...

    def bind(self, key, factory=None):
        """Bind a zero-argument factory producing the value for key.

        A later bind for the same key replaces the earlier one. Return the
        same object from every call of the factory for a singleton, or build
        a new one per call for a fresh instance per resolve.

        Called without a factory, bind returns a decorator:

        @container.bind(Greeting)
        def make_greeting():
            return Greeting("hello")
        """
        if factory is None:

            def wrap(func: F) -> F:
                self._registry.bind(key, func)
                return func

            return wrap

        self._registry.bind(key, factory)
        return None

    def resolve(self, key: "TypeKey[T]") -> T:
        """Build the value bound for key and fill its lazy cells from this container.

        Raises:
            DependencyNotBound: no factory is bound for key.
        """
        factory = self._registry.lookup(key)
        if factory is None:
            raise DependencyNotBound(key)

        LOG.debug("resolving %s", key_name(key))
        instance = factory()
        self.fill(instance)
        return instance

    def get(self, key: "TypeKey[T]", default: Optional[T] = None) -> Optional[T]:
        """Like resolve, but return default when key is not bound."""
        try:
            return self.resolve(key)
        except DependencyNotBound as ex:
            if ex.key != key:
                # a nested resolve failed, not this one
                raise
            return default

    def fill(self, obj: Any) -> None:
        """Attach this container to every lazy cell reachable from obj.

        Cells resolve from this container on first access. Values that are
        only computed on demand (functools.cached_property, slots that are not
        set yet) do not exist at fill time and are not wired.
        """
        fill_graph(obj, self)

    def __contains__(self, key: Any) -> bool:
        """Check whether a factory is bound for key."""
        return key in self._registry

    def __getitem__(self, key: "TypeKey[T]") -> T:
        return self.resolve(key)

    def __setitem__(self, key: "TypeKey[T]", value: T) -> None:
        """Bind key to a factory that always returns value."""
        self.bind(key, lambda: value)

    def __repr__(self) -> str:
        return f"<Container bindings={len(self._registry)}>"
