from typing import Any, Callable, TypeVar

from typing_extensions import Protocol, TypeAlias, runtime_checkable

# A zero-argument callable producing the value bound to a key.
Factory: TypeAlias = Callable[[], Any]

# MinimalMapping key
K_contra = TypeVar("K_contra", contravariant=True)
# MinimalMapping value
V_co = TypeVar("V_co", covariant=True)


@runtime_checkable
class _MinimalMappingProtocol(Protocol[K_contra, V_co]):
    """
    Defines the minimum methods needed for the dict-like objects walked by nested config lookups.
    """

    def __getitem__(self, key: K_contra) -> V_co: ...

    def __contains__(self, key: K_contra) -> bool: ...
