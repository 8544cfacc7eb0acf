from typing import Any, Mapping, Optional, Sequence, TypeVar, Union

from .types import _MinimalMappingProtocol

# Unbound, invariant type variable
T = TypeVar("T")

ContainerInitConfig = Mapping[str, Any]


class ContainerConfigWrapper:
    """Manages the configuration of a container."""

    def __init__(self):
        self._impl: ContainerInitConfig = {}

    def _from_dict(self, config_dict: ContainerInitConfig):
        """Configure the container from a dictionary-like mapping.
        The provided mapping should contain general configuration that can
        be read by config cells (see cell.config_value).

        Parameters:
            config_dict: the configuration data to apply.
        """
        self._impl = config_dict

    def __contains__(self, key: str):
        return key in self._impl

    def get(self, key: str, default: Optional[T] = None) -> T:
        return self._impl.get(key, default)

    def __getitem__(self, key: str) -> Any:
        if key not in self._impl:
            raise KeyError(key)
        return self._impl[key]

    def get_nested(self, keys: Union[Sequence[str], str], default: Optional[T] = None) -> T:
        """Walk nested mappings, returning default when any level is missing.

        Parameters:
            keys: a sequence of names, or a dotted name like "db.primary.host".
            default: value returned when the path does not exist.
        """
        path = keys.split(".") if isinstance(keys, str) else keys
        sub: Any = self._impl
        for key in path:
            if isinstance(sub, _MinimalMappingProtocol) and key in sub:
                sub = sub[key]
            else:
                return default
        return sub
