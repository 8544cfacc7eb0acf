from typing import Any

from .keys import key_name


class ContainerError(Exception):
    """Base class for all errors raised by containerized."""


class DependencyNotBound(ContainerError, KeyError):
    """No factory has been bound for the requested key."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no dependency bound for {key_name(self.key)}"


class CellNotFilled(ContainerError):
    """A lazy cell was accessed before any container filled it."""

    def __init__(self, cell: Any) -> None:
        super().__init__(cell)
        self.cell = cell

    def __str__(self) -> str:
        return f"{self.cell!r} was accessed before it was filled by a container"


class MissingConfigValue(ContainerError, KeyError):
    """A config cell found no value and has no default."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no config value for {self.key!r}"
