import abc
from typing import TYPE_CHECKING, Any, TypeVar

from .keys import TypeKey  # pylint: disable=unused-import

if TYPE_CHECKING:
    from .config import ContainerConfigWrapper

T = TypeVar("T")


class Resolver(abc.ABC):
    """
    Interface capable of resolving keys into instances and wiring object graphs.
    This interface primarily exists as a way to create a forward reference to Container,
    so lazy cells can hold one without importing the container module.
    """

    @abc.abstractmethod
    def resolve(self, key: "TypeKey[T]") -> T:
        ...

    @abc.abstractmethod
    def fill(self, obj: Any) -> None:
        ...

    @property
    @abc.abstractmethod
    def config(self) -> "ContainerConfigWrapper":
        ...
