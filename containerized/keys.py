"""Keys identify what a factory produces.

A key is usually a class. Classes compare by identity, so two unrelated classes
that happen to share a name never collide. For values that have no class of
their own (a greeting string, a base URL), construct a Token:

GREETING: Token[str] = Token("greeting")
container.bind(GREETING, lambda: "Hello")

Tokens also compare by identity; the name is only used in messages.
"""

from typing import Any, Generic, Hashable, Type, TypeVar, Union

from typing_extensions import TypeAlias

T = TypeVar("T")


class Token(Generic[T]):
    """An explicitly constructed key for a value of type T."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Token({self._name!r})"


TypeKey: TypeAlias = "Union[Type[T], Token[T]]"


def check_key(key: Any) -> Hashable:
    """Validate a key and return it unchanged.

    Raises:
        TypeError: if the key is a string or cannot be hashed.
    """
    if isinstance(key, str):
        raise TypeError(
            f"string keys are not supported ({key!r}); bind a class or a Token instead"
        )
    try:
        hash(key)
    except TypeError:
        raise TypeError(f"key must be hashable: {key!r}") from None
    return key


def key_name(key: Any) -> str:
    """Human readable name for a key."""
    if isinstance(key, type):
        if key.__module__ == "builtins":
            return key.__qualname__
        return f"{key.__module__}.{key.__qualname__}"
    return repr(key)
