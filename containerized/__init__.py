"""
The Container lets objects declare dependencies without receiving them
through their constructors.

Bind a factory for a key (a class, or a Token for values without a class
of their own), then declare lazy cells on the objects that need it:

from containerized import Container, inject

class Greeter:
    greeting = inject(str)

    def greet(self):
        return self.greeting

container = Container()
container.bind(str, lambda: "Hello, World")

greeter = Greeter()
container.fill(greeter)
greeter.greet()  # "Hello, World"

fill walks the object graph and attaches the container to every cell it
finds, including cells of nested objects. Nothing is resolved at that point:
each cell calls container.resolve on first access and caches the result.
Objects produced by container.resolve are filled before they are returned,
so dependency chains wire themselves without any object knowing about its
dependencies' dependencies.

A factory decides lifetime: return a captured object for a singleton, or
build a new object per call. Assigning to a cell (greeter.greeting = "hi")
overrides whatever the container would have produced.

Values can also come from the container config:

class Client:
    url = config_value("API_URL", fallback_to_envvar=True)
"""

__version__ = "1.0.0"

from .cell import (
    RAISE_KEY_ERROR,
    ConfigCell,
    Containerized,
    Injected,
    LazyCell,
    config_value,
    inject,
    nested_config_value,
)
from .container import Container, initialize
from .errors import CellNotFilled, ContainerError, DependencyNotBound, MissingConfigValue
from .inject_attrs import cell_field, define
from .keys import Token

__all__ = [
    "CellNotFilled",
    "cell_field",
    "config_value",
    "ConfigCell",
    "Container",
    "ContainerError",
    "Containerized",
    "define",
    "DependencyNotBound",
    "initialize",
    "inject",
    "Injected",
    "LazyCell",
    "MissingConfigValue",
    "nested_config_value",
    "RAISE_KEY_ERROR",
    "Token",
]
