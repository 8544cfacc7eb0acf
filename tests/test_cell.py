import time
from concurrent.futures import ThreadPoolExecutor

import pytest

import tests.test_container_helpers as helpers
from containerized import (
    CellNotFilled,
    Container,
    Containerized,
    DependencyNotBound,
    Injected,
    Token,
    inject,
)


def test_unfilled_cell() -> None:
    cell = Containerized(str)

    assert not cell.filled
    assert not cell.resolved
    with pytest.raises(CellNotFilled):
        cell.get()
    with pytest.raises(CellNotFilled):
        _ = cell.value


def test_try_get() -> None:
    cell = Containerized(str)
    assert cell.try_get() is None
    assert cell.try_get("fallback") == "fallback"

    container = Container()
    container.fill(cell)
    assert cell.try_get("unbound") == "unbound"

    container.bind(str, lambda: "bound")
    assert cell.try_get("fallback") == "bound"


def test_try_get_propagates_factory_errors() -> None:
    def broken():
        raise RuntimeError("boom")

    container = Container()
    container.bind(str, broken)
    cell = Containerized(str)
    container.fill(cell)

    with pytest.raises(RuntimeError):
        cell.try_get("fallback")
    assert not cell.resolved


def test_set_without_container() -> None:
    cell = Containerized(str)
    cell.set("assigned")

    assert cell.resolved
    assert not cell.filled
    assert cell.get() == "assigned"


def test_none_is_a_value() -> None:
    factory = helpers.CountingFactory(None)
    container = Container()
    key = Token("none")
    container.bind(key, factory)
    cell = Containerized(key)
    container.fill(cell)

    assert cell.get() is None
    assert cell.get() is None
    assert factory.calls == 1


def test_unbound_key() -> None:
    container = Container()
    cell = Containerized(helpers.Widget)
    container.fill(cell)

    with pytest.raises(DependencyNotBound) as ctx:
        cell.get()
    assert ctx.value.key is helpers.Widget


def test_repr() -> None:
    cell = Containerized(helpers.Widget)
    assert repr(cell) == "<Containerized[tests.test_container_helpers.Widget] empty>"

    Container().fill(cell)
    assert repr(cell) == "<Containerized[tests.test_container_helpers.Widget] filled>"

    cell.set(helpers.Widget())
    assert repr(cell) == "<Containerized[tests.test_container_helpers.Widget] resolved>"


def test_invalid_key() -> None:
    with pytest.raises(TypeError):
        Containerized("str")
    with pytest.raises(TypeError):
        Containerized([])
    with pytest.raises(TypeError):
        inject("str")


def test_concurrent_first_access() -> None:
    """The factory runs once even when many threads access a cell at the same time."""
    calls = []

    def slow_widget():
        calls.append(1)
        time.sleep(0.05)
        return helpers.Widget()

    container = Container()
    container.bind(helpers.Widget, slow_widget)
    holder = helpers.WidgetHolder()
    container.fill(holder)

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: holder.widget, range(32)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)


def test_descriptor_class_access() -> None:
    assert isinstance(helpers.Greeter.greeting, Injected)
    assert helpers.Greeter.greeting.name == "greeting"


def test_descriptor_stores_cell_per_instance() -> None:
    first = helpers.Greeter()
    second = helpers.Greeter()

    first_cell = helpers.Greeter.greeting.cell_for(first)
    assert isinstance(first_cell, Containerized)
    assert first_cell is helpers.Greeter.greeting.cell_for(first)
    assert first_cell is vars(first)["greeting"]
    assert first_cell is not helpers.Greeter.greeting.cell_for(second)


def test_descriptor_needs_dict() -> None:
    class SlotsOnly:
        __slots__ = ()
        greeting = inject(str)

    with pytest.raises(TypeError):
        _ = SlotsOnly().greeting

    # filling never fails, the descriptor is just skipped
    Container().fill(SlotsOnly())


def test_inherited_descriptor() -> None:
    class LoudGreeter(helpers.Greeter):
        def greet(self):
            return super().greet().upper()

    container = Container()
    container.bind(str, lambda: "hello")
    greeter = LoudGreeter()
    container.fill(greeter)

    assert greeter.greet() == "HELLO"
