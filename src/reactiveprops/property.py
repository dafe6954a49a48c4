"""Assignable properties: sources with a set().

A Property owns no notification logic of its own: whoever writes the value
is responsible for notifying. from_value() and from_setting() provide the
usual writer: a stored value plus an observer list.

Contract on setters: setting a value equal (under the active policy) to the
current one must not notify. two_way_bind() relies on this to settle.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, NamedTuple, TypeVar

from reactiveprops._observers import Observer, ObserverList
from reactiveprops.disposables import DisposableSet, Subscription
from reactiveprops.equality import EqualityPolicy, resolve
from reactiveprops.errors import require
from reactiveprops.operators import select, select_many
from reactiveprops.source import PropertySource, create
from reactiveprops.subscriptions import subscribe

logger = logging.getLogger("reactiveprops.property")

T = TypeVar("T")
R = TypeVar("R")


class Property(PropertySource[T]):
    """A source whose value can also be assigned."""

    __slots__ = ("_source", "_setter")

    def __init__(self, source: PropertySource[T], setter: Callable[[T], None]) -> None:
        self._source = source
        self._setter = setter

    def get(self) -> T:
        return self._source.get()

    def set(self, value: T) -> None:
        self._setter(value)

    value = property(get, set)

    def raw_subscribe(self, observer: Observer) -> Subscription:
        return self._source.raw_subscribe(observer)

    def two_way_bind(self, other: Property[T]) -> Subscription:
        return two_way_bind(self, other)

    def __repr__(self) -> str:
        return f"Property({self.get()!r})"


class SettingData(NamedTuple):
    """Passed to a from_setting() callback on every assignment.

    Call set_and_notify (normally with desired_value) to commit; not calling
    it vetoes the assignment.
    """

    current_value: Any
    desired_value: Any
    set_and_notify: Callable[[Any], None]


class _ValueCell(Generic[T]):
    """Stored value plus the observers to tell when it is committed."""

    __slots__ = ("value", "observers")

    def __init__(self, value: T) -> None:
        self.value = value
        self.observers = ObserverList()

    def get(self) -> T:
        return self.value

    def commit(self, value: T) -> None:
        self.value = value
        self.observers.notify()

    def source(self) -> PropertySource[T]:
        return create(self.observers.add, self.get)


def create_property(source: PropertySource[T], setter: Callable[[T], None]) -> Property[T]:
    """Pair a source with a setter."""
    require(source=source, setter=setter)
    return Property(source, setter)


def from_setting(value: T, set_value: Callable[[SettingData], None]) -> Property[T]:
    """A stored value whose assignments go through set_value.

    Usage:
        def clamp(data):
            data.set_and_notify(max(0, min(100, data.desired_value)))

        volume = from_setting(50, clamp)
        volume.set(120)   # volume.get() == 100
    """
    require(set_value=set_value)
    cell = _ValueCell(value)

    def _setter(desired: T) -> None:
        set_value(SettingData(cell.value, desired, cell.commit))

    return create_property(cell.source(), _setter)


def from_value(
    value: T = None,
    eq: EqualityPolicy | None = None,
    before_change: Callable[[T], None] | None = None,
    after_change: Callable[[T], None] | None = None,
) -> Property[T]:
    """A stored value that notifies when an assignment changes it.

    before_change receives the old value, after_change the new one; both run
    only when eq says the value actually changed, and before observers are
    notified.

    Usage:
        count = from_value(0)
        count.subscribe(print)  # prints 0
        count.set(1)            # prints 1
        count.set(1)            # nothing
    """
    eq = resolve(eq)
    cell = _ValueCell(value)

    def _setter(new_value: T) -> None:
        old_value = cell.value
        if eq(old_value, new_value):
            return
        if before_change is not None:
            before_change(old_value)
        cell.value = new_value
        if after_change is not None:
            after_change(new_value)
        logger.debug("Property changed: %r -> %r", old_value, new_value)
        cell.observers.notify()

    return create_property(cell.source(), _setter)


def bind_to(source: PropertySource[T], target: Property[T]) -> Subscription:
    """Assign every distinct value of source to target, starting now."""
    require(source=source, target=target)
    subscription = subscribe(source, target.set)
    logger.debug("Binding established: %r -> %r", source, target)

    def _teardown() -> None:
        subscription.dispose()
        logger.debug("Binding disposed: %r -> %r", source, target)

    return Subscription(_teardown)


def two_way_bind(first: Property[T], second: Property[T]) -> Subscription:
    """Keep two properties equal, whichever one changes.

    first is bound to second before second is bound to first, so second
    takes first's value initially. Disposing the result tears down both.
    """
    require(first=first, second=second)
    bindings = DisposableSet([bind_to(first, second)])
    try:
        bindings.add(bind_to(second, first))
    except BaseException:
        bindings.dispose()
        raise
    bindings.add(Subscription(
        lambda: logger.debug("Two-way binding disposed: %r <-> %r", first, second)
    ))
    logger.debug("Two-way binding established: %r <-> %r", first, second)
    return bindings


def property_select_many(
    prop: Property[T],
    selector: Callable[[T], Property[R]],
) -> Property[R]:
    """A property that reads and writes whichever property selector picks."""
    require(prop=prop, selector=selector)
    return create_property(
        select_many(prop, selector),
        lambda value: selector(prop.get()).set(value),
    )


def property_select(
    prop: Property[T],
    selector: Callable[[T], R],
    back_selector: Callable[[R], T],
) -> Property[R]:
    """Two-way projection: reads map through selector, writes through back_selector.

    Usage:
        celsius = from_value(20.0)
        fahrenheit = property_select(celsius, lambda c: c * 9 / 5 + 32, lambda f: (f - 32) * 5 / 9)
        fahrenheit.set(212.0)   # celsius.get() == 100.0
    """
    require(prop=prop, selector=selector, back_selector=back_selector)
    return create_property(
        select(prop, selector),
        lambda value: prop.set(back_selector(value)),
    )
