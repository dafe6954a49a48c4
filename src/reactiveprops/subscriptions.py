"""Subscription helpers: deliver values instead of bare change signals.

subscribe() is the everyday entry point: the observer gets the current
value right away, then once per distinct change. The other helpers are
variations on it (old/new pairs, several sources at once, named change
events, value streams).
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Sequence, TypeVar

from reactiveprops.disposables import Subscription
from reactiveprops.equality import EqualityPolicy, tuple_equality
from reactiveprops.errors import require
from reactiveprops.operators import distinct, eager, merge, merge3
from reactiveprops.source import PropertySource
from reactiveprops.stream import EventStream

T = TypeVar("T")


class ChangeInfo(NamedTuple):
    """Previous and current value, passed by subscribe_to_changes()."""

    old: Any
    new: Any


def subscribe(
    source: PropertySource[T],
    observer: Callable[[T], None],
    eq: EqualityPolicy | None = None,
) -> Subscription:
    """Call observer with the value now, then on every distinct change.

    Usage:
        theme = from_value("light")
        sub = subscribe(theme, apply_theme)   # apply_theme("light")
        theme.set("dark")                     # apply_theme("dark")
        theme.set("dark")                     # nothing
        sub.dispose()
    """
    require(source=source, observer=observer)
    return distinct(eager(source), eq).raw_subscribe(lambda: observer(source.get()))


def subscribe_to_changes(
    source: PropertySource[T],
    observer: Callable[[ChangeInfo], None],
    eq: EqualityPolicy | None = None,
    default: Any = None,
) -> Subscription:
    """Like subscribe(), but observer gets ChangeInfo(old, new).

    The first call reports ``old=default``; pass the zero value of your
    type (0, "", ...) if None is not what callers expect.
    """
    require(source=source, observer=observer)
    previous = default

    def _on_value(value: T) -> None:
        nonlocal previous
        change = ChangeInfo(previous, value)
        previous = value
        observer(change)

    return subscribe(source, _on_value, eq)


def _comparers(comparers: Sequence[EqualityPolicy | None] | None, count: int) -> EqualityPolicy:
    if comparers is None:
        comparers = (None,) * count
    if len(comparers) != count:
        raise ValueError(f"expected {count} comparers, got {len(comparers)}")
    return tuple_equality(*comparers)


def merge_subscribe(
    left: PropertySource,
    right: PropertySource,
    observer: Callable[[Any, Any], None],
    comparers: Sequence[EqualityPolicy | None] | None = None,
) -> Subscription:
    """subscribe() to two sources at once.

    observer(left_value, right_value) runs now and whenever either value
    changes according to its comparer (default equality for None entries).
    It always receives the latest value of both sources.
    """
    require(left=left, right=right, observer=observer)
    eq = _comparers(comparers, 2)
    merged = merge(left, right, lambda lv, rv: (lv, rv))
    return subscribe(merged, lambda values: observer(*values), eq)


def merge_subscribe3(
    left: PropertySource,
    middle: PropertySource,
    right: PropertySource,
    observer: Callable[[Any, Any, Any], None],
    comparers: Sequence[EqualityPolicy | None] | None = None,
) -> Subscription:
    """Three-source merge_subscribe()."""
    require(left=left, middle=middle, right=right, observer=observer)
    eq = _comparers(comparers, 3)
    merged = merge3(left, middle, right, lambda lv, mv, rv: (lv, mv, rv))
    return subscribe(merged, lambda values: observer(*values), eq)


def notify_changes_as(
    source: PropertySource,
    name: str,
    on_changed: Callable[[str], None],
) -> Subscription:
    """Call on_changed(name) on every raw notification from source.

    Lets a plain object re-publish a composed source as one of its own
    named change events.
    """
    require(source=source, name=name, on_changed=on_changed)
    return source.raw_subscribe(lambda: on_changed(name))


def to_stream(source: PropertySource[T]) -> EventStream[T]:
    """Stream of source's values, one per raw notification.

    Disposing the stream cancels the underlying subscription.
    """
    require(source=source)
    stream: EventStream[T] = EventStream()
    subscription = source.raw_subscribe(lambda: stream.emit(source.get()))
    stream.attach_upstream(subscription.dispose)
    return stream
