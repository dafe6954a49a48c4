"""Property sources: values that can be read and observed.

A PropertySource pairs get() with raw_subscribe(observer). The observer takes
no arguments: it only says "the value may have changed", and readers call
get() to find out what it is now. get() never has side effects and always
returns the current value, whether or not anyone is subscribed.

raw_subscribe() makes no promise about calling the observer during the
subscribe call itself. The lazy()/eager() modifiers in reactiveprops.operators
pin that down when it matters.

Every operator in reactiveprops.operators and reactiveprops.subscriptions is
also reachable as a method here, so compositions read left to right:

    name.select(str.strip).distinct().subscribe(print)
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from reactiveprops._observers import Observer, ObserverList
from reactiveprops.disposables import EMPTY, Subscription
from reactiveprops.errors import require

T = TypeVar("T")
R = TypeVar("R")
H = TypeVar("H")

RawSubscribe = Callable[[Observer], Subscription]


class PropertySource(Generic[T]):
    """A readable, observable value.

    Subclasses implement get() and raw_subscribe().
    """

    __slots__ = ()

    def get(self) -> T:
        raise NotImplementedError

    def raw_subscribe(self, observer: Observer) -> Subscription:
        """Register a no-argument change callback. Returns its canceler."""
        raise NotImplementedError

    @property
    def value(self) -> T:
        return self.get()

    # --- Operators ---

    def lazy(self) -> PropertySource[T]:
        from reactiveprops import operators
        return operators.lazy(self)

    def eager(self) -> PropertySource[T]:
        from reactiveprops import operators
        return operators.eager(self)

    def distinct(self, eq=None) -> PropertySource[T]:
        from reactiveprops import operators
        return operators.distinct(self, eq)

    def select(self, selector: Callable[[T], R]) -> PropertySource[R]:
        from reactiveprops import operators
        return operators.select(self, selector)

    def select_many(self, selector, result_selector=None) -> PropertySource:
        from reactiveprops import operators
        return operators.select_many(self, selector, result_selector)

    def merge(self, other: PropertySource, combiner: Callable[[T, Any], R]) -> PropertySource[R]:
        from reactiveprops import operators
        return operators.merge(self, other, combiner)

    def merge3(self, middle: PropertySource, right: PropertySource, combiner) -> PropertySource:
        from reactiveprops import operators
        return operators.merge3(self, middle, right, combiner)

    def merge_all(self, others, combiner: Callable[..., R]) -> PropertySource[R]:
        """Merge with every source in others; combiner gets self's value first."""
        from reactiveprops import operators
        return operators.merge_all([self, *others], combiner)

    def and_(self, other: PropertySource[bool]) -> PropertySource[bool]:
        from reactiveprops import operators
        return operators.and_(self, other)

    def or_(self, other: PropertySource[bool]) -> PropertySource[bool]:
        from reactiveprops import operators
        return operators.or_(self, other)

    def as_instance(self, cls: type[R]) -> PropertySource[R | None]:
        from reactiveprops import operators
        return operators.as_instance(self, cls)

    # --- Subscription helpers ---

    def subscribe(self, observer: Callable[[T], None], eq=None) -> Subscription:
        from reactiveprops import subscriptions
        return subscriptions.subscribe(self, observer, eq)

    def subscribe_to_changes(self, observer, eq=None, default=None) -> Subscription:
        from reactiveprops import subscriptions
        return subscriptions.subscribe_to_changes(self, observer, eq, default)

    def merge_subscribe(self, other: PropertySource, observer, comparers=None) -> Subscription:
        from reactiveprops import subscriptions
        return subscriptions.merge_subscribe(self, other, observer, comparers)

    def merge_subscribe3(self, middle, right, observer, comparers=None) -> Subscription:
        from reactiveprops import subscriptions
        return subscriptions.merge_subscribe3(self, middle, right, observer, comparers)

    def notify_changes_as(self, name: str, on_changed: Callable[[str], None]) -> Subscription:
        from reactiveprops import subscriptions
        return subscriptions.notify_changes_as(self, name, on_changed)

    def to_stream(self):
        from reactiveprops import subscriptions
        return subscriptions.to_stream(self)

    def bind_to(self, target) -> Subscription:
        from reactiveprops import property as _property
        return _property.bind_to(self, target)


class ExplicitSource(PropertySource[T]):
    """A source built from an explicit subscribe function and getter."""

    __slots__ = ("_raw_subscribe", "_get")

    def __init__(self, raw_subscribe: RawSubscribe, get: Callable[[], T]) -> None:
        self._raw_subscribe = raw_subscribe
        self._get = get

    def get(self) -> T:
        return self._get()

    def raw_subscribe(self, observer: Observer) -> Subscription:
        require(observer=observer)
        return _as_subscription(self._raw_subscribe(observer))

    def __repr__(self) -> str:
        return f"ExplicitSource({getattr(self._get, '__name__', self._get)!r})"


class _Constant(PropertySource[T]):
    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def get(self) -> T:
        return self._value

    def raw_subscribe(self, observer: Observer) -> Subscription:
        require(observer=observer)
        return EMPTY

    def __repr__(self) -> str:
        return f"constant({self._value!r})"


def _as_subscription(result) -> Subscription:
    """Accept a Subscription or a bare teardown function from raw subscribers."""
    if isinstance(result, Subscription):
        return result
    if callable(result):
        return Subscription(result)
    raise TypeError(f"raw_subscribe must return a Subscription or a callable, got {result!r}")


def create(raw_subscribe: RawSubscribe, get: Callable[[], T]) -> PropertySource[T]:
    """Build a source from a subscribe function and a getter.

    Both are used as-is: no caching, no notification timing.

    Usage:
        observers = []

        def raw_subscribe(observer):
            observers.append(observer)
            return lambda: observers.remove(observer)

        source = create(raw_subscribe, lambda: settings["theme"])
    """
    require(raw_subscribe=raw_subscribe, get=get)
    return ExplicitSource(raw_subscribe, get)


def constant(value: T) -> PropertySource[T]:
    """A source that always holds value and never notifies."""
    return _Constant(value)


def notifying(get: Callable[[], T]) -> tuple[PropertySource[T], Callable[[], None]]:
    """Build a source plus a notify() that fires every current observer.

    Usage:
        state = {"count": 0}
        count, notify = notifying(lambda: state["count"])

        state["count"] = 1
        notify()
    """
    require(get=get)
    observers = ObserverList()
    return create(observers.add, get), observers.notify


def from_event(
    get: Callable[[], T],
    add_handler: Callable[[Observer], None],
    remove_handler: Callable[[Observer], None],
) -> PropertySource[T]:
    """Adapt a host object's add/remove change-handler pair.

    Each subscription adds the observer as a handler; its canceler removes
    that same handler.

    Usage:
        width = from_event(
            lambda: window.width,
            window.on_resize.connect,
            window.on_resize.disconnect,
        )
    """
    require(get=get, add_handler=add_handler, remove_handler=remove_handler)
    return from_event_factory(get, lambda observer: observer, add_handler, remove_handler)


def from_event_factory(
    get: Callable[[], T],
    create_handler: Callable[[Observer], H],
    add_handler: Callable[[H], None],
    remove_handler: Callable[[H], None],
) -> PropertySource[T]:
    """Like from_event(), for hosts whose handlers take arguments.

    create_handler turns the no-argument observer into whatever the host
    expects, e.g. ``lambda observer: lambda sender, args: observer()``.
    """
    require(
        get=get,
        create_handler=create_handler,
        add_handler=add_handler,
        remove_handler=remove_handler,
    )

    def _raw_subscribe(observer: Observer) -> Subscription:
        handler = create_handler(observer)
        add_handler(handler)
        return Subscription(lambda: remove_handler(handler))

    return create(_raw_subscribe, get)
