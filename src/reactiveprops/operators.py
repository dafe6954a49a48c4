"""Operators that compose property sources.

Timing modifiers:
- lazy(s): never calls a new observer during the subscribe call itself.
- eager(s): calls a new observer exactly once during the subscribe call.

Value filtering:
- distinct(s, eq): forwards a notification only when the value changed
  since the last one it delivered.

Bind:
- select_many(s, f): tracks whichever source f(s.get()) currently returns,
  re-selecting every time s notifies. select() and merge() are built on it.

Composed sources hold no upstream subscription of their own. They subscribe
upstream when someone subscribes to them and let go when that subscription
is disposed.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from reactiveprops._observers import Observer, ObserverList
from reactiveprops.disposables import EMPTY, Subscription
from reactiveprops.equality import EqualityPolicy, resolve
from reactiveprops.errors import InvalidArgument, require
from reactiveprops.source import PropertySource, constant, create

T = TypeVar("T")
C = TypeVar("C")
R = TypeVar("R")

_UNSET = object()


# ─── Timing ──────────────────────────────────────────────────────────────────


class _LazyForward:
    """Drops calls until armed."""

    __slots__ = ("observer", "armed")

    def __init__(self, observer: Observer) -> None:
        self.observer = observer
        self.armed = False

    def __call__(self) -> None:
        if self.armed:
            self.observer()


def lazy(source: PropertySource[T]) -> PropertySource[T]:
    """Suppress any notification the upstream sends while subscribing.

    Later notifications are forwarded unchanged.
    """
    require(source=source)

    def _raw_subscribe(observer: Observer) -> Subscription:
        forward = _LazyForward(observer)
        subscription = source.raw_subscribe(forward)
        forward.armed = True
        return subscription

    return create(_raw_subscribe, source.get)


def eager(source: PropertySource[T]) -> PropertySource[T]:
    """Notify each new observer once, immediately, then forward changes.

    eager(lazy(s)) and eager(s) behave the same whatever s does on subscribe.
    """
    require(source=source)
    lazy_source = lazy(source)

    def _raw_subscribe(observer: Observer) -> Subscription:
        subscription = lazy_source.raw_subscribe(observer)
        try:
            observer()
        except BaseException:
            subscription.dispose()
            raise
        return subscription

    return create(_raw_subscribe, source.get)


# ─── Distinct ────────────────────────────────────────────────────────────────


class _DistinctState:
    """Comparison cache shared by every subscriber of one distinct() source.

    The cache is seeded when the first subscriber arrives and cleared when
    the last one leaves. While anyone is subscribed there is exactly one
    upstream subscription, and each upstream change is compared once against
    the cache before it is fanned out. Each subscriber also remembers the
    value it was last told about, so re-entrant writes never tell anyone
    twice about the same value.
    """

    __slots__ = ("source", "eq", "observers", "cached", "upstream", "wave")

    def __init__(self, source: PropertySource, eq: EqualityPolicy) -> None:
        self.source = source
        self.eq = eq
        self.observers = ObserverList()
        self.cached: Any = _UNSET
        self.upstream: Subscription | None = None
        self.wave = 0

    @property
    def active(self) -> bool:
        return self.upstream is not None

    def subscribe(self, observer: Observer) -> Subscription:
        delivery = _Delivery(self, observer, self.source.get())
        registration = self.observers.add(delivery)
        if self.upstream is None:
            self.cached = delivery.last
            try:
                self.upstream = lazy(self.source).raw_subscribe(self._on_upstream)
            except BaseException:
                registration.dispose()
                self.cached = _UNSET
                raise
        subscription = Subscription(lambda: self._release(registration))
        try:
            observer()
        except BaseException:
            subscription.dispose()
            raise
        return subscription

    def _on_upstream(self) -> None:
        value = self.source.get()
        if self.cached is not _UNSET and self.eq(value, self.cached):
            return
        self.cached = value
        self.wave += 1
        self.observers.notify(self.wave, value)

    def _release(self, registration: Subscription) -> None:
        registration.dispose()
        if not self.observers and self.upstream is not None:
            upstream, self.upstream = self.upstream, None
            self.cached = _UNSET
            upstream.dispose()


class _Delivery:
    """One subscriber of a distinct() source and the value it last saw.

    A wave superseded by a nested one stops short: subscribers it has not
    reached yet hear about the newer value instead, once.
    """

    __slots__ = ("state", "observer", "last")

    def __init__(self, state: _DistinctState, observer: Observer, last: Any) -> None:
        self.state = state
        self.observer = observer
        self.last = last

    def __call__(self, wave: int, value: Any) -> None:
        if wave != self.state.wave or self.state.eq(value, self.last):
            return
        self.last = value
        self.observer()


class DistinctSource(PropertySource[T]):
    """Result of distinct(). Reads go straight to the upstream source."""

    __slots__ = ("_source", "_state")

    def __init__(self, source: PropertySource[T], eq: EqualityPolicy) -> None:
        self._source = source
        self._state = _DistinctState(source, eq)

    def get(self) -> T:
        return self._source.get()

    def raw_subscribe(self, observer: Observer) -> Subscription:
        require(observer=observer)
        return self._state.subscribe(observer)

    def __repr__(self) -> str:
        state = self._state
        cached = "unset" if state.cached is _UNSET else repr(state.cached)
        return f"DistinctSource({self._source!r}, cached={cached})"


def distinct(source: PropertySource[T], eq: EqualityPolicy | None = None) -> PropertySource[T]:
    """Only notify when the value differs from the last delivered one.

    Subscribing always delivers once, immediately. After that an upstream
    notification is forwarded only if eq(new, last_delivered) is false.

    Usage:
        name = from_value("abc")
        calls = []
        name.distinct(ignore_case).raw_subscribe(lambda: calls.append(name.get()))
        # calls == ["abc"]

        name.set("ABC")
        # calls == ["abc"], equal ignoring case
    """
    require(source=source)
    return DistinctSource(source, resolve(eq))


# ─── Bind ────────────────────────────────────────────────────────────────────


class _BindState:
    """One subscriber's view of select_many(): outer plus current inner."""

    __slots__ = ("source", "selector", "observer", "outer", "inner", "generation", "disposed")

    def __init__(self, source: PropertySource, selector: Callable, observer: Observer) -> None:
        self.source = source
        self.selector = selector
        self.observer = observer
        self.outer: Subscription = EMPTY
        self.inner: Subscription = EMPTY
        self.generation = 0
        self.disposed = False

    def start(self) -> Subscription:
        try:
            self.outer = lazy(self.source).raw_subscribe(self._on_outer)
            self._reattach(self.source.get())
        except BaseException:
            self.dispose()
            raise
        return Subscription(self.dispose)

    def _reattach(self, outer_value: Any) -> None:
        self.inner.dispose()
        self.inner = EMPTY
        self.generation += 1
        generation = self.generation
        inner_source = self.selector(outer_value)
        # A nested outer change while selecting owns the inner slot now.
        if self.disposed or generation != self.generation:
            return
        inner = lazy(inner_source).raw_subscribe(self.observer)
        if self.disposed or generation != self.generation:
            inner.dispose()
            return
        self.inner = inner

    def _on_outer(self) -> None:
        if self.disposed:
            return
        self._reattach(self.source.get())
        if not self.disposed:
            self.observer()

    def dispose(self) -> None:
        self.disposed = True
        self.outer.dispose()
        self.inner.dispose()


def select_many(
    source: PropertySource[T],
    selector: Callable[[T], PropertySource[C]],
    result_selector: Callable[[T, C], R] | None = None,
) -> PropertySource:
    """Bind: follow the source that selector picks for the current value.

    While subscribed, the result forwards notifications from the selected
    inner source. When the outer source notifies, the old inner
    subscription is dropped, selector is re-run on the new value, and the
    observer is told once.

    get() is never cached: it evaluates selector(source.get()).get() on
    every read.

    With result_selector, the value is result_selector(outer, inner).

    Usage:
        current_doc = from_value(doc_a)
        title = current_doc.select_many(lambda doc: doc.title)
    """
    require(source=source, selector=selector)
    if result_selector is not None:
        return select_many(source, _project(selector, result_selector))

    def _raw_subscribe(observer: Observer) -> Subscription:
        return _BindState(source, selector, observer).start()

    return create(_raw_subscribe, lambda: selector(source.get()).get())


def _project(selector: Callable, result_selector: Callable) -> Callable:
    def _select(value):
        return select(selector(value), lambda inner: result_selector(value, inner))

    return _select


def select(source: PropertySource[T], selector: Callable[[T], R]) -> PropertySource[R]:
    """Map the value through selector. Notifies whenever source does."""
    require(source=source, selector=selector)
    return select_many(source, lambda value: constant(selector(value)))


def as_instance(source: PropertySource[Any], cls: type[R]) -> PropertySource[R | None]:
    """The value when it is an instance of cls, otherwise None."""
    require(source=source, cls=cls)
    return select(source, lambda value: value if isinstance(value, cls) else None)


# ─── Merge ───────────────────────────────────────────────────────────────────


def merge(
    left: PropertySource[T],
    right: PropertySource[C],
    combiner: Callable[[T, C], R],
) -> PropertySource[R]:
    """Combine two sources. Notifies when either one does.

    The value is combiner(left.get(), right.get()), recomputed on each read.
    """
    require(left=left, right=right, combiner=combiner)
    return select_many(left, lambda lv: select(right, lambda rv: combiner(lv, rv)))


def merge3(
    left: PropertySource,
    middle: PropertySource,
    right: PropertySource,
    combiner: Callable[[Any, Any, Any], R],
) -> PropertySource[R]:
    require(left=left, middle=middle, right=right, combiner=combiner)
    return select_many(
        left,
        lambda lv: select_many(
            middle,
            lambda mv: select(right, lambda rv: combiner(lv, mv, rv)),
        ),
    )


def merge_all(sources: Iterable[PropertySource], combiner: Callable[..., R]) -> PropertySource[R]:
    """N-ary merge: combiner receives one positional value per source."""
    require(sources=sources, combiner=combiner)
    sources = list(sources)
    if not sources:
        raise InvalidArgument("sources")
    for index, item in enumerate(sources):
        if item is None:
            raise InvalidArgument(f"sources[{index}]")

    def _bind(index: int, values: tuple) -> PropertySource:
        if index == len(sources) - 1:
            return select(sources[index], lambda value: combiner(*values, value))
        return select_many(sources[index], lambda value: _bind(index + 1, values + (value,)))

    return _bind(0, ())


def and_(left: PropertySource[bool], right: PropertySource[bool]) -> PropertySource[bool]:
    """Logical AND of two boolean sources, notifying only when it flips."""
    require(left=left, right=right)
    return distinct(merge(left, right, lambda lv, rv: bool(lv) and bool(rv)))


def or_(left: PropertySource[bool], right: PropertySource[bool]) -> PropertySource[bool]:
    """Logical OR of two boolean sources, notifying only when it flips."""
    require(left=left, right=right)
    return distinct(merge(left, right, lambda lv, rv: bool(lv) or bool(rv)))
