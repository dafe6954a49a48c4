"""Push-based event stream with operator chaining.

Bridges property sources into a value-carrying stream: to_stream() emits
the current value on every raw notification. Each operator returns a new
stream (immutable chain); dispose() tears down the entire chain.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from reactiveprops._observers import ObserverList
from reactiveprops.disposables import Disposer, Subscription

T = TypeVar("T")
U = TypeVar("U")


class EventStream(Generic[T]):
    """Push-based event stream with operator chaining."""

    def __init__(self) -> None:
        self._subscribers = ObserverList()
        self._children: list[EventStream] = []
        self._disposed = False
        self._upstream_disposer: Disposer | None = None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def emit(self, value: T) -> None:
        """Push a value to all subscribers."""
        if self._disposed:
            return
        self._subscribers.notify(value)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register a callback. Returns a canceler for this registration."""
        return self._subscribers.add(callback)

    def attach_upstream(self, disposer: Disposer) -> None:
        """Set what dispose() calls to detach this stream from whatever feeds it.

        On an already disposed stream the disposer runs immediately.
        """
        if self._disposed:
            disposer()
            return
        self._upstream_disposer = disposer

    def map(self, fn: Callable[[T], U]) -> EventStream[U]:
        """Transform events through fn."""
        return self._derive(lambda child, v: child.emit(fn(v)))

    def filter(self, fn: Callable[[T], bool]) -> EventStream[T]:
        """Only pass events where fn returns True."""
        return self._derive(lambda child, v: child.emit(v) if fn(v) else None)

    def dispose(self) -> None:
        """Tear down this stream and all downstream children."""
        self._disposed = True
        self._subscribers = ObserverList()
        children, self._children = self._children, []
        for child in children:
            child.dispose()
        if self._upstream_disposer is not None:
            disposer, self._upstream_disposer = self._upstream_disposer, None
            disposer()

    def _derive(self, forward: Callable[[EventStream, T], None]) -> EventStream:
        child: EventStream = EventStream()
        self._children.append(child)
        registration = self.subscribe(lambda v: forward(child, v))
        child.attach_upstream(lambda: self._detach(child, registration))
        return child

    def _detach(self, child: EventStream, registration: Subscription) -> None:
        self._children = [existing for existing in self._children if existing is not child]
        registration.dispose()
