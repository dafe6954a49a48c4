"""Ordered observer registry with per-registration removal tokens.

Removing by token rather than by callback equality means two registrations
of the same function are independent: canceling one leaves the other
attached. Notification walks a snapshot and skips handles canceled
mid-wave, so observers may unsubscribe themselves (or each other) while
being notified.
"""

from __future__ import annotations

from typing import Callable

from reactiveprops.disposables import Subscription

Observer = Callable[..., None]


class _Handle:
    __slots__ = ("callback", "active")

    def __init__(self, callback: Observer) -> None:
        self.callback = callback
        self.active = True


class ObserverList:
    """Observers in registration order."""

    __slots__ = ("_handles",)

    def __init__(self) -> None:
        self._handles: list[_Handle] = []

    def add(self, callback: Observer) -> Subscription:
        """Register callback. Returns a canceler for this registration only."""
        handle = _Handle(callback)
        self._handles.append(handle)
        return Subscription(lambda: self._remove(handle))

    def _remove(self, handle: _Handle) -> None:
        handle.active = False
        for i, existing in enumerate(self._handles):
            if existing is handle:
                del self._handles[i]
                break

    def notify(self, *args) -> None:
        """Invoke every registered observer with args, in order."""
        for handle in list(self._handles):
            if handle.active:
                handle.callback(*args)

    def __len__(self) -> int:
        return len(self._handles)

    def __bool__(self) -> bool:
        return bool(self._handles)
