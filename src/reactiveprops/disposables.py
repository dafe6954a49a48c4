"""Cancelers — one-shot handles returned by every subscription.

A Subscription runs its teardown at most once. Calling dispose() (or the
handle itself) a second time does nothing, so a canceler can safely be
invoked from inside the very callback it guards.
"""

from __future__ import annotations

from typing import Callable, Iterable

Disposer = Callable[[], None]


class Subscription:
    """Disposable handle wrapping a teardown function."""

    __slots__ = ("_teardown", "_disposed")

    def __init__(self, teardown: Disposer | None = None) -> None:
        self._teardown = teardown
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        teardown, self._teardown = self._teardown, None
        if teardown is not None:
            teardown()

    def __call__(self) -> None:
        self.dispose()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Subscription({state})"


class _EmptySubscription(Subscription):
    """Shared canceler for sources that never notify."""

    __slots__ = ()

    @property
    def disposed(self) -> bool:
        return False

    def dispose(self) -> None:
        pass

    def __repr__(self) -> str:
        return "Subscription(empty)"


EMPTY: Subscription = _EmptySubscription()


class DisposableSet(Subscription):
    """Disposes a group of subscriptions together.

    Items added after the set was disposed are disposed immediately.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Subscription] = ()) -> None:
        super().__init__(self._dispose_items)
        self._items: list[Subscription] = []
        for item in items:
            self.add(item)

    def add(self, item: Subscription) -> None:
        if self._disposed:
            item.dispose()
        else:
            self._items.append(item)

    def remove(self, item: Subscription) -> bool:
        """Stop tracking item without disposing it."""
        for i, existing in enumerate(self._items):
            if existing is item:
                del self._items[i]
                return True
        return False

    def remove_and_dispose(self, item: Subscription) -> None:
        self.remove(item)
        item.dispose()

    def __len__(self) -> int:
        return len(self._items)

    def _dispose_items(self) -> None:
        items, self._items = self._items, []
        for item in items:
            item.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self._items)} items"
        return f"DisposableSet({state})"
