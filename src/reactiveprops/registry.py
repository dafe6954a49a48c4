"""Accessor registry — named members exposed as sources and properties.

Hosts register each bindable member once, at startup, with an explicit
getter, change-handler pair and optional setter. Lookups then build
sources/properties by key without any runtime introspection.

Usage:
    registry = AccessorRegistry()
    registry.register(
        "book.title",
        get=lambda: book.title,
        add_handler=book.title_changed.append,
        remove_handler=book.title_changed.remove,
        set=book.rename,
    )

    title = registry.property("book.title")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, NamedTuple

from reactiveprops.errors import InvalidArgument, UnsupportedAccessor, require
from reactiveprops.property import Property, create_property
from reactiveprops.source import PropertySource, from_event

logger = logging.getLogger("reactiveprops.registry")


class Accessor(NamedTuple):
    get: Callable[[], Any]
    add_handler: Callable[[Callable[[], None]], None] | None
    remove_handler: Callable[[Callable[[], None]], None] | None
    set: Callable[[Any], None] | None

    @property
    def observable(self) -> bool:
        return self.add_handler is not None

    @property
    def settable(self) -> bool:
        return self.set is not None


class AccessorRegistry:
    """String keys mapped to accessor records."""

    def __init__(self) -> None:
        self._accessors: dict[str, Accessor] = {}

    def register(
        self,
        key: str,
        get: Callable[[], Any],
        add_handler: Callable[[Callable[[], None]], None] | None = None,
        remove_handler: Callable[[Callable[[], None]], None] | None = None,
        set: Callable[[Any], None] | None = None,
    ) -> None:
        """Register (or replace) the accessor for key.

        add_handler and remove_handler come as a pair; a member registered
        without them can be read but not observed.
        """
        require(key=key, get=get)
        if add_handler is not None and remove_handler is None:
            raise InvalidArgument("remove_handler")
        if remove_handler is not None and add_handler is None:
            raise InvalidArgument("add_handler")
        accessor = Accessor(get, add_handler, remove_handler, set)
        self._accessors[key] = accessor
        logger.debug(
            "Registered accessor %r (observable=%s, settable=%s)",
            key, accessor.observable, accessor.settable,
        )

    def unregister(self, key: str) -> None:
        self._accessors.pop(key, None)

    def accessor(self, key: str) -> Accessor:
        require(key=key)
        try:
            return self._accessors[key]
        except KeyError:
            raise UnsupportedAccessor(f"no accessor registered for {key!r}") from None

    def source(self, key: str) -> PropertySource:
        """Source for key. Raises UnsupportedAccessor if it cannot be observed."""
        accessor = self.accessor(key)
        if not accessor.observable:
            raise UnsupportedAccessor(f"{key!r} has no change notification")
        return from_event(accessor.get, accessor.add_handler, accessor.remove_handler)

    def property(self, key: str) -> Property:
        """Property for key. Raises UnsupportedAccessor unless observable and settable."""
        source = self.source(key)
        accessor = self._accessors[key]
        if not accessor.settable:
            raise UnsupportedAccessor(f"{key!r} is read-only")
        return create_property(source, accessor.set)

    def __contains__(self, key: object) -> bool:
        return key in self._accessors

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)
