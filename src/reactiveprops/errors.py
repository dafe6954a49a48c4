"""Exceptions raised by reactiveprops itself.

Anything thrown by user code (selectors, combiners, equality policies,
setters, observers) is never wrapped; it propagates to whoever triggered
the notification.
"""

from __future__ import annotations


class ReactivePropertyError(Exception):
    """Base class for reactiveprops errors."""


class InvalidArgument(ReactivePropertyError, ValueError):
    """A required argument was missing (None)."""

    def __init__(self, name: str) -> None:
        super().__init__(f"argument {name!r} is required")
        self.name = name


class UnsupportedAccessor(ReactivePropertyError, LookupError):
    """No change-notification mechanism is known for the requested member."""


def require(**arguments: object) -> None:
    """Raise InvalidArgument for the first argument that is None."""
    for name, value in arguments.items():
        if value is None:
            raise InvalidArgument(name)
