"""Equality policies as plain callables (a, b) -> bool.

The default policy treats identical or ``==`` values as equal. It can be
replaced process-wide with set_default_equality(); operations that were not
given an explicit policy resolve the default when they are called.
"""

from __future__ import annotations

from typing import Any, Callable

EqualityPolicy = Callable[[Any, Any], bool]


def default_equality(a: Any, b: Any) -> bool:
    return a is b or a == b


_default: EqualityPolicy = default_equality


def set_default_equality(policy: EqualityPolicy | None) -> None:
    """Set the policy used when none is passed. None restores the built-in one.

    Usage:
        reactiveprops.set_default_equality(lambda a, b: a is b)
    """
    global _default
    _default = policy if policy is not None else default_equality


def get_default_equality() -> EqualityPolicy:
    return _default


def resolve(policy: EqualityPolicy | None) -> EqualityPolicy:
    """Explicit policy if given, otherwise the configured default."""
    return policy if policy is not None else _default


def ignore_case(a: str | None, b: str | None) -> bool:
    """Case-insensitive string comparison. None only equals None."""
    if a is None or b is None:
        return a is b
    return a.casefold() == b.casefold()


def tuple_equality(*policies: EqualityPolicy | None) -> EqualityPolicy:
    """Field-wise policy for tuples; None entries use the configured default."""
    resolved = [resolve(p) for p in policies]

    def _equal(a: tuple, b: tuple) -> bool:
        if a is None or b is None:
            return a is b
        if len(a) != len(b) or len(a) != len(resolved):
            return False
        return all(eq(x, y) for eq, x, y in zip(resolved, a, b))

    return _equal
