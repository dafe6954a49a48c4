"""Shared fixtures.

ManualSource lets a test change the value without notifying (``current``)
and fire observers on demand (``notify()``), which is how upstream
sources that notify spuriously or late are simulated.
"""

import pytest

from reactiveprops import PropertySource, set_default_equality
from reactiveprops._observers import ObserverList


class ManualSource(PropertySource):
    def __init__(self, current):
        self.current = current
        self._observers = ObserverList()

    def get(self):
        return self.current

    def raw_subscribe(self, observer):
        return self._observers.add(observer)

    def notify(self):
        self._observers.notify()

    def set_and_notify(self, value):
        self.current = value
        self.notify()

    @property
    def observer_count(self):
        return len(self._observers)

    def __repr__(self):
        return f"ManualSource({self.current!r})"


@pytest.fixture
def manual():
    """Factory: manual(10) -> ManualSource seeded with 10."""
    return ManualSource


@pytest.fixture(autouse=True)
def _reset_default_equality():
    yield
    set_default_equality(None)
