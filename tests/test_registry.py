"""Tests for AccessorRegistry."""

import logging

import pytest

from reactiveprops import AccessorRegistry, InvalidArgument, Property, UnsupportedAccessor


class Book:
    def __init__(self, title):
        self.title = title
        self.title_changed = []

    def rename(self, title):
        if title != self.title:
            self.title = title
            for handler in list(self.title_changed):
                handler()


@pytest.fixture
def book():
    return Book("Dune")


@pytest.fixture
def registry(book):
    registry = AccessorRegistry()
    registry.register(
        "book.title",
        get=lambda: book.title,
        add_handler=book.title_changed.append,
        remove_handler=book.title_changed.remove,
        set=book.rename,
    )
    registry.register("book.length", get=lambda: len(book.title))
    return registry


class TestRegistry:
    def test_source(self, registry, book):
        titles = []
        with registry.source("book.title").subscribe(titles.append):
            book.rename("Emma")
        assert titles == ["Dune", "Emma"]
        assert book.title_changed == []

    def test_property(self, registry, book):
        title = registry.property("book.title")
        assert isinstance(title, Property)
        title.set("Ulysses")
        assert book.title == "Ulysses"

    def test_unknown_key(self, registry):
        with pytest.raises(UnsupportedAccessor):
            registry.source("book.author")

    def test_unsupported_accessor_is_a_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.property("missing")

    def test_member_without_notification(self, registry):
        assert registry.accessor("book.length").get() == 4
        with pytest.raises(UnsupportedAccessor, match="no change notification"):
            registry.source("book.length")

    def test_read_only_member(self, book):
        registry = AccessorRegistry()
        registry.register("title", lambda: book.title, book.title_changed.append, book.title_changed.remove)
        with pytest.raises(UnsupportedAccessor, match="read-only"):
            registry.property("title")

    def test_handlers_must_come_in_pairs(self, book):
        registry = AccessorRegistry()
        with pytest.raises(InvalidArgument):
            registry.register("title", lambda: book.title, add_handler=book.title_changed.append)

    def test_container_protocol(self, registry):
        assert "book.title" in registry
        assert len(registry) == 2
        assert sorted(registry) == ["book.length", "book.title"]
        registry.unregister("book.length")
        assert "book.length" not in registry

    def test_logs_registration(self, caplog):
        caplog.set_level(logging.DEBUG, logger="reactiveprops.registry")
        AccessorRegistry().register("x", lambda: 1)
        assert "Registered accessor 'x'" in caplog.text
