"""Tests for subscribe, subscribe_to_changes, merge_subscribe and friends."""

import pytest

from reactiveprops import (
    ChangeInfo,
    InvalidArgument,
    ignore_case,
    merge_subscribe,
    merge_subscribe3,
    notify_changes_as,
    subscribe,
    subscribe_to_changes,
    to_stream,
)


class TestSubscribe:
    def test_notifies_once_at_subscription_with_value(self, manual):
        values = []
        with subscribe(manual(10), values.append):
            assert values == [10]

    def test_does_not_notify_after_dispose(self, manual):
        source = manual(10)
        values = []
        with subscribe(source, values.append):
            pass
        source.set_and_notify(20)
        assert values == [10]
        assert source.observer_count == 0

    def test_only_notifies_on_value_changes(self, manual):
        source = manual(10)
        values = []
        with source.subscribe(values.append):
            source.notify()
            assert values == [10]
            source.current = 20
            source.notify()
            assert values == [10, 20]

    def test_uses_comparer(self, manual):
        source = manual("abc")
        values = []
        with subscribe(source, values.append, ignore_case):
            source.set_and_notify("abcd")
            source.set_and_notify("ABCD")
            source.set_and_notify("ABCDE")
        assert values == ["abc", "abcd", "ABCDE"]

    def test_observer_error_propagates(self, manual):
        source = manual(1)

        def observer(value):
            if value == 2:
                raise RuntimeError("observer failed")

        sub = subscribe(source, observer)
        with pytest.raises(RuntimeError):
            source.set_and_notify(2)
        sub.dispose()
        sub.dispose()

    def test_missing_observer(self, manual):
        with pytest.raises(InvalidArgument):
            subscribe(manual(1), None)


class TestSubscribeToChanges:
    def test_notifies_once_at_subscription(self, manual):
        changes = []
        with subscribe_to_changes(manual(0), changes.append):
            assert len(changes) == 1
        assert len(changes) == 1

    def test_first_change_uses_default_as_old(self, manual):
        changes = []
        subscribe_to_changes(manual(10), changes.append)
        assert changes == [ChangeInfo(None, 10)]

    def test_first_change_with_explicit_default(self, manual):
        changes = []
        manual(10).subscribe_to_changes(changes.append, default=0)
        assert changes[0].old == 0
        assert changes[0].new == 10

    def test_old_and_new_values(self, manual):
        source = manual(10)
        changes = []
        with subscribe_to_changes(source, changes.append):
            source.set_and_notify(20)
            assert changes[-1] == ChangeInfo(old=10, new=20)
            source.set_and_notify(30)
            assert changes[-1] == ChangeInfo(old=20, new=30)

    def test_only_if_value_changes(self, manual):
        source = manual(10)
        changes = []
        with subscribe_to_changes(source, changes.append):
            source.notify()
            assert len(changes) == 1
            source.set_and_notify(20)
            assert len(changes) == 2
            source.notify()
            assert len(changes) == 2

    def test_uses_comparer(self, manual):
        source = manual("abc")
        changes = []
        with subscribe_to_changes(source, changes.append, ignore_case):
            source.set_and_notify("abcd")
            assert changes[-1] == ChangeInfo("abc", "abcd")
            source.set_and_notify("ABCD")
            assert len(changes) == 2
            source.set_and_notify("ABCDE")
            assert changes[-1] == ChangeInfo("abcd", "ABCDE")


class TestMergeSubscribe:
    def test_notifies_once_at_subscription(self, manual):
        calls = []
        with merge_subscribe(manual(10), manual("abc"), lambda l, r: calls.append((l, r))):
            assert calls == [(10, "abc")]

    def test_notifies_when_any_value_changes(self, manual):
        left, right = manual(10), manual("abc")
        calls = []
        with merge_subscribe(left, right, lambda l, r: calls.append((l, r))):
            left.set_and_notify(20)
            right.set_and_notify("abcd")
        assert calls == [(10, "abc"), (20, "abc"), (20, "abcd")]

    def test_does_not_notify_when_values_do_not_change(self, manual):
        left, right = manual(10), manual("abc")
        calls = []
        with merge_subscribe(left, right, lambda l, r: calls.append((l, r))):
            left.notify()
            right.notify()
        assert len(calls) == 1

    def test_uses_comparers(self, manual):
        left, right = manual(10), manual("abc")
        calls = []
        with merge_subscribe(left, right, lambda l, r: calls.append((l, r)), [None, ignore_case]):
            right.current = "ABC"
            left.notify()
            right.notify()
            assert calls == [(10, "abc")]

            left.current = 20
            left.notify()
            assert calls[-1] == (20, "ABC")

            right.set_and_notify("ABCD")
            assert calls[-1] == (20, "ABCD")
            assert len(calls) == 3

    def test_fluent(self, manual):
        left, right = manual(1), manual(2)
        calls = []
        with left.merge_subscribe(right, lambda l, r: calls.append(l + r)):
            right.set_and_notify(5)
        assert calls == [3, 6]

    def test_wrong_number_of_comparers(self, manual):
        with pytest.raises(ValueError):
            merge_subscribe(manual(1), manual(2), lambda l, r: None, [None])


class TestMergeSubscribe3:
    def test_notifies_when_any_value_changes(self, manual):
        left, middle, right = manual(10), manual(True), manual("abc")
        calls = []
        with merge_subscribe3(left, middle, right, lambda *values: calls.append(values)):
            left.set_and_notify(20)
            assert len(calls) == 2

            middle.current = False
            right.notify()
            assert calls[-1] == (20, False, "abc")

            right.set_and_notify("abcd")
            assert len(calls) == 4

    def test_uses_comparers(self, manual):
        left, middle, right = manual(10), manual(True), manual("abc")
        calls = []
        comparers = [None, None, ignore_case]
        with merge_subscribe3(left, middle, right, lambda *values: calls.append(values), comparers):
            right.current = "ABC"
            left.notify()
            middle.notify()
            right.notify()
            assert calls == [(10, True, "abc")]

            middle.set_and_notify(False)
            assert calls[-1] == (10, False, "ABC")

            right.current = "aBc"
            left.notify()
            middle.notify()
            right.notify()
            assert len(calls) == 2

    def test_fluent(self, manual):
        calls = []
        with manual(1).merge_subscribe3(manual(2), manual(3), lambda *v: calls.append(v)):
            assert calls == [(1, 2, 3)]


class TestNotifyChangesAs:
    def test_reports_name_on_every_notification(self, manual):
        source = manual(1)
        names = []
        with notify_changes_as(source.select(lambda v: v * 2), "doubled", names.append):
            source.notify()
            source.set_and_notify(2)
        assert names == ["doubled", "doubled"]


class TestToStream:
    def test_emits_values(self, manual):
        source = manual(1)
        stream = to_stream(source)
        received = []
        stream.subscribe(received.append)
        source.set_and_notify(2)
        source.notify()
        assert received == [2, 2]

    def test_dispose_cancels_source_subscription(self, manual):
        source = manual(1)
        stream = source.to_stream()
        scaled = stream.map(lambda v: v * 10)
        assert source.observer_count == 1
        stream.dispose()
        assert source.observer_count == 0
        assert scaled.disposed

    def test_mapped_stream(self, manual):
        source = manual(1)
        received = []
        source.to_stream().map(lambda v: v * 10).subscribe(received.append)
        source.set_and_notify(3)
        assert received == [30]
