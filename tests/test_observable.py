# tests/test_observable.py
"""
Event bus behavior: ordering, one-shot handlers, removal and type checks.
"""

from __future__ import annotations

import pytest

from stepmeans.base.observable import Observable, Subscription


def test_trigger_calls_handlers_in_registration_order_with_all_args():
    events = Observable()
    calls = []

    events.on("iteration", lambda *args: calls.append(("first", args)))
    events.on("iteration", lambda *args: calls.append(("second", args)))

    events.trigger("iteration", 1, "two", None)

    assert calls == [("first", (1, "two", None)), ("second", (1, "two", None))]


def test_on_returns_observable_for_chaining():
    events = Observable()
    assert events.on("end", print).on("end", repr) is events
    assert events.handlers("end") == [print, repr]


@pytest.mark.parametrize("method", ["on", "one"])
def test_registering_non_callable_raises_and_registers_nothing(method):
    events = Observable()
    with pytest.raises(TypeError, match=method):
        getattr(events, method)("end", "not a function")
    assert len(events) == 0


def test_one_handler_runs_only_once():
    events = Observable()
    calls = []
    events.one("end", calls.append)
    events.on("end", lambda x: calls.append(x * 10))

    events.trigger("end", 1)
    events.trigger("end", 2)

    assert calls == [1, 10, 20]
    assert len(events.handlers("end")) == 1


def test_off_specific_handler():
    events = Observable()
    calls = []

    def keep(x):
        calls.append(("keep", x))

    def drop(x):
        calls.append(("drop", x))

    events.on("iteration", drop).on("iteration", keep).on("iteration", drop)
    events.off("iteration", drop)
    events.trigger("iteration", 3)

    assert calls == [("keep", 3)]


def test_off_without_handler_clears_event():
    events = Observable()
    events.on("iteration", print).on("end", print)

    events.off("iteration")

    assert events.handlers("iteration") == []
    assert events.handlers("end") == [print]


def test_off_wildcard_clears_everything():
    events = Observable()
    events.on("iteration", print).on("end", print).one("end", repr)

    events.off("*")

    assert len(events) == 0


def test_off_unknown_event_is_noop():
    events = Observable()
    events.off("nothing", print)
    events.off("nothing")


def test_off_non_callable_raises():
    events = Observable()
    events.on("end", print)
    with pytest.raises(TypeError, match="off"):
        events.off("end", 42)
    assert events.handlers("end") == [print]


def test_off_non_callable_raises_for_unknown_event():
    events = Observable()
    with pytest.raises(TypeError, match="off"):
        events.off("unknown", 42)
    events.off("unknown")
    events.off("unknown", print)


def test_trigger_without_handlers_is_noop():
    events = Observable()
    assert events.trigger("end", 1) is events


def test_handler_added_during_trigger_waits_for_next_trigger():
    events = Observable()
    calls = []

    def late(x):
        calls.append(("late", x))

    def register(x):
        calls.append(("register", x))
        events.on("end", late)

    events.one("end", register)
    events.trigger("end", 1)
    events.trigger("end", 2)

    assert calls == [("register", 1), ("late", 2)]


def test_handler_removed_during_trigger_is_skipped():
    events = Observable()
    calls = []

    def second(x):
        calls.append("second")

    def first(x):
        calls.append("first")
        events.off("end", second)

    events.on("end", first).on("end", second)
    events.trigger("end", None)

    assert calls == ["first"]


def test_subscribe_returns_independent_handles():
    events = Observable()
    calls = []

    sub1 = events.subscribe("end", calls.append)
    sub2 = events.subscribe("end", calls.append)
    assert isinstance(sub1, Subscription) and sub1 is not sub2

    assert events.unsubscribe(sub1) is True
    assert events.unsubscribe(sub1) is False
    assert sub1.active is False and sub2.active is True

    events.publish("end", "payload")
    assert calls == ["payload"]


def test_off_matches_bound_methods():
    class Listener:
        def __init__(self):
            self.seen = []

        def handle(self, x):
            self.seen.append(x)

    listener = Listener()
    events = Observable()
    events.on("end", listener.handle)
    events.off("end", listener.handle)
    events.trigger("end", 1)

    assert listener.seen == []
