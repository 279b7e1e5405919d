import pytest

from flownodes.signals import Signal


def test_emit_passes_arguments_to_slot():
    signal = Signal()
    received = []
    signal.connect(lambda *args: received.append(args))
    signal.emit(1, "two")
    assert received == [(1, "two")]


def test_slots_run_in_connection_order():
    signal = Signal()
    order = []
    signal.connect(lambda: order.append("first"))
    signal.connect(lambda: order.append("second"))
    signal.emit()
    assert order == ["first", "second"]


def test_disconnect_stops_delivery():
    signal = Signal()
    received = []
    slot = received.append
    signal.connect(slot)
    assert signal.disconnect(slot) is True
    signal.emit("x")
    assert received == []


def test_disconnect_unknown_slot_reports_false():
    signal = Signal()
    assert signal.disconnect(print) is False


def test_duplicate_connection_runs_twice_and_disconnects_all():
    signal = Signal()
    received = []
    slot = received.append
    signal.connect(slot)
    signal.connect(slot)
    signal.emit("a")
    assert received == ["a", "a"]
    signal.disconnect(slot)
    assert len(signal) == 0


def test_bound_methods_compare_equal():
    class Counter:
        def __init__(self):
            self.count = 0

        def bump(self):
            self.count += 1

    counter = Counter()
    signal = Signal()
    signal.connect(counter.bump)
    assert counter.bump in signal
    signal.emit()
    assert counter.count == 1
    signal.disconnect(counter.bump)
    assert counter.bump not in signal


def test_slot_may_disconnect_itself_during_emit():
    signal = Signal()
    calls = []
    results = []

    def once():
        calls.append("once")
        results.append(signal.disconnect(once))

    signal.connect(once)
    signal.emit()
    signal.emit()
    assert calls == ["once"]
    assert results == [True]
    assert len(signal) == 0


def test_connect_rejects_non_callable():
    with pytest.raises(TypeError):
        Signal().connect(42)