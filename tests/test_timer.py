import pytest

from planeflap.engine.timer import TimerEvents


def test_loop_fires_every_interval():
    timers = TimerEvents()
    calls = []
    timers.loop(1500, calls.append, "row")

    timers.update(1000)
    assert calls == []
    timers.update(500)
    assert calls == ["row"]
    timers.update(1500)
    assert calls == ["row"] * 2


def test_long_frame_fires_a_loop_once():
    timers = TimerEvents()
    calls = []
    event = timers.loop(1500, calls.append, "row")

    assert timers.update(6000) == 1
    assert calls == ["row"]
    # Backlog is capped at one interval
    assert event.elapsed == 1500
    timers.update(0)
    assert calls == ["row"] * 2
    timers.update(0)
    assert calls == ["row"] * 2


def test_one_shot_fires_once_and_is_dropped():
    timers = TimerEvents()
    calls = []
    event = timers.add(100, lambda: calls.append(1))

    assert timers.update(250) == 1
    assert calls == [1]
    assert timers.length == 0
    assert event.fire_count == 1


def test_removed_event_never_fires():
    timers = TimerEvents()
    calls = []
    event = timers.loop(100, lambda: calls.append(1))

    assert timers.remove(event)
    assert not timers.remove(event)
    timers.update(1000)
    assert calls == []


def test_remove_from_inside_callback_stops_the_loop():
    timers = TimerEvents()
    calls = []

    def fire():
        calls.append(1)
        timers.remove(event)

    event = timers.loop(100, fire)
    timers.update(500)
    timers.update(500)
    assert calls == [1]
    assert timers.length == 0


def test_remove_all():
    timers = TimerEvents()
    timers.loop(100, lambda: None)
    timers.add(100, lambda: None)
    timers.remove_all()
    assert timers.length == 0
    assert timers.update(1000) == 0


def test_non_positive_delay_is_rejected():
    timers = TimerEvents()
    with pytest.raises(ValueError):
        timers.loop(0, lambda: None)
