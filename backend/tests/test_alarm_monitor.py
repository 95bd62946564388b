"""
AlarmMonitor: transition-only notifications, per-alarm failure isolation, lifecycle.
"""

import threading
import time

import pytest

from brewhouse.db.models import Alarm, SystemStatus
from brewhouse.events.bus import ALARM_UPDATE
from brewhouse.services.alarm_monitor import AlarmMonitor


@pytest.fixture
def received(bus):
    events = []
    bus.subscribe(events.append)
    return events


@pytest.fixture
def monitor(session_factory, bus):
    m = AlarmMonitor(session_factory, bus, interval=0.05, publish_status=False)
    yield m
    m.stop(timeout=2)


def _alarm(db, tank_id, type_="High Temperature", threshold=75.0, is_active=False, name="too warm"):
    alarm = Alarm(name=name, type=type_, threshold=threshold, tank_id=tank_id, is_active=is_active)
    db.add(alarm)
    db.commit()
    db.refresh(alarm)
    return alarm


def _set(db, obj, **values):
    for k, v in values.items():
        setattr(obj, k, v)
    db.commit()


def _alarm_updates(events):
    return [e for e in events if e.type == ALARM_UPDATE]


# ═══════════════════════════════════════════════════════════════════
# Transitions
# ═══════════════════════════════════════════════════════════════════


def test_high_temperature_triggers_once(db, session_factory, tank, monitor, received):
    _set(db, tank, temperature=80.0)
    alarm = _alarm(db, tank.id)

    first = monitor.evaluate_once()
    assert len(first) == 1
    payload = first[0].data
    assert payload["transitionType"] == "triggered"
    assert payload["alarmId"] == alarm.id
    assert payload["tankName"] == "FV-01"
    assert payload["temperature"] == 80.0
    assert payload["threshold"] == 75.0
    assert "timestamp" in payload

    check = session_factory()
    assert check.get(Alarm, alarm.id).is_active is True
    check.close()

    # still 80: no new event
    assert monitor.evaluate_once() == []
    assert len(_alarm_updates(received)) == 1


def test_clears_when_temperature_drops(db, tank, monitor, received):
    _set(db, tank, temperature=80.0)
    _alarm(db, tank.id)
    monitor.evaluate_once()

    _set(db, tank, temperature=70.0)
    events = monitor.evaluate_once()
    assert [e.data["transitionType"] for e in events] == ["cleared"]
    assert [e.data["transitionType"] for e in _alarm_updates(received)] == ["triggered", "cleared"]


def test_threshold_itself_does_not_trigger(db, tank, monitor):
    _set(db, tank, temperature=75.0)
    _alarm(db, tank.id)
    _alarm(db, tank.id, type_="Low Temperature", name="too cold")
    assert monitor.evaluate_once() == []


def test_low_temperature(db, tank, monitor):
    _set(db, tank, temperature=30.0)
    _alarm(db, tank.id, type_="Low Temperature", threshold=32.0)
    assert [e.data["transitionType"] for e in monitor.evaluate_once()] == ["triggered"]


def test_stored_active_alarm_without_condition_is_cleared(db, tank, monitor):
    _alarm(db, tank.id, is_active=True)
    assert [e.data["transitionType"] for e in monitor.evaluate_once()] == ["cleared"]


@pytest.mark.parametrize(
    "tank_mode, chiller, heater, system_mode, expected",
    [
        ("Cooling", "Off", "Standby", "Cooling", True),
        ("Heating", "Standby", "Off", "Heating", True),
        ("Cooling", "Running", "Standby", "Idle", True),
        ("Cooling", "Running", "Off", "Cooling", False),
        ("Idle", "Off", "Off", "Idle", False),
    ],
)
def test_system_error_condition(db, tank, monitor, tank_mode, chiller, heater, system_mode, expected):
    _set(db, tank, mode=tank_mode)
    db.add(SystemStatus(chiller_status=chiller, heater_status=heater, system_mode=system_mode))
    db.commit()
    _alarm(db, tank.id, type_="System Error", threshold=0.0)

    events = monitor.evaluate_once()
    assert (len(events) == 1) is expected


# ═══════════════════════════════════════════════════════════════════
# Failure isolation
# ═══════════════════════════════════════════════════════════════════


def test_dangling_tank_reference_does_not_stop_other_alarms(db, tank, monitor, caplog):
    _set(db, tank, temperature=80.0)
    _alarm(db, 999, name="orphan")
    good = _alarm(db, tank.id, name="fine")

    events = monitor.evaluate_once()
    assert [e.data["alarmId"] for e in events] == [good.id]
    assert "evaluation failed" in caplog.text


def test_status_snapshot_is_published_unnamed(db, session_factory, bus, tank, received):
    monitor = AlarmMonitor(session_factory, bus, publish_status=True)
    monitor.evaluate_once()

    snapshots = [e for e in received if e.type is None]
    assert len(snapshots) == 1
    assert snapshots[0].data["systemMode"] == "Idle"
    assert snapshots[0].data["totalTanks"] == 1


def test_no_listener_drops_events(db, session_factory, tank):
    from brewhouse.events.bus import EventBus

    _set(db, tank, temperature=80.0)
    _alarm(db, tank.id)
    monitor = AlarmMonitor(session_factory, EventBus(), publish_status=False)

    # persisted even though nobody listened
    assert len(monitor.evaluate_once()) == 1
    assert monitor.evaluate_once() == []


# ═══════════════════════════════════════════════════════════════════
# Lifecycle
# ═══════════════════════════════════════════════════════════════════


def test_start_is_idempotent_and_stop_is_repeatable(session_factory, bus):
    ticked = threading.Event()
    bus.subscribe(lambda e: ticked.set())
    monitor = AlarmMonitor(session_factory, bus, interval=0.05, publish_status=True)

    assert monitor.is_running is False
    monitor.start()
    thread = monitor._thread
    monitor.start()
    assert monitor._thread is thread
    assert monitor.is_running is True

    assert ticked.wait(2.0)

    monitor.stop(timeout=2)
    assert monitor.is_running is False
    assert not thread.is_alive()
    monitor.stop(timeout=2)


def test_restart_after_stop(monitor):
    monitor.start()
    monitor.stop(timeout=2)
    monitor.start()
    assert monitor.is_running is True


def test_tick_error_does_not_kill_the_loop(bus):
    calls = []

    def broken_factory():
        calls.append(1)
        raise RuntimeError("database gone")

    monitor = AlarmMonitor(broken_factory, bus, interval=0.01)
    monitor.start()
    try:
        for _ in range(200):
            if len(calls) >= 3:
                break
            time.sleep(0.01)
        assert len(calls) >= 3
        assert monitor.is_running
    finally:
        monitor.stop(timeout=2)


def test_restart_after_timed_out_stop_keeps_one_loop(session_factory, bus):
    def slow_factory():
        time.sleep(0.3)
        return session_factory()

    monitor = AlarmMonitor(slow_factory, bus, interval=0.01, publish_status=False)
    monitor.start()
    time.sleep(0.05)  # first tick is still running
    monitor.stop(timeout=0.01)
    monitor.start()
    try:
        loops = [t for t in threading.enumerate() if t.name == "alarm-monitor" and t.is_alive()]
        assert len(loops) == 1
        assert monitor.is_running
    finally:
        monitor.stop(timeout=2)
    assert not any(t.name == "alarm-monitor" and t.is_alive() for t in threading.enumerate())


# ═══════════════════════════════════════════════════════════════════
# Scheduling
# ═══════════════════════════════════════════════════════════════════


class SlowMonitor(AlarmMonitor):
    """Each tick takes longer than the interval."""

    tick_seconds = 0.05

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.windows = []
        self.in_tick = 0
        self.max_in_tick = 0

    def evaluate_once(self):
        self.in_tick += 1
        self.max_in_tick = max(self.max_in_tick, self.in_tick)
        entered = time.monotonic()
        time.sleep(self.tick_seconds)
        self.windows.append((entered, time.monotonic()))
        self.in_tick -= 1
        return []


def test_long_ticks_neither_overlap_nor_queue(session_factory, bus):
    monitor = SlowMonitor(session_factory, bus, interval=0.01)
    began = time.monotonic()
    monitor.start()
    time.sleep(0.4)
    monitor.stop(timeout=2)
    elapsed = time.monotonic() - began

    windows = monitor.windows
    assert len(windows) >= 3
    assert monitor.max_in_tick == 1

    # the next tick starts only after the previous one finished plus the delay
    for (_, prev_exit), (next_enter, _) in zip(windows, windows[1:]):
        assert next_enter >= prev_exit

    # missed intervals are not made up afterwards
    assert len(windows) <= elapsed / SlowMonitor.tick_seconds + 1
