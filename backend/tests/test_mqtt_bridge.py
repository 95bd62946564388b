"""
MQTT bridge message handling (no broker connection).
"""

import json

import pytest

from brewhouse.db.models import Tank
from brewhouse.events.bus import ALARM_UPDATE, Event
from brewhouse.mqtt.client import TOPIC_ALARM_EVENT, BrewhouseMqttBridge, parse_tank_id


@pytest.fixture
def bridge(session_factory, bus):
    return BrewhouseMqttBridge(session_factory, bus)


@pytest.mark.parametrize(
    "topic, expected",
    [
        ("brewhouse/tanks/3/temperature", 3),
        ("brewhouse/tanks/abc/temperature", None),
        ("other/tanks/3/temperature", None),
        ("brewhouse/tanks/3", None),
    ],
)
def test_parse_tank_id(topic, expected):
    assert parse_tank_id(topic) == expected


def test_temperature_message_records_reading(bridge, session_factory, tank):
    bridge.handle_temperature(f"brewhouse/tanks/{tank.id}/temperature", b'{"temperature": 71.5}')

    check = session_factory()
    assert check.get(Tank, tank.id).temperature == 71.5
    check.close()


def test_bad_payload_and_unknown_tank_are_ignored(bridge, session_factory, tank):
    bridge.handle_temperature(f"brewhouse/tanks/{tank.id}/temperature", b"not json")
    bridge.handle_temperature("brewhouse/tanks/77/temperature", b'{"temperature": 50}')

    check = session_factory()
    assert check.get(Tank, tank.id).temperature == 68.0
    check.close()


def test_alarm_events_are_republished(bridge, monkeypatch):
    sent = []
    monkeypatch.setattr(
        bridge.client, "publish", lambda topic, payload, qos=0, retain=False: sent.append((topic, payload))
    )

    bridge.on_event(Event(None, {"systemMode": "Idle"}))
    bridge.on_event(Event(ALARM_UPDATE, {"alarmId": 1, "transitionType": "triggered"}))

    assert len(sent) == 1
    topic, payload = sent[0]
    assert topic == TOPIC_ALARM_EVENT
    assert json.loads(payload)["alarmId"] == 1
