# brewhouse/mqtt/client.py

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Dict, Optional

import paho.mqtt.client as mqtt
from sqlalchemy.orm import Session

from brewhouse.core.config import settings
from brewhouse.core.errors import BrewhouseError
from brewhouse.events.bus import ALARM_UPDATE, Event, EventBus
from brewhouse.services import tanks_service

logger = logging.getLogger(__name__)

# topics
TOPIC_TANK_TEMPERATURE = "brewhouse/tanks/+/temperature"  # device -> server
TOPIC_ALARM_EVENT = "brewhouse/event/alarm"               # server -> subscribers


def parse_tank_id(topic: str) -> Optional[int]:
    """
    brewhouse/tanks/3/temperature -> 3
    """
    parts = topic.split("/")
    if len(parts) != 4 or parts[0] != "brewhouse" or parts[1] != "tanks":
        return None
    try:
        return int(parts[2])
    except ValueError:
        return None


class BrewhouseMqttBridge:
    """Device telemetry in, alarm transitions out.

    - temperature messages are stored as tank readings (the alarm monitor picks them up)
    - alarm-update events from the bus are republished on TOPIC_ALARM_EVENT
    """

    def __init__(self, session_factory: Callable[[], Session], bus: EventBus) -> None:
        self.session_factory = session_factory
        self.bus = bus

        client_id = settings.MQTT_CLIENT_ID or "brewhouse-backend"
        self.client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )
        self.client.on_connect = self._on_connect
        self.client.on_message = self._on_message
        self._thread: Optional[threading.Thread] = None

    # ========== start / stop ==========

    def start(self) -> None:
        host = settings.MQTT_BROKER_HOST
        port = settings.MQTT_BROKER_PORT

        logger.info("connecting to MQTT broker %s:%s", host, port)
        self.client.connect(host, port, keepalive=60)

        self._thread = threading.Thread(target=self.client.loop_forever, name="mqtt", daemon=True)
        self._thread.start()
        self.bus.subscribe(self.on_event)

    def stop(self) -> None:
        self.bus.unsubscribe(self.on_event)
        self.client.disconnect()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    # ========== callbacks ==========

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        logger.info("MQTT connected rc=%s", reason_code)
        client.subscribe(TOPIC_TANK_TEMPERATURE, qos=1)

    def _on_message(self, client, userdata, msg):
        self.handle_temperature(msg.topic, msg.payload)

    def handle_temperature(self, topic: str, raw: bytes) -> None:
        tank_id = parse_tank_id(topic)
        if tank_id is None:
            logger.warning("ignoring message on unexpected topic %s", topic)
            return

        try:
            data = json.loads(raw.decode("utf-8"))
            temperature = float(data["temperature"])
        except (ValueError, KeyError, TypeError, UnicodeDecodeError) as e:
            logger.warning("bad temperature payload on %s: %r (%r)", topic, raw, e)
            return

        db = self.session_factory()
        try:
            tank = tanks_service.require_tank(db, tank_id)
            tanks_service.record_temperature(db, tank, temperature)
        except BrewhouseError as e:
            db.rollback()
            logger.warning("temperature for tank %s rejected: %s", tank_id, e.message)
        finally:
            db.close()

    def on_event(self, event: Event) -> None:
        if event.type != ALARM_UPDATE:
            return
        self.publish_alarm(event.data)

    def publish_alarm(self, payload: Dict[str, Any]) -> None:
        data_str = json.dumps(payload, ensure_ascii=False)
        logger.info("publish -> %s: %s", TOPIC_ALARM_EVENT, data_str)
        self.client.publish(TOPIC_ALARM_EVENT, data_str, qos=1, retain=False)
