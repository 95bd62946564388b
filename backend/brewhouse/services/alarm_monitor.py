# brewhouse/services/alarm_monitor.py

"""
Background alarm evaluation.

Every `interval` seconds the monitor re-reads tanks, alarms and the system
status, evaluates each alarm and publishes an `alarm-update` event only when
the evaluated state differs from the stored `is_active` flag.

Scheduling is fixed-delay: the loop waits `interval` after a tick finishes,
so a slow tick delays the next one instead of overlapping or queueing behind it.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from brewhouse.core.errors import NotFound
from brewhouse.db.models.alarm import Alarm
from brewhouse.db.models.system_status import SystemStatus
from brewhouse.events.bus import ALARM_UPDATE, Event, EventBus
from brewhouse.services import alarms_service, system_status_service, tanks_service

logger = logging.getLogger(__name__)

TRIGGERED = "triggered"
CLEARED = "cleared"


class AlarmMonitor:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        bus: EventBus,
        interval: float = 5.0,
        publish_status: bool = True,
    ) -> None:
        self.session_factory = session_factory
        self.bus = bus
        self.interval = interval
        self.publish_status = publish_status

        self._thread: Optional[threading.Thread] = None
        self._stop: Optional[threading.Event] = None
        self._lock = threading.Lock()

    # ========== lifecycle ==========

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop.is_set()
        )

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            previous = self._thread
            if previous is not None and previous is not threading.current_thread():
                # a stopped loop may still be inside its last tick
                previous.join()

            # one stop event per run
            stop = threading.Event()
            self._stop = stop
            self._thread = threading.Thread(
                target=self._run,
                args=(stop,),
                name="alarm-monitor",
                daemon=True,
            )
            self._thread.start()
        logger.info("alarm monitor started (interval=%ss)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._thread
            if thread is None or self._stop.is_set():
                return
            self._stop.set()
        if thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("alarm monitor stopped")

    def _run(self, stop: threading.Event) -> None:
        # first tick immediately, then every `interval` after the previous one ends
        while not stop.is_set():
            try:
                self.evaluate_once()
            except Exception:
                logger.exception("alarm monitor tick failed")
            if stop.wait(self.interval):
                break

    # ========== evaluation ==========

    def evaluate_once(self) -> List[Event]:
        """
        One tick. Returns the alarm-update events that were published.
        """
        events: List[Event] = []
        db = self.session_factory()
        try:
            try:
                system = system_status_service.get_system_status(db)
                alarms = alarms_service.list_alarms(db)
            except Exception:
                db.rollback()
                logger.exception("alarm monitor could not load alarms")
                return events

            alarm_ids = [alarm.id for alarm in alarms]
            for alarm_id, alarm in zip(alarm_ids, alarms):
                try:
                    event = self._evaluate_alarm(db, alarm, system)
                except Exception:
                    db.rollback()
                    logger.exception("alarm %s evaluation failed", alarm_id)
                    continue
                if event is not None:
                    self.bus.publish(event)
                    events.append(event)

            if self.publish_status:
                try:
                    self.bus.publish(Event(None, system_status_service.build_snapshot(db)))
                except Exception:
                    db.rollback()
                    logger.exception("system status snapshot failed")
        finally:
            db.close()
        return events

    def _evaluate_alarm(
        self,
        db: Session,
        alarm: Alarm,
        system: SystemStatus,
    ) -> Optional[Event]:
        tank = tanks_service.get_tank_by_id(db, alarm.tank_id)
        if tank is None:
            raise NotFound(f"Tank {alarm.tank_id} referenced by alarm {alarm.id} not found")

        should_be_active = alarms_service.evaluate_condition(alarm, tank, system)
        if should_be_active == bool(alarm.is_active):
            return None

        alarm.is_active = should_be_active
        db.add(alarm)
        db.commit()

        transition = TRIGGERED if should_be_active else CLEARED
        logger.info(
            "alarm %s: %s for tank %s (temperature=%s threshold=%s)",
            transition, alarm.name, tank.name, tank.temperature, alarm.threshold,
        )
        return Event(ALARM_UPDATE, self._payload(alarm, tank.name, tank.temperature, transition))

    @staticmethod
    def _payload(alarm: Alarm, tank_name: str, temperature: float, transition: str) -> Dict[str, Any]:
        return {
            "alarmId": alarm.id,
            "name": alarm.name,
            "tankId": alarm.tank_id,
            "tankName": tank_name,
            "temperature": temperature,
            "threshold": alarm.threshold,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "transitionType": transition,
        }
