# brewhouse/events/bus.py

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

CONNECTED = "connected"
HEARTBEAT = "heartbeat"
ALARM_UPDATE = "alarm-update"


@dataclass
class Event:
    """One message on the bus. type=None is the unnamed system-status payload."""

    type: Optional[str]
    data: Any
    ts: float = field(default_factory=time.time)


Listener = Callable[[Event], None]


class EventBus:
    """Publish/subscribe between the alarm monitor (its own thread) and stream clients.

    - One instance per app, stored on app.state and passed around by reference.
    - publish() is thread-safe and fire-and-forget: with no listeners the event is dropped.
    - A listener that raises is unsubscribed.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def publish(self, event: Event) -> int:
        with self._lock:
            listeners = list(self._listeners)

        delivered = 0
        dead = []
        for listener in listeners:
            try:
                listener(event)
                delivered += 1
            except Exception:
                logger.exception("event listener failed, unsubscribing")
                dead.append(listener)

        for listener in dead:
            self.unsubscribe(listener)
        return delivered


def format_sse(event: Event) -> str:
    lines = []
    if event.type:
        lines.append(f"event: {event.type}")
    payload = event.data if isinstance(event.data, str) else json.dumps(event.data, default=str)
    for line in payload.splitlines() or [""]:
        lines.append(f"data: {line}")
    return "\n".join(lines) + "\n\n"

