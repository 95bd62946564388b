# brewhouse/api/sse.py

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, AsyncIterator, Callable, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_event_bus
from brewhouse.core.config import settings
from brewhouse.events.bus import CONNECTED, HEARTBEAT, Event, EventBus, format_sse
from brewhouse.services import tanks_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sse"])


async def event_stream(
    request: Request,
    bus: EventBus,
    heartbeat_interval: float,
) -> AsyncIterator[str]:
    """
    connected -> bus events as they arrive, heartbeat when idle.

    The alarm monitor publishes from its own thread, so the listener hands
    events over to this loop with call_soon_threadsafe.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[Event] = asyncio.Queue()

    def listener(event: Event) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, event)

    bus.subscribe(listener)
    logger.info("stream client connected (%d listeners)", bus.listener_count)
    try:
        yield format_sse(Event(CONNECTED, {"status": "connected"}))
        while True:
            if await request.is_disconnected():
                break
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_interval)
            except asyncio.TimeoutError:
                event = Event(HEARTBEAT, int(time.time() * 1000))
            yield format_sse(event)
    finally:
        bus.unsubscribe(listener)
        logger.info("stream client disconnected")



def _latest_point(session_factory: Callable[[], Session], tank_id: int) -> Optional[Dict[str, Any]]:
    db = session_factory()
    try:
        reading = tanks_service.get_latest_reading(db, tank_id)
        if reading is None:
            return None
        return {"temperature": reading.temperature, "timestamp": reading.timestamp.isoformat()}
    finally:
        db.close()


async def temperature_stream(
    request: Request,
    session_factory: Callable[[], Session],
    tank_id: int,
    interval: float,
) -> AsyncIterator[str]:
    """
    Latest reading of one tank, re-sent every `interval` seconds.
    Nothing is sent while the tank has no readings.
    """
    logger.info("temperature stream opened for tank %s", tank_id)
    try:
        while not await request.is_disconnected():
            point = await run_in_threadpool(_latest_point, session_factory, tank_id)
            if point is not None:
                yield format_sse(Event(None, point))
            await asyncio.sleep(interval)
    finally:
        logger.info("temperature stream closed for tank %s", tank_id)


@router.get("/api/sse")
async def sse_endpoint(
    request: Request,
    bus: EventBus = Depends(get_event_bus),
):
    """Live push for the dashboard (alarm-update, heartbeat, status snapshots)."""
    return StreamingResponse(
        event_stream(request, bus, settings.SSE_HEARTBEAT_INTERVAL),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
