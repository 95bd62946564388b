# brewhouse/main.py

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from brewhouse.core.config import settings
from brewhouse.core.errors import register_exception_handlers
from brewhouse.core.logging import configure_logging
from brewhouse.db.session import Base, SessionLocal, engine
from brewhouse.db import models  # noqa: F401

from brewhouse.api.v1 import tanks as tanks_router
from brewhouse.api.v1 import brew_styles as brew_styles_router
from brewhouse.api.v1 import production_schedules as production_schedules_router
from brewhouse.api.v1 import alarms as alarms_router
from brewhouse.api.v1 import system_status as system_status_router
from brewhouse.api.v1 import cleaning_schedules as cleaning_schedules_router
from brewhouse.api.v1 import app_settings as app_settings_router

from brewhouse.api import sse as sse_router

from brewhouse.events.bus import EventBus
from brewhouse.mqtt.client import BrewhouseMqttBridge
from brewhouse.services.alarm_monitor import AlarmMonitor

logger = logging.getLogger(__name__)


def create_app(
    session_factory: Optional[Callable[[], Session]] = None,
    start_background: Optional[bool] = None,
) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)

    if session_factory is None:
        Base.metadata.create_all(bind=engine)
        session_factory = SessionLocal
    if start_background is None:
        start_background = settings.ALARM_MONITOR_ENABLED

    # process-owned event bus, shared by the monitor, the MQTT bridge and /api/sse
    bus = EventBus()
    app.state.session_factory = session_factory
    app.state.event_bus = bus
    app.state.alarm_monitor = AlarmMonitor(
        session_factory,
        bus,
        interval=settings.ALARM_CHECK_INTERVAL,
    )
    app.state.mqtt_bridge = None

    origins = [
        origin.strip()
        for origin in settings.BACKEND_CORS_ORIGINS.split(",")
        if origin.strip()
    ]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # REST API
    app.include_router(tanks_router.router, prefix="/api/v1")
    app.include_router(brew_styles_router.router, prefix="/api/v1")
    app.include_router(production_schedules_router.router, prefix="/api/v1")
    app.include_router(alarms_router.router, prefix="/api/v1")
    app.include_router(system_status_router.router, prefix="/api/v1")
    app.include_router(cleaning_schedules_router.router, prefix="/api/v1")
    app.include_router(app_settings_router.router, prefix="/api/v1")

    # event stream
    app.include_router(sse_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.on_event("startup")
    def on_startup():
        if start_background:
            app.state.alarm_monitor.start()

        if settings.MQTT_ENABLED:
            bridge = BrewhouseMqttBridge(session_factory, bus)
            try:
                bridge.start()
            except OSError:
                logger.exception("MQTT broker unreachable, bridge disabled")
            else:
                app.state.mqtt_bridge = bridge

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.alarm_monitor.stop(timeout=5)
        if app.state.mqtt_bridge is not None:
            app.state.mqtt_bridge.stop()

    return app


app = create_app()
