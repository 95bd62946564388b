# brewhouse/api/deps.py

from typing import Callable, Generator

from fastapi import Request
from sqlalchemy.orm import Session

from brewhouse.events.bus import EventBus


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_event_bus(request: Request) -> EventBus:
    return request.app.state.event_bus


def get_session_factory(request: Request) -> Callable[[], Session]:
    return request.app.state.session_factory
