# brewhouse/api/v1/tanks.py

from datetime import datetime
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db, get_session_factory
from brewhouse.api.sse import temperature_stream
from brewhouse.core.config import settings
from brewhouse.schemas.tank import (
    TankCreate,
    TankOut,
    TankUpdate,
    TemperatureHistoryOut,
    TemperatureReadingCreate,
    TemperatureReadingOut,
)
from brewhouse.services import tanks_service

router = APIRouter(prefix="/tanks", tags=["tanks"])


@router.post("/", response_model=TankOut, status_code=status.HTTP_201_CREATED)
def create_tank_endpoint(
    data: TankCreate,
    db: Session = Depends(get_db),
):
    return tanks_service.create_tank(db, data)


@router.get("/", response_model=List[TankOut])
def list_tanks_endpoint(
    db: Session = Depends(get_db),
):
    return tanks_service.list_tanks(db)


@router.get("/{tank_id}", response_model=TankOut)
def get_tank_endpoint(
    tank_id: int,
    db: Session = Depends(get_db),
):
    return tanks_service.require_tank(db, tank_id)


@router.put("/{tank_id}", response_model=TankOut)
def update_tank_endpoint(
    tank_id: int,
    data: TankUpdate,
    db: Session = Depends(get_db),
):
    tank = tanks_service.require_tank(db, tank_id)
    return tanks_service.update_tank(db, tank, data)


@router.delete("/{tank_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tank_endpoint(
    tank_id: int,
    db: Session = Depends(get_db),
):
    tank = tanks_service.require_tank(db, tank_id)
    tanks_service.delete_tank(db, tank)
    return


@router.post(
    "/{tank_id}/temperature",
    response_model=TemperatureReadingOut,
    status_code=status.HTTP_201_CREATED,
)
def record_temperature_endpoint(
    tank_id: int,
    data: TemperatureReadingCreate,
    db: Session = Depends(get_db),
):
    """
    Device update: stores a reading and sets the tank's current temperature.
    """
    tank = tanks_service.require_tank(db, tank_id)
    return tanks_service.record_temperature(db, tank, data.temperature)


@router.get("/{tank_id}/temperature-history", response_model=TemperatureHistoryOut)
def temperature_history_endpoint(
    tank_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    """
    Readings in ascending time order; start/end filter only when both are given.
    """
    tank = tanks_service.require_tank(db, tank_id)
    rows = tanks_service.get_temperature_history(db, tank, start=start, end=end)
    return TemperatureHistoryOut(tank_id=tank.id, tank_name=tank.name, history=rows)


@router.get("/{tank_id}/temperature-stream")
def temperature_stream_endpoint(
    tank_id: int,
    request: Request,
    db: Session = Depends(get_db),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    """
    text/event-stream of the tank's latest reading, every TEMPERATURE_STREAM_INTERVAL seconds.
    """
    tanks_service.require_tank(db, tank_id)
    return StreamingResponse(
        temperature_stream(request, session_factory, tank_id, settings.TEMPERATURE_STREAM_INTERVAL),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
