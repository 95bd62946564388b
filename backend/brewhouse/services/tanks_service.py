# brewhouse/services/tanks_service.py

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brewhouse.core.errors import NotFound, ValidationError, reject_nulls
from brewhouse.db.models.tank import Tank, TemperatureReading
from brewhouse.schemas.tank import TankCreate, TankUpdate

logger = logging.getLogger(__name__)

MIN_READING = -50.0
MAX_READING = 150.0


def create_tank(db: Session, data: TankCreate) -> Tank:
    tank = Tank(
        name=data.name,
        temperature=data.temperature,
        status=data.status,
        mode=data.mode,
        valve_status=data.valve_status,
    )
    db.add(tank)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"Tank with name {data.name!r} already exists", field="name")
    db.refresh(tank)
    logger.info("tank created id=%s name=%s", tank.id, tank.name)
    return tank


def get_tank_by_id(db: Session, tank_id: int) -> Optional[Tank]:
    return db.get(Tank, tank_id)


def require_tank(db: Session, tank_id: int) -> Tank:
    tank = get_tank_by_id(db, tank_id)
    if not tank:
        raise NotFound(f"Tank {tank_id} not found", field="tank_id")
    return tank


def list_tanks(db: Session) -> List[Tank]:
    stmt = select(Tank).order_by(Tank.id)
    return list(db.scalars(stmt))


def update_tank(db: Session, tank: Tank, data: TankUpdate) -> Tank:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, ("name", "status", "mode", "valve_status"))
    for field, value in changes.items():
        setattr(tank, field, value)
    db.add(tank)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"Tank with name {data.name!r} already exists", field="name")
    db.refresh(tank)
    return tank


def delete_tank(db: Session, tank: Tank) -> None:
    db.execute(delete(TemperatureReading).where(TemperatureReading.tank_id == tank.id))
    db.delete(tank)
    db.commit()


def record_temperature(db: Session, tank: Tank, temperature: float) -> TemperatureReading:
    """
    Store a reading and make it the tank's current temperature.
    """
    if not MIN_READING <= temperature <= MAX_READING:
        raise ValidationError(
            f"Temperature must be between {MIN_READING:g} and {MAX_READING:g}",
            field="temperature",
        )

    reading = TemperatureReading(tank_id=tank.id, temperature=temperature)
    tank.temperature = temperature
    db.add(reading)
    db.add(tank)
    db.commit()
    db.refresh(reading)
    return reading


def get_temperature_history(
    db: Session,
    tank: Tank,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[TemperatureReading]:
    stmt = select(TemperatureReading).where(TemperatureReading.tank_id == tank.id)
    if start is not None and end is not None:
        if start > end:
            raise ValidationError("start must not be after end", field="start")
        stmt = stmt.where(
            TemperatureReading.timestamp >= start,
            TemperatureReading.timestamp <= end,
        )
    stmt = stmt.order_by(TemperatureReading.timestamp, TemperatureReading.id)
    return list(db.scalars(stmt))


def get_latest_reading(db: Session, tank_id: int) -> Optional[TemperatureReading]:
    stmt = (
        select(TemperatureReading)
        .where(TemperatureReading.tank_id == tank_id)
        .order_by(TemperatureReading.timestamp.desc(), TemperatureReading.id.desc())
        .limit(1)
    )
    return db.scalars(stmt).first()
