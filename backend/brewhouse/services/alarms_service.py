# brewhouse/services/alarms_service.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from brewhouse.core.errors import reject_nulls
from brewhouse.db.models.alarm import Alarm
from brewhouse.db.models.system_status import SystemStatus
from brewhouse.db.models.tank import Tank
from brewhouse.schemas.alarm import AlarmCreate, AlarmUpdate
from brewhouse.services import tanks_service

HIGH_TEMPERATURE = "High Temperature"
LOW_TEMPERATURE = "Low Temperature"
SYSTEM_ERROR = "System Error"


def create_alarm(db: Session, data: AlarmCreate) -> Alarm:
    tanks_service.require_tank(db, data.tank_id)
    alarm = Alarm(
        name=data.name,
        type=data.type,
        threshold=data.threshold,
        tank_id=data.tank_id,
        is_active=False,
    )
    db.add(alarm)
    db.commit()
    db.refresh(alarm)
    return alarm


def get_alarm_by_id(db: Session, alarm_id: int) -> Optional[Alarm]:
    return db.get(Alarm, alarm_id)


def list_alarms(
    db: Session,
    tank_id: Optional[int] = None,
    active_only: bool = False,
) -> List[Alarm]:
    stmt = select(Alarm)
    if tank_id is not None:
        stmt = stmt.where(Alarm.tank_id == tank_id)
    if active_only:
        stmt = stmt.where(Alarm.is_active.is_(True))
    stmt = stmt.order_by(Alarm.id)
    return list(db.scalars(stmt))


def update_alarm(db: Session, alarm: Alarm, data: AlarmUpdate) -> Alarm:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, ("name", "type", "threshold", "tank_id"))
    if "tank_id" in changes:
        tanks_service.require_tank(db, changes["tank_id"])
    for field, value in changes.items():
        setattr(alarm, field, value)
    db.add(alarm)
    db.commit()
    db.refresh(alarm)
    return alarm


def delete_alarm(db: Session, alarm: Alarm) -> None:
    db.delete(alarm)
    db.commit()


def is_system_error(tank: Tank, system: SystemStatus) -> bool:
    return (
        (system.chiller_status == "Off" and tank.mode == "Cooling")
        or (system.heater_status == "Off" and tank.mode == "Heating")
        or (tank.mode != "Idle" and system.system_mode == "Idle")
    )


def evaluate_condition(alarm: Alarm, tank: Tank, system: SystemStatus) -> bool:
    """
    True when the alarm's trigger condition currently holds.
    """
    if alarm.type == HIGH_TEMPERATURE:
        return tank.temperature > alarm.threshold
    if alarm.type == LOW_TEMPERATURE:
        return tank.temperature < alarm.threshold
    if alarm.type == SYSTEM_ERROR:
        return is_system_error(tank, system)
    raise ValueError(f"unknown alarm type: {alarm.type!r}")
