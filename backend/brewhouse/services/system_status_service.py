# brewhouse/services/system_status_service.py

from typing import Any, Dict

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from brewhouse.core.errors import reject_nulls
from brewhouse.db.models.system_status import SystemStatus
from brewhouse.db.models.tank import Tank
from brewhouse.schemas.system_status import SystemStatusUpdate


def get_system_status(db: Session) -> SystemStatus:
    """
    The singleton row, created with defaults on first access.
    """
    stmt = select(SystemStatus).order_by(SystemStatus.id).limit(1)
    row = db.scalars(stmt).first()
    if row is None:
        row = SystemStatus(chiller_status="Standby", heater_status="Standby", system_mode="Idle")
        db.add(row)
        db.commit()
        db.refresh(row)
    return row


def update_system_status(db: Session, data: SystemStatusUpdate) -> SystemStatus:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, changes.keys())
    row = get_system_status(db)
    for field, value in changes.items():
        setattr(row, field, value)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def build_snapshot(db: Session) -> Dict[str, Any]:
    """
    Payload of the periodic status push on the event stream.
    """
    system = get_system_status(db)
    total_tanks = db.execute(select(func.count(Tank.id))).scalar_one()
    active_tanks = db.execute(
        select(func.count(Tank.id)).where(Tank.status == "Active")
    ).scalar_one()
    return {
        "chillerStatus": system.chiller_status,
        "heaterStatus": system.heater_status,
        "systemMode": system.system_mode,
        "totalTanks": total_tanks,
        "activeTanks": active_tanks,
    }
