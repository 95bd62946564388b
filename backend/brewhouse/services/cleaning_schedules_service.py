# brewhouse/services/cleaning_schedules_service.py

import calendar
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from brewhouse.core.errors import ValidationError, reject_nulls
from brewhouse.db.models.cleaning_schedule import CleaningSchedule
from brewhouse.schemas.cleaning_schedule import CleaningScheduleCreate, CleaningScheduleUpdate
from brewhouse.services import tanks_service

INTERVAL_DAYS = {
    "Daily": 1,
    "Weekly": 7,
    "Bi-weekly": 14,
}


def add_month(d: date) -> date:
    # clamp to the last day of the next month (Jan 31 -> Feb 28/29)
    year, month = (d.year + 1, 1) if d.month == 12 else (d.year, d.month + 1)
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def compute_next_cleaning(cleaning_type: str, schedule: Optional[str], last_cleaning: date) -> date:
    if cleaning_type == "single":
        return last_cleaning
    if schedule is None:
        raise ValidationError("schedule is required for recurring cleaning", field="schedule")
    if schedule == "Monthly":
        return add_month(last_cleaning)
    if schedule not in INTERVAL_DAYS:
        raise ValidationError(f"Invalid schedule {schedule!r}", field="schedule")
    return last_cleaning + timedelta(days=INTERVAL_DAYS[schedule])


def create_cleaning_schedule(db: Session, data: CleaningScheduleCreate) -> CleaningSchedule:
    tanks_service.require_tank(db, data.tank_id)
    row = CleaningSchedule(
        tank_id=data.tank_id,
        type=data.type,
        schedule=data.schedule,
        last_cleaning=data.last_cleaning,
        next_cleaning=compute_next_cleaning(data.type, data.schedule, data.last_cleaning),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_cleaning_schedule_by_id(db: Session, schedule_id: int) -> Optional[CleaningSchedule]:
    return db.get(CleaningSchedule, schedule_id)


def list_cleaning_schedules(db: Session, tank_id: Optional[int] = None) -> List[CleaningSchedule]:
    stmt = select(CleaningSchedule)
    if tank_id is not None:
        stmt = stmt.where(CleaningSchedule.tank_id == tank_id)
    stmt = stmt.order_by(CleaningSchedule.next_cleaning, CleaningSchedule.id)
    return list(db.scalars(stmt))


def update_cleaning_schedule(
    db: Session,
    row: CleaningSchedule,
    data: CleaningScheduleUpdate,
) -> CleaningSchedule:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, ("type", "last_cleaning"))
    cleaning_type = changes.get("type", row.type)
    schedule = changes.get("schedule", row.schedule)
    last_cleaning = changes.get("last_cleaning", row.last_cleaning)

    next_cleaning = compute_next_cleaning(cleaning_type, schedule, last_cleaning)

    for field, value in changes.items():
        setattr(row, field, value)
    row.next_cleaning = next_cleaning
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_cleaning_schedule(db: Session, row: CleaningSchedule) -> None:
    db.delete(row)
    db.commit()
