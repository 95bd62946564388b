# brewhouse/services/production_schedules_service.py

"""
Production scheduling.

- derive_schedule_fields(): end date / expected volume / batch number from a brew style
- has_conflict(): inclusive overlap check against the other non-cancelled runs of a tank
- create/update run both before writing.

The conflict check and the write are two statements, not one transaction:
two concurrent submissions for the same tank can both pass the check.
The batch number is protected by its unique constraint.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brewhouse.core.errors import (
    BrewhouseError,
    Conflict,
    DuplicateBatch,
    NotFound,
    ValidationError,
    reject_nulls,
)
from brewhouse.db.models.brew_style import BrewStyle
from brewhouse.db.models.production_schedule import ProductionSchedule
from brewhouse.schemas.production_schedule import (
    ProductionScheduleCreate,
    ProductionScheduleUpdate,
)
from brewhouse.services import brew_styles_service, tanks_service

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"
ACTUAL_VOLUME_TOLERANCE = 1.10
BATCH_DATE_FORMAT = "%y%m%d"
REQUIRED_FIELDS = ("tank_id", "brew_style", "start_date", "status")


@dataclass(frozen=True)
class ScheduleFields:
    end_date: date
    expected_volume: float
    batch_number: str


# ===== Schedule calculator =====

def total_duration_days(style: BrewStyle) -> int:
    return (
        style.primary_fermentation_days
        + (style.secondary_fermentation_days or 0)
        + style.clarification_days
        + style.conditioning_days
    )


def compute_end_date(style: BrewStyle, start_date: date) -> date:
    return start_date + timedelta(days=total_duration_days(style))


def compute_expected_volume(style: BrewStyle) -> float:
    beverage_type = style.beverage_type

    if beverage_type == "mead":
        if style.target_water_volume is None:
            raise ValidationError(
                f"Brew style {style.name!r} has no target water volume",
                field="target_water_volume",
            )
        return float(style.target_water_volume)

    if beverage_type == "cider":
        if style.juice_total_volume is None:
            raise ValidationError(
                f"Brew style {style.name!r} has no total juice volume",
                field="juice_total_volume",
            )
        return float(style.juice_total_volume)

    if beverage_type == "beer":
        for field in ("mash_volume", "sparge_volume"):
            if getattr(style, field) is None:
                raise ValidationError(
                    f"Brew style {style.name!r} has no {field.replace('_', ' ')}",
                    field=field,
                )
        return float(style.mash_volume) + float(style.sparge_volume)

    raise ValidationError(
        f"Unrecognized beverage type {beverage_type!r}",
        field="beverage_type",
    )


def make_batch_number(recipe_name: str, start_date: date) -> str:
    return f"{recipe_name} {start_date.strftime(BATCH_DATE_FORMAT)}"


def require_brew_style(db: Session, recipe_name: str) -> BrewStyle:
    style = brew_styles_service.get_brew_style_by_name(db, recipe_name)
    if not style:
        raise NotFound(f"Brew style {recipe_name!r} not found", field="brew_style")
    return style


def derive_schedule_fields(db: Session, recipe_name: str, start_date: date) -> ScheduleFields:
    style = require_brew_style(db, recipe_name)
    return ScheduleFields(
        end_date=compute_end_date(style, start_date),
        expected_volume=compute_expected_volume(style),
        batch_number=make_batch_number(style.name, start_date),
    )


# ===== Conflict detector =====

def find_conflicting_schedule(
    db: Session,
    tank_id: int,
    start_date: date,
    end_date: date,
    exclude_id: Optional[int] = None,
) -> Optional[ProductionSchedule]:
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date", field="end_date")

    stmt = select(ProductionSchedule).where(
        ProductionSchedule.tank_id == tank_id,
        ProductionSchedule.status != CANCELLED,
        # inclusive: ending on the day another run starts is a conflict
        ProductionSchedule.start_date <= end_date,
        ProductionSchedule.end_date >= start_date,
    )
    if exclude_id is not None:
        stmt = stmt.where(ProductionSchedule.id != exclude_id)
    stmt = stmt.order_by(ProductionSchedule.start_date).limit(1)
    return db.scalars(stmt).first()


def has_conflict(
    db: Session,
    tank_id: int,
    start_date: date,
    end_date: date,
    exclude_id: Optional[int] = None,
) -> bool:
    return find_conflicting_schedule(db, tank_id, start_date, end_date, exclude_id) is not None


def check_conflict(
    db: Session,
    tank_id: int,
    start_date: date,
    end_date: Optional[date] = None,
    brew_style: Optional[str] = None,
    exclude_id: Optional[int] = None,
) -> bool:
    """
    Read-only feasibility check for a proposed reservation.
    Without end_date the interval is derived from brew_style.
    """
    tanks_service.require_tank(db, tank_id)
    if end_date is None:
        if not brew_style:
            raise ValidationError("endDate or brewStyle is required", field="end_date")
        end_date = compute_end_date(require_brew_style(db, brew_style), start_date)
    return has_conflict(db, tank_id, start_date, end_date, exclude_id=exclude_id)


def _guard_conflict(db: Session, schedule: ProductionSchedule) -> None:
    if schedule.status == CANCELLED:
        return
    other = find_conflicting_schedule(
        db,
        schedule.tank_id,
        schedule.start_date,
        schedule.end_date,
        exclude_id=schedule.id,
    )
    if other:
        raise Conflict(
            f"Schedule conflicts with batch {other.batch_number!r} "
            f"({other.start_date} - {other.end_date}) on tank {schedule.tank_id}",
        )


def _guard_batch_number(db: Session, schedule: ProductionSchedule) -> None:
    stmt = select(ProductionSchedule.id).where(
        ProductionSchedule.batch_number == schedule.batch_number,
    )
    if schedule.id is not None:
        stmt = stmt.where(ProductionSchedule.id != schedule.id)
    if db.execute(stmt.limit(1)).first() is not None:
        raise DuplicateBatch(
            f"Batch number {schedule.batch_number!r} already exists",
            field="batch_number",
        )


def _guard_actual_volume(schedule: ProductionSchedule) -> None:
    if schedule.actual_volume is None:
        return
    limit = schedule.expected_volume * ACTUAL_VOLUME_TOLERANCE
    if schedule.actual_volume > limit:
        raise ValidationError(
            f"Actual volume {schedule.actual_volume:g} exceeds 110% of expected "
            f"volume {schedule.expected_volume:g}",
            field="actual_volume",
        )


def _save(db: Session, schedule: ProductionSchedule) -> ProductionSchedule:
    _guard_actual_volume(schedule)
    _guard_batch_number(db, schedule)
    _guard_conflict(db, schedule)

    db.add(schedule)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if "batch_number" in str(e.orig):
            raise DuplicateBatch(
                f"Batch number {schedule.batch_number!r} already exists",
                field="batch_number",
            )
        logger.warning("production schedule rejected by the database: %s", e.orig)
        raise ValidationError("Production schedule violates a database constraint")
    db.refresh(schedule)
    return schedule


# ===== CRUD =====

def create_schedule(db: Session, data: ProductionScheduleCreate) -> ProductionSchedule:
    tanks_service.require_tank(db, data.tank_id)
    fields = derive_schedule_fields(db, data.brew_style, data.start_date)

    schedule = ProductionSchedule(
        tank_id=data.tank_id,
        brew_style=data.brew_style,
        batch_number=fields.batch_number,
        status=data.status,
        start_date=data.start_date,
        end_date=fields.end_date,
        expected_volume=fields.expected_volume,
        actual_volume=data.actual_volume,
        notes=data.notes,
    )
    schedule = _save(db, schedule)
    logger.info(
        "production schedule created id=%s batch=%s tank=%s %s..%s",
        schedule.id, schedule.batch_number, schedule.tank_id,
        schedule.start_date, schedule.end_date,
    )
    return schedule


def get_schedule_by_id(db: Session, schedule_id: int) -> Optional[ProductionSchedule]:
    return db.get(ProductionSchedule, schedule_id)


def list_schedules(db: Session, tank_id: Optional[int] = None) -> List[ProductionSchedule]:
    stmt = select(ProductionSchedule)
    if tank_id is not None:
        stmt = stmt.where(ProductionSchedule.tank_id == tank_id)
    stmt = stmt.order_by(ProductionSchedule.start_date, ProductionSchedule.id)
    return list(db.scalars(stmt))


def update_schedule(
    db: Session,
    schedule: ProductionSchedule,
    data: ProductionScheduleUpdate,
) -> ProductionSchedule:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, REQUIRED_FIELDS)

    if "tank_id" in changes and changes["tank_id"] != schedule.tank_id:
        tanks_service.require_tank(db, changes["tank_id"])

    recompute = (
        ("start_date" in changes and changes["start_date"] != schedule.start_date)
        or ("brew_style" in changes and changes["brew_style"] != schedule.brew_style)
    )

    try:
        for field, value in changes.items():
            setattr(schedule, field, value)

        if recompute:
            fields = derive_schedule_fields(db, schedule.brew_style, schedule.start_date)
            schedule.end_date = fields.end_date
            schedule.expected_volume = fields.expected_volume
            schedule.batch_number = fields.batch_number

        schedule = _save(db, schedule)
    except BrewhouseError:
        # discard the in-memory edits
        db.rollback()
        raise

    logger.info("production schedule updated id=%s batch=%s", schedule.id, schedule.batch_number)
    return schedule


def delete_schedule(db: Session, schedule: ProductionSchedule) -> None:
    db.delete(schedule)
    db.commit()
