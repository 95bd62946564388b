# brewhouse/api/v1/production_schedules.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db
from brewhouse.core.errors import NotFound
from brewhouse.schemas.production_schedule import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    ProductionScheduleCreate,
    ProductionScheduleOut,
    ProductionScheduleUpdate,
)
from brewhouse.services import production_schedules_service

router = APIRouter(prefix="/production-schedules", tags=["production-schedules"])


def _get_or_404(db: Session, schedule_id: int):
    schedule = production_schedules_service.get_schedule_by_id(db, schedule_id)
    if not schedule:
        raise NotFound(f"Production schedule {schedule_id} not found")
    return schedule


@router.post("/check-conflict", response_model=ConflictCheckResponse)
def check_conflict_endpoint(
    data: ConflictCheckRequest,
    db: Session = Depends(get_db),
):
    """
    Feasibility check: would this tank reservation overlap an existing
    non-cancelled run? Never writes.
    """
    has_conflict = production_schedules_service.check_conflict(
        db,
        tank_id=data.tank_id,
        start_date=data.start_date,
        end_date=data.end_date,
        brew_style=data.brew_style,
        exclude_id=data.exclude_id,
    )
    return ConflictCheckResponse(has_conflict=has_conflict)


@router.post("/", response_model=ProductionScheduleOut, status_code=status.HTTP_201_CREATED)
def create_schedule_endpoint(
    data: ProductionScheduleCreate,
    db: Session = Depends(get_db),
):
    return production_schedules_service.create_schedule(db, data)


@router.get("/", response_model=List[ProductionScheduleOut])
def list_schedules_endpoint(
    tank_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return production_schedules_service.list_schedules(db, tank_id=tank_id)


@router.get("/{schedule_id}", response_model=ProductionScheduleOut)
def get_schedule_endpoint(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    return _get_or_404(db, schedule_id)


@router.put("/{schedule_id}", response_model=ProductionScheduleOut)
def update_schedule_endpoint(
    schedule_id: int,
    data: ProductionScheduleUpdate,
    db: Session = Depends(get_db),
):
    schedule = _get_or_404(db, schedule_id)
    return production_schedules_service.update_schedule(db, schedule, data)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule_endpoint(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    schedule = _get_or_404(db, schedule_id)
    production_schedules_service.delete_schedule(db, schedule)
    return
