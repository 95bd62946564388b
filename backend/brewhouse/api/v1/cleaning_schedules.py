# brewhouse/api/v1/cleaning_schedules.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db
from brewhouse.core.errors import NotFound
from brewhouse.schemas.cleaning_schedule import (
    CleaningScheduleCreate,
    CleaningScheduleOut,
    CleaningScheduleUpdate,
)
from brewhouse.services import cleaning_schedules_service

router = APIRouter(prefix="/cleaning-schedules", tags=["cleaning-schedules"])


def _get_or_404(db: Session, schedule_id: int):
    row = cleaning_schedules_service.get_cleaning_schedule_by_id(db, schedule_id)
    if not row:
        raise NotFound(f"Cleaning schedule {schedule_id} not found")
    return row


@router.post("/", response_model=CleaningScheduleOut, status_code=status.HTTP_201_CREATED)
def create_cleaning_schedule_endpoint(
    data: CleaningScheduleCreate,
    db: Session = Depends(get_db),
):
    return cleaning_schedules_service.create_cleaning_schedule(db, data)


@router.get("/", response_model=List[CleaningScheduleOut])
def list_cleaning_schedules_endpoint(
    tank_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return cleaning_schedules_service.list_cleaning_schedules(db, tank_id=tank_id)


@router.get("/{schedule_id}", response_model=CleaningScheduleOut)
def get_cleaning_schedule_endpoint(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    return _get_or_404(db, schedule_id)


@router.put("/{schedule_id}", response_model=CleaningScheduleOut)
def update_cleaning_schedule_endpoint(
    schedule_id: int,
    data: CleaningScheduleUpdate,
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, schedule_id)
    return cleaning_schedules_service.update_cleaning_schedule(db, row, data)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cleaning_schedule_endpoint(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, schedule_id)
    cleaning_schedules_service.delete_cleaning_schedule(db, row)
    return
