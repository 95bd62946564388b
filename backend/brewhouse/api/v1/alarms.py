# brewhouse/api/v1/alarms.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db
from brewhouse.core.errors import NotFound
from brewhouse.schemas.alarm import AlarmCreate, AlarmOut, AlarmUpdate
from brewhouse.services import alarms_service

router = APIRouter(prefix="/alarms", tags=["alarms"])


def _get_or_404(db: Session, alarm_id: int):
    alarm = alarms_service.get_alarm_by_id(db, alarm_id)
    if not alarm:
        raise NotFound(f"Alarm {alarm_id} not found")
    return alarm


@router.post("/", response_model=AlarmOut, status_code=status.HTTP_201_CREATED)
def create_alarm_endpoint(
    data: AlarmCreate,
    db: Session = Depends(get_db),
):
    return alarms_service.create_alarm(db, data)


@router.get("/", response_model=List[AlarmOut])
def list_alarms_endpoint(
    tank_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return alarms_service.list_alarms(db, tank_id=tank_id)


@router.get("/active", response_model=List[AlarmOut])
def list_active_alarms_endpoint(
    db: Session = Depends(get_db),
):
    """
    Alarms whose condition held at the monitor's last tick.
    """
    return alarms_service.list_alarms(db, active_only=True)


@router.get("/{alarm_id}", response_model=AlarmOut)
def get_alarm_endpoint(
    alarm_id: int,
    db: Session = Depends(get_db),
):
    return _get_or_404(db, alarm_id)


@router.put("/{alarm_id}", response_model=AlarmOut)
def update_alarm_endpoint(
    alarm_id: int,
    data: AlarmUpdate,
    db: Session = Depends(get_db),
):
    alarm = _get_or_404(db, alarm_id)
    return alarms_service.update_alarm(db, alarm, data)


@router.delete("/{alarm_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_alarm_endpoint(
    alarm_id: int,
    db: Session = Depends(get_db),
):
    alarm = _get_or_404(db, alarm_id)
    alarms_service.delete_alarm(db, alarm)
    return
