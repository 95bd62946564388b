# brewhouse/api/v1/system_status.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db
from brewhouse.schemas.system_status import SystemStatusOut, SystemStatusUpdate
from brewhouse.services import system_status_service

router = APIRouter(prefix="/system-status", tags=["system-status"])


@router.get("/", response_model=SystemStatusOut)
def get_system_status_endpoint(
    db: Session = Depends(get_db),
):
    return system_status_service.get_system_status(db)


@router.put("/", response_model=SystemStatusOut)
def update_system_status_endpoint(
    data: SystemStatusUpdate,
    db: Session = Depends(get_db),
):
    """
    Operator change of chiller/heater state or system mode.
    System Error alarms re-evaluate on the monitor's next tick.
    """
    return system_status_service.update_system_status(db, data)
