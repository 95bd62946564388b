# brewhouse/api/v1/app_settings.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db
from brewhouse.schemas.app_settings import AppSettingsOut, AppSettingsUpdate
from brewhouse.services import app_settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=AppSettingsOut)
def get_settings_endpoint(
    db: Session = Depends(get_db),
):
    return app_settings_service.get_app_settings(db)


@router.put("/", response_model=AppSettingsOut)
def update_settings_endpoint(
    data: AppSettingsUpdate,
    db: Session = Depends(get_db),
):
    return app_settings_service.update_app_settings(db, data)
