# brewhouse/services/app_settings_service.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from brewhouse.core.errors import reject_nulls
from brewhouse.db.models.app_settings import AppSettings
from brewhouse.schemas.app_settings import AppSettingsUpdate


def get_app_settings(db: Session) -> AppSettings:
    stmt = select(AppSettings).order_by(AppSettings.id).limit(1)
    row = db.scalars(stmt).first()
    if row is None:
        row = AppSettings(temperature_unit="celsius", refresh_rate=30, number_of_tanks=9)
        db.add(row)
        db.commit()
        db.refresh(row)
    return row


def update_app_settings(db: Session, data: AppSettingsUpdate) -> AppSettings:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, changes.keys())
    row = get_app_settings(db)
    for field, value in changes.items():
        setattr(row, field, value)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
