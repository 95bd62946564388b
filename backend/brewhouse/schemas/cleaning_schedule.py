# brewhouse/schemas/cleaning_schedule.py

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

CleaningType = Literal["recurring", "single"]
CleaningInterval = Literal["Daily", "Weekly", "Bi-weekly", "Monthly"]


class CleaningScheduleCreate(BaseModel):
    tank_id: int = Field(..., example=1)
    type: CleaningType = Field(..., example="recurring")
    schedule: Optional[CleaningInterval] = Field(None, example="Weekly")
    last_cleaning: date = Field(..., example="2024-01-01")


class CleaningScheduleUpdate(BaseModel):
    type: Optional[CleaningType] = None
    schedule: Optional[CleaningInterval] = None
    last_cleaning: Optional[date] = None


class CleaningScheduleOut(BaseModel):
    id: int
    tank_id: int
    type: CleaningType
    schedule: Optional[CleaningInterval] = None
    last_cleaning: date
    next_cleaning: date
    created_at: datetime

    class Config:
        from_attributes = True
