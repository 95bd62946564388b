# brewhouse/schemas/production_schedule.py

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ScheduleStatus = Literal["planned", "in-progress", "completed", "cancelled"]


class ProductionScheduleCreate(BaseModel):
    tank_id: int = Field(..., example=1)
    brew_style: str = Field(..., description="BrewStyle.name", example="Wildflower Traditional")
    start_date: date = Field(..., example="2024-01-01")
    status: ScheduleStatus = "planned"
    actual_volume: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class ProductionScheduleUpdate(BaseModel):
    tank_id: Optional[int] = None
    brew_style: Optional[str] = None
    start_date: Optional[date] = None
    status: Optional[ScheduleStatus] = None
    actual_volume: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class ProductionScheduleOut(BaseModel):
    id: int
    tank_id: int
    brew_style: str
    batch_number: str
    status: ScheduleStatus
    start_date: date
    end_date: date
    expected_volume: float
    actual_volume: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConflictCheckRequest(BaseModel):
    """
    Body of POST /production-schedules/check-conflict.
    end_date may be omitted, in which case it is derived from the brew style.
    """
    model_config = ConfigDict(populate_by_name=True)

    tank_id: int = Field(..., alias="tankId")
    brew_style: Optional[str] = Field(None, alias="brewStyle")
    start_date: date = Field(..., alias="startDate")
    end_date: Optional[date] = Field(None, alias="endDate")
    exclude_id: Optional[int] = Field(None, alias="excludeId")


class ConflictCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_conflict: bool = Field(..., alias="hasConflict")
