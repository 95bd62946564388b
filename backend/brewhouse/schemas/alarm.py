# brewhouse/schemas/alarm.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

AlarmType = Literal["High Temperature", "Low Temperature", "System Error"]


class AlarmBase(BaseModel):
    name: str = Field(..., example="FV-01 too warm")
    type: AlarmType = Field(..., example="High Temperature")
    threshold: float = Field(..., example=75.0)
    tank_id: int = Field(..., example=1)


class AlarmCreate(AlarmBase):
    pass


class AlarmUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[AlarmType] = None
    threshold: Optional[float] = None
    tank_id: Optional[int] = None


class AlarmOut(AlarmBase):
    id: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
