# brewhouse/schemas/tank.py

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

TankStatus = Literal["Active", "Inactive", "Maintenance"]
TankMode = Literal["Cooling", "Heating", "Idle"]
ValveStatus = Literal["Open", "Closed"]


class TankBase(BaseModel):
    name: str = Field(..., example="FV-01")
    temperature: float = Field(68.0, description="current temperature (°F)")
    status: TankStatus = "Inactive"
    mode: TankMode = "Idle"
    valve_status: ValveStatus = "Closed"


class TankCreate(TankBase):
    pass


class TankUpdate(BaseModel):
    # temperature only changes through POST /tanks/{id}/temperature
    name: Optional[str] = None
    status: Optional[TankStatus] = None
    mode: Optional[TankMode] = None
    valve_status: Optional[ValveStatus] = None


class TankOut(TankBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TemperatureReadingCreate(BaseModel):
    temperature: float = Field(..., example=66.5)


class TemperatureReadingOut(BaseModel):
    id: int
    tank_id: int
    temperature: float
    timestamp: datetime

    class Config:
        from_attributes = True


class TemperaturePoint(BaseModel):
    temperature: float
    timestamp: datetime

    class Config:
        from_attributes = True


class TemperatureHistoryOut(BaseModel):
    tank_id: int
    tank_name: str
    history: List[TemperaturePoint]
