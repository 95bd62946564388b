# brewhouse/schemas/app_settings.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TemperatureUnit = Literal["celsius", "fahrenheit"]


class AppSettingsUpdate(BaseModel):
    temperature_unit: Optional[TemperatureUnit] = None
    refresh_rate: Optional[int] = Field(None, ge=1, le=3600, description="dashboard refresh (s)")
    number_of_tanks: Optional[int] = Field(None, ge=1, le=20)


class AppSettingsOut(BaseModel):
    temperature_unit: TemperatureUnit
    refresh_rate: int
    number_of_tanks: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
