# brewhouse/schemas/system_status.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

EquipmentStatus = Literal["Running", "Standby", "Off"]
SystemMode = Literal["Cooling", "Heating", "Idle"]


class SystemStatusUpdate(BaseModel):
    chiller_status: Optional[EquipmentStatus] = None
    heater_status: Optional[EquipmentStatus] = None
    system_mode: Optional[SystemMode] = None


class SystemStatusOut(BaseModel):
    chiller_status: EquipmentStatus
    heater_status: EquipmentStatus
    system_mode: SystemMode
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
