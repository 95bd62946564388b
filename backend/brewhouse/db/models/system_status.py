# brewhouse/db/models/system_status.py

from sqlalchemy import Column, Integer, String, DateTime, func
from brewhouse.db.session import Base


EQUIPMENT_STATUSES = ("Running", "Standby", "Off")
SYSTEM_MODES = ("Cooling", "Heating", "Idle")


class SystemStatus(Base):
    """
    Singleton row: chiller/heater state and overall system mode.
    """
    __tablename__ = "system_status"

    id = Column(Integer, primary_key=True, index=True)
    chiller_status = Column(String(16), nullable=False, default="Standby")
    heater_status = Column(String(16), nullable=False, default="Standby")
    system_mode = Column(String(16), nullable=False, default="Idle")

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True,
    )
