# brewhouse/db/models/tank.py

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, func
from brewhouse.db.session import Base


TANK_STATUSES = ("Active", "Inactive", "Maintenance")
TANK_MODES = ("Cooling", "Heating", "Idle")
VALVE_STATUSES = ("Open", "Closed")


class Tank(Base):
    """
    Fermentation tank. Temperature is written by device updates
    (POST /tanks/{id}/temperature or the MQTT bridge) and read by the alarm monitor.
    """
    __tablename__ = "tanks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), unique=True, index=True, nullable=False)

    temperature = Column(Float, nullable=False, default=68.0)
    status = Column(String(16), nullable=False, default="Inactive")
    mode = Column(String(16), nullable=False, default="Idle")
    valve_status = Column(String(16), nullable=False, default="Closed")

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True,
    )


class TemperatureReading(Base):
    """
    Temperature history for a tank.
    """
    __tablename__ = "temperature_readings"

    id = Column(Integer, primary_key=True, index=True)
    tank_id = Column(Integer, ForeignKey("tanks.id", ondelete="CASCADE"), index=True, nullable=False)
    temperature = Column(Float, nullable=False)

    timestamp = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True,
        nullable=False,
    )
