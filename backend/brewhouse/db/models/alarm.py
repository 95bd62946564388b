# brewhouse/db/models/alarm.py

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, func
from brewhouse.db.session import Base


ALARM_TYPES = ("High Temperature", "Low Temperature", "System Error")


class Alarm(Base):
    """
    Configured alarm on one tank.
    is_active is owned by the alarm monitor; the API never writes it.
    """
    __tablename__ = "alarms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), nullable=False)
    type = Column(String(32), nullable=False)
    threshold = Column(Float, nullable=False)

    # plain column: a dangling reference is reported per alarm by the monitor
    tank_id = Column(Integer, index=True, nullable=False)

    is_active = Column(Boolean, nullable=False, default=False)

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
