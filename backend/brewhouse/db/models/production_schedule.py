# brewhouse/db/models/production_schedule.py

from sqlalchemy import Column, Integer, String, Float, Date, Text, DateTime, func
from brewhouse.db.session import Base


SCHEDULE_STATUSES = ("planned", "in-progress", "completed", "cancelled")


class ProductionSchedule(Base):
    """
    One production run reserving a tank for [start_date, end_date].
    - batch_number, end_date, expected_volume are derived from the brew style
    - cancelled runs keep their interval but no longer block the tank
    """
    __tablename__ = "production_schedules"

    id = Column(Integer, primary_key=True, index=True)
    tank_id = Column(Integer, index=True, nullable=False)
    brew_style = Column(String(64), nullable=False)

    batch_number = Column(String(96), unique=True, index=True, nullable=False)
    status = Column(String(16), nullable=False, default="planned")

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    expected_volume = Column(Float, nullable=False)
    actual_volume = Column(Float, nullable=True)

    notes = Column(Text, nullable=True)

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
