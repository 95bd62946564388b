# brewhouse/db/models/cleaning_schedule.py

from sqlalchemy import Column, Integer, String, Date, DateTime, func
from brewhouse.db.session import Base


CLEANING_TYPES = ("recurring", "single")
CLEANING_INTERVALS = ("Daily", "Weekly", "Bi-weekly", "Monthly")


class CleaningSchedule(Base):
    __tablename__ = "cleaning_schedules"

    id = Column(Integer, primary_key=True, index=True)
    tank_id = Column(Integer, index=True, nullable=False)

    type = Column(String(16), nullable=False)
    schedule = Column(String(16), nullable=True)  # required when type == recurring

    last_cleaning = Column(Date, nullable=False)
    next_cleaning = Column(Date, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
