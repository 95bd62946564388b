# brewhouse/db/models/app_settings.py

from sqlalchemy import Column, Integer, String, DateTime, func
from brewhouse.db.session import Base


class AppSettings(Base):
    """
    Singleton row of operator preferences shown by the dashboard.
    """
    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True, index=True)
    temperature_unit = Column(String(16), nullable=False, default="celsius")
    refresh_rate = Column(Integer, nullable=False, default=30)
    number_of_tanks = Column(Integer, nullable=False, default=9)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True,
    )
