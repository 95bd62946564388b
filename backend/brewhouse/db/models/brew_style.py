# brewhouse/db/models/brew_style.py

from sqlalchemy import Column, Integer, String, Float, JSON, DateTime, func
from brewhouse.db.session import Base


BEVERAGE_TYPES = ("mead", "cider", "beer")


class BrewStyle(Base):
    """
    Recipe for one beverage style.
    - operation timing (day counts) drives the production end date
    - the volume column that matters depends on beverage_type:
      mead -> target_water_volume, cider -> juice_total_volume,
      beer -> mash_volume + sparge_volume
    """
    __tablename__ = "brew_styles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), unique=True, index=True, nullable=False)
    beverage_type = Column(String(16), index=True, nullable=False)

    primary_fermentation_days = Column(Integer, nullable=False)
    secondary_fermentation_days = Column(Integer, nullable=True)
    clarification_days = Column(Integer, nullable=False)
    conditioning_days = Column(Integer, nullable=False)

    target_water_volume = Column(Float, nullable=True)   # mead
    juice_total_volume = Column(Float, nullable=True)    # cider
    mash_volume = Column(Float, nullable=True)           # beer
    sparge_volume = Column(Float, nullable=True)         # beer

    fermentation_temp = Column(Float, nullable=True)
    crash_temp = Column(Float, nullable=True)

    # yeast, nutrients, additives, grain bill ... kept as-is
    details = Column(JSON, nullable=True)

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
