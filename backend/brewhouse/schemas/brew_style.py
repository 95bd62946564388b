# brewhouse/schemas/brew_style.py

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

BeverageType = Literal["mead", "cider", "beer"]


class BrewStyleBase(BaseModel):
    name: str = Field(..., example="Wildflower Traditional")
    beverage_type: BeverageType = Field(..., example="mead")

    primary_fermentation_days: int = Field(..., ge=1, example=14)
    secondary_fermentation_days: Optional[int] = Field(None, ge=0)
    clarification_days: int = Field(..., ge=1, example=7)
    conditioning_days: int = Field(..., ge=1, example=21)

    target_water_volume: Optional[float] = Field(None, ge=0, description="mead")
    juice_total_volume: Optional[float] = Field(None, ge=0, description="cider")
    mash_volume: Optional[float] = Field(None, ge=0, description="beer")
    sparge_volume: Optional[float] = Field(None, ge=0, description="beer")

    fermentation_temp: Optional[float] = Field(None, ge=32, le=100)
    crash_temp: Optional[float] = Field(None, ge=32, le=100)

    details: Optional[Dict[str, Any]] = None


class BrewStyleCreate(BrewStyleBase):
    pass


class BrewStyleUpdate(BaseModel):
    name: Optional[str] = None
    beverage_type: Optional[BeverageType] = None
    primary_fermentation_days: Optional[int] = Field(None, ge=1)
    secondary_fermentation_days: Optional[int] = Field(None, ge=0)
    clarification_days: Optional[int] = Field(None, ge=1)
    conditioning_days: Optional[int] = Field(None, ge=1)
    target_water_volume: Optional[float] = Field(None, ge=0)
    juice_total_volume: Optional[float] = Field(None, ge=0)
    mash_volume: Optional[float] = Field(None, ge=0)
    sparge_volume: Optional[float] = Field(None, ge=0)
    fermentation_temp: Optional[float] = Field(None, ge=32, le=100)
    crash_temp: Optional[float] = Field(None, ge=32, le=100)
    details: Optional[Dict[str, Any]] = None


class BrewStyleOut(BrewStyleBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
