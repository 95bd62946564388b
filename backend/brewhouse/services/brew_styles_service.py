# brewhouse/services/brew_styles_service.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brewhouse.core.errors import ValidationError, reject_nulls
from brewhouse.db.models.brew_style import BrewStyle, BEVERAGE_TYPES
from brewhouse.schemas.brew_style import BrewStyleCreate, BrewStyleUpdate

REQUIRED_FIELDS = (
    "name",
    "beverage_type",
    "primary_fermentation_days",
    "clarification_days",
    "conditioning_days",
)


def _commit_unique_name(db: Session, name: Optional[str]) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"Brew style with name {name!r} already exists", field="name")


def create_brew_style(db: Session, data: BrewStyleCreate) -> BrewStyle:
    style = BrewStyle(**data.model_dump())
    db.add(style)
    _commit_unique_name(db, data.name)
    db.refresh(style)
    return style


def get_brew_style_by_id(db: Session, style_id: int) -> Optional[BrewStyle]:
    return db.get(BrewStyle, style_id)


def get_brew_style_by_name(db: Session, name: str) -> Optional[BrewStyle]:
    stmt = select(BrewStyle).where(BrewStyle.name == name).limit(1)
    return db.scalars(stmt).first()


def list_brew_styles(db: Session, beverage_type: Optional[str] = None) -> List[BrewStyle]:
    stmt = select(BrewStyle)
    if beverage_type is not None:
        if beverage_type not in BEVERAGE_TYPES:
            raise ValidationError(f"Invalid beverage type {beverage_type!r}", field="beverage_type")
        stmt = stmt.where(BrewStyle.beverage_type == beverage_type)
    stmt = stmt.order_by(BrewStyle.id)
    return list(db.scalars(stmt))


def update_brew_style(db: Session, style: BrewStyle, data: BrewStyleUpdate) -> BrewStyle:
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, REQUIRED_FIELDS)
    for field, value in changes.items():
        setattr(style, field, value)
    db.add(style)
    _commit_unique_name(db, style.name)
    db.refresh(style)
    return style


def delete_brew_style(db: Session, style: BrewStyle) -> None:
    db.delete(style)
    db.commit()
