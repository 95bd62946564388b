# brewhouse/api/v1/brew_styles.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brewhouse.api.deps import get_db
from brewhouse.core.errors import NotFound
from brewhouse.schemas.brew_style import BrewStyleCreate, BrewStyleOut, BrewStyleUpdate
from brewhouse.services import brew_styles_service

router = APIRouter(prefix="/brew-styles", tags=["brew-styles"])


@router.post("/", response_model=BrewStyleOut, status_code=status.HTTP_201_CREATED)
def create_brew_style_endpoint(
    data: BrewStyleCreate,
    db: Session = Depends(get_db),
):
    return brew_styles_service.create_brew_style(db, data)


@router.get("/", response_model=List[BrewStyleOut])
def list_brew_styles_endpoint(
    db: Session = Depends(get_db),
):
    return brew_styles_service.list_brew_styles(db)


@router.get("/type/{beverage_type}", response_model=List[BrewStyleOut])
def list_brew_styles_by_type_endpoint(
    beverage_type: str,
    db: Session = Depends(get_db),
):
    return brew_styles_service.list_brew_styles(db, beverage_type=beverage_type)


@router.get("/{style_id}", response_model=BrewStyleOut)
def get_brew_style_endpoint(
    style_id: int,
    db: Session = Depends(get_db),
):
    style = brew_styles_service.get_brew_style_by_id(db, style_id)
    if not style:
        raise NotFound(f"Brew style {style_id} not found")
    return style


@router.put("/{style_id}", response_model=BrewStyleOut)
def update_brew_style_endpoint(
    style_id: int,
    data: BrewStyleUpdate,
    db: Session = Depends(get_db),
):
    style = brew_styles_service.get_brew_style_by_id(db, style_id)
    if not style:
        raise NotFound(f"Brew style {style_id} not found")
    return brew_styles_service.update_brew_style(db, style, data)


@router.delete("/{style_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_brew_style_endpoint(
    style_id: int,
    db: Session = Depends(get_db),
):
    style = brew_styles_service.get_brew_style_by_id(db, style_id)
    if not style:
        raise NotFound(f"Brew style {style_id} not found")
    brew_styles_service.delete_brew_style(db, style)
    return
