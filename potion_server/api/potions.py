# potion_server/api/potions.py

import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from potion_server.core.deps import SESSION_SECURITY, get_current_user
from potion_server.core.errors import NotFoundError
from potion_server.crud import potions as store
from potion_server.database import get_db
from potion_server.schemas import Message, PotionCreate, PotionOut, PotionUpdate, Principal


logger = logging.getLogger("potion_server.api.potions")

# Initialize FastAPI router
router = APIRouter(tags=["Potions"])

POTION_NOT_FOUND = "Potion not found"


# -------------------------------
# Listing Endpoints
# -------------------------------

@router.get("", response_model=list[PotionOut])
def list_potions(db: Session = Depends(get_db)):
    """
    Returns every potion, unfiltered and unpaginated.
    """
    return store.list_potions(db)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PotionOut,
    openapi_extra=SESSION_SECURITY,
)
def create_potion(
    payload: PotionCreate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    """
    Stores a new potion. Requires a session cookie.
    """
    potion = store.create_potion(db, payload.model_dump())
    logger.info("Potion %s created by %s", potion.id, current_user.user_name)
    return potion


@router.get("/names", response_model=list[str])
def list_names(db: Session = Depends(get_db)):
    return store.list_names(db)


@router.get("/vendor/{vendor_id}", response_model=list[PotionOut])
def list_by_vendor(vendor_id: str, db: Session = Depends(get_db)):
    return store.list_by_vendor(db, vendor_id)


@router.get("/price-range", response_model=list[PotionOut])
def list_by_price_range(
    min_price: float = Query(..., alias="min"),
    max_price: float = Query(..., alias="max"),
    db: Session = Depends(get_db),
):
    """
    Returns potions whose price lies in [min, max], bounds included.
    """
    return store.list_by_price_range(db, min_price, max_price)


# -------------------------------
# Single Potion Endpoints
# -------------------------------

@router.get("/{potion_id}", response_model=PotionOut)
def get_potion(potion_id: str, db: Session = Depends(get_db)):
    potion = store.get_potion(db, potion_id)
    if potion is None:
        raise NotFoundError(POTION_NOT_FOUND)
    return potion


@router.put("/{potion_id}", response_model=PotionOut, openapi_extra=SESSION_SECURITY)
def update_potion(
    potion_id: str,
    payload: PotionUpdate,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    """
    Merges the submitted fields into the stored potion and returns the result.
    """
    potion = store.update_potion(db, potion_id, payload.model_dump(exclude_unset=True))
    if potion is None:
        raise NotFoundError(POTION_NOT_FOUND)
    logger.info("Potion %s updated by %s", potion.id, current_user.user_name)
    return potion


@router.delete("/{potion_id}", response_model=Message, openapi_extra=SESSION_SECURITY)
def delete_potion(
    potion_id: str,
    db: Session = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    if not store.delete_potion(db, potion_id):
        raise NotFoundError(POTION_NOT_FOUND)
    logger.info("Potion %s deleted by %s", potion_id, current_user.user_name)
    return {"message": "Potion deleted"}
