# potion_server/api/analytics.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from potion_server.crud import potions as store
from potion_server.database import get_db
from potion_server.schemas import DistinctCategories, GroupField, Metric, MetricField


router = APIRouter(tags=["Analytics"])


@router.get("/distinct-categories", response_model=DistinctCategories)
def distinct_categories(db: Session = Depends(get_db)):
    return {"total_categories": store.count_distinct_categories(db)}


@router.get("/average-score-by-vendor")
def average_score_by_vendor(db: Session = Depends(get_db)):
    return store.average_score_by(db, GroupField.vendor)


@router.get("/average-score-by-category")
def average_score_by_category(db: Session = Depends(get_db)):
    return store.average_score_by(db, GroupField.category)


@router.get("/strength-flavor-ratio")
def strength_flavor_ratio(db: Session = Depends(get_db)):
    """
    Returns strength / flavor per potion. A zero flavor gives null.
    """
    return store.strength_flavor_ratio(db)


@router.get("/search")
def search(
    group_by: GroupField = Query(..., alias="groupBy"),
    metric: Metric = Query(...),
    field: MetricField = Query(...),
    db: Session = Depends(get_db),
):
    """
    Groups potions by vendor or category and aggregates one numeric field.
    Values outside the allowed groups, metrics and fields are rejected with 400.
    """
    return store.grouped_metric(db, group_by, metric, field)
