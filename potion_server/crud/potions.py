# potion_server/crud/potions.py

import logging
from contextlib import contextmanager
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from potion_server.core.errors import PersistenceError
from potion_server.models import Potion
from potion_server.schemas import GroupField, Metric, MetricField


logger = logging.getLogger("potion_server.crud.potions")

MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1

AGGREGATES = {
    Metric.avg: func.avg,
    Metric.sum: func.sum,
    Metric.count: func.count,
    Metric.min: func.min,
    Metric.max: func.max,
}


@contextmanager
def store_call(db: Session, action: str):
    """
    Turns any database failure inside the block into a PersistenceError,
    rolling back whatever the session had pending.
    """
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Store failure while trying to %s", action)
        raise PersistenceError("Database error")


def parse_id(raw_id: str) -> int:
    # Malformed ids fail at the store boundary, the same as any other store error.
    try:
        potion_id = int(raw_id)
    except (TypeError, ValueError):
        raise PersistenceError(f'Cast to id failed for value "{raw_id}"')
    # Ids are stored as signed 64-bit integers.
    if not MIN_ID <= potion_id <= MAX_ID:
        raise PersistenceError(f'Cast to id failed for value "{raw_id}"')
    return potion_id


# -------------------------------
# Reads
# -------------------------------

def list_potions(db: Session) -> list[Potion]:
    with store_call(db, "list potions"):
        return db.query(Potion).order_by(Potion.id.asc()).all()


def list_names(db: Session) -> list[str]:
    with store_call(db, "list potion names"):
        rows = db.query(Potion.name).order_by(Potion.id.asc()).all()
    return [r.name for r in rows]


def list_by_vendor(db: Session, vendor_id: str) -> list[Potion]:
    with store_call(db, "list potions by vendor"):
        return db.query(Potion).filter(Potion.vendor == vendor_id).order_by(Potion.id.asc()).all()


def list_by_price_range(db: Session, min_price: float, max_price: float) -> list[Potion]:
    with store_call(db, "list potions by price range"):
        return (
            db.query(Potion)
            .filter(Potion.price >= min_price, Potion.price <= max_price)
            .order_by(Potion.id.asc())
            .all()
        )


def get_potion(db: Session, raw_id: str) -> Potion | None:
    potion_id = parse_id(raw_id)
    with store_call(db, "get potion"):
        return db.get(Potion, potion_id)


# -------------------------------
# Writes
# -------------------------------

def create_potion(db: Session, fields: dict) -> Potion:
    potion = Potion(**fields)
    with store_call(db, "create potion"):
        db.add(potion)
        db.commit()
        db.refresh(potion)
    return potion


def update_potion(db: Session, raw_id: str, changes: dict) -> Potion | None:
    potion_id = parse_id(raw_id)
    with store_call(db, "update potion"):
        potion = db.get(Potion, potion_id)
        if potion is None:
            return None
        for field, value in changes.items():
            setattr(potion, field, value)
        db.commit()
        db.refresh(potion)
    return potion


def delete_potion(db: Session, raw_id: str) -> bool:
    potion_id = parse_id(raw_id)
    with store_call(db, "delete potion"):
        potion = db.get(Potion, potion_id)
        if potion is None:
            return False
        db.delete(potion)
        db.commit()
    return True


# -------------------------------
# Aggregations
# -------------------------------

def count_distinct_categories(db: Session) -> int:
    with store_call(db, "count distinct categories"):
        return db.query(func.count(func.distinct(Potion.category))).scalar() or 0


def average_score_by(db: Session, group: GroupField) -> list[dict]:
    column = getattr(Potion, group.value)
    with store_call(db, f"average score by {group.value}"):
        rows = (
            db.query(column, func.avg(Potion.score))
            .group_by(column)
            .order_by(column)
            .all()
        )
    return [{"_id": key, "averageScore": value} for key, value in rows]


def strength_flavor_ratio(db: Session) -> list[dict]:
    # SQL division by zero yields NULL rather than an error.
    with store_call(db, "compute strength/flavor ratio"):
        rows = (
            db.query(Potion.id, (Potion.strength / Potion.flavor).label("ratio"))
            .order_by(Potion.id.asc())
            .all()
        )
    return [{"_id": r.id, "strengthFlavorRatio": r.ratio} for r in rows]


def grouped_metric(db: Session, group: GroupField, metric: Metric, field: MetricField) -> list[dict]:
    """
    Groups potions by an allow-listed column and applies one aggregate to
    another allow-listed column. Each row is {"_id": key, <metric>: value}.
    """
    key_column = getattr(Potion, group.value)
    value_column = getattr(Potion, field.value)
    aggregate = AGGREGATES[metric](value_column)

    with store_call(db, f"aggregate {metric.value}({field.value}) by {group.value}"):
        rows = (
            db.query(key_column, aggregate)
            .group_by(key_column)
            .order_by(key_column)
            .all()
        )
    return [{"_id": key, metric.value: value} for key, value in rows]
