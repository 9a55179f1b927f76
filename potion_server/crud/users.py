# potion_server/crud/users.py

import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from potion_server.core.errors import ConflictError, PersistenceError
from potion_server.core.security import get_password_hash, verify_password
from potion_server.models import User


logger = logging.getLogger("potion_server.crud.users")


def create_user(db: Session, name: str, password: str) -> User:
    """
    Persists a new user with a hashed password.
    Raises ConflictError when the name is already taken.
    """
    user = User(name=name, hashed_password=get_password_hash(password))
    try:
        db.add(user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User name already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create user %s", name)
        raise PersistenceError("System error")
    db.refresh(user)
    return user


def get_user_by_name(db: Session, name: str) -> User | None:
    try:
        return db.query(User).filter(User.name == name).first()
    except SQLAlchemyError:
        logger.exception("Failed to look up user %s", name)
        raise PersistenceError("System error")


def authenticate_user(db: Session, name: str, password: str) -> User | None:
    user = get_user_by_name(db, name)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
