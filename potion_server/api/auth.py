# potion_server/api/auth.py

import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from potion_server.config import Settings
from potion_server.core.deps import SESSION_SECURITY, get_current_user, get_settings
from potion_server.core.errors import UnauthorizedError
from potion_server.core.security import create_session_token
from potion_server.crud.users import authenticate_user, create_user
from potion_server.database import get_db
from potion_server.schemas import LoginRequest, Message, Principal, RegisterRequest


logger = logging.getLogger("potion_server.api.auth")

router = APIRouter(tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=Message)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Creates a user account. Every invalid field is reported at once;
    a name that is already taken is a 409.
    """
    create_user(db, payload.name, payload.password)
    logger.info("Registered user %s", payload.name)
    return {"message": "User created"}


@router.post("/login", response_model=Message)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Checks the credentials and sets the session cookie.
    Unknown names and wrong passwords get the same 401.
    """
    user = authenticate_user(db, payload.name, payload.password)
    if not user:
        logger.info("Failed login for %s", payload.name)
        raise UnauthorizedError("Invalid credentials")

    token = create_session_token(
        secret=settings.jwt_secret,
        user_id=user.id,
        user_name=user.name,
        expire_hours=settings.token_expire_hours,
    )
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.token_expire_hours * 60 * 60,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure,
    )
    logger.info("User %s logged in", user.name)
    return {"message": "Logged in"}


@router.get("/logout", response_model=Message)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    # The token itself stays valid until it expires; only the cookie goes away.
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure,
    )
    return {"message": "Logged out"}


@router.get("/me", response_model=Principal, openapi_extra=SESSION_SECURITY)
def read_current_user(current_user: Principal = Depends(get_current_user)):
    return current_user
