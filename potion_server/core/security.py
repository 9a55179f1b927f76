# potion_server/core/security.py

from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from potion_server.core.errors import UnauthorizedError
from potion_server.schemas import Principal


ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_session_token(
    *,
    secret: str,
    user_id: int,
    user_name: str,
    expire_hours: int,
    now: datetime | None = None,
) -> str:
    """
    Signs a session token carrying the user's id and name.
    The token is valid until `now + expire_hours`, exclusive.
    """
    issued = now or datetime.now(timezone.utc)
    expire = issued + timedelta(hours=expire_hours)
    payload = {
        "sub": str(user_id),
        "name": user_name,
        "iat": int(issued.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_session_token(token: str, *, secret: str, now: datetime | None = None) -> Principal:
    """
    Verifies signature and expiry and returns the embedded principal.
    Any failure raises UnauthorizedError.
    """
    if not token:
        raise UnauthorizedError("Authentication required")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError:
        raise UnauthorizedError("Invalid session token")

    exp = payload.get("exp")
    current = int((now or datetime.now(timezone.utc)).timestamp())
    if not isinstance(exp, int) or current >= exp:
        raise UnauthorizedError("Session expired")

    try:
        return Principal(user_id=int(payload["sub"]), user_name=str(payload["name"]))
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid session token")
