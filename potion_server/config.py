# potion_server/config.py

import os
from dataclasses import dataclass
from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration, built once at startup and handed to create_app().
    Handlers and dependencies read it from app.state, never from os.environ.
    """
    jwt_secret: str = "dev_secret"
    cookie_name: str = "potion_token"
    cookie_secure: bool = False
    token_expire_hours: int = 24
    database_url: str = "sqlite:///./data/potions.db"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_allow_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Loads settings from the environment (and a local .env file if present).
    """
    load_dotenv()

    origins = tuple(
        o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
    )

    return Settings(
        jwt_secret=os.getenv("JWT_SECRET", "dev_secret"),
        cookie_name=os.getenv("COOKIE_NAME", "potion_token"),
        cookie_secure=_env_bool("COOKIE_SECURE", False),
        token_expire_hours=int(os.getenv("TOKEN_EXPIRE_HOURS", "24")),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./data/potions.db"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        cors_allow_origins=origins or ("*",),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
