# potion_server/core/deps.py

from fastapi import Request
from fastapi.security import APIKeyCookie
from potion_server.config import Settings
from potion_server.core.security import decode_session_token
from potion_server.schemas import Principal


SESSION_SCHEME = "cookieAuth"

# Marks a route as gated by the session cookie in the OpenAPI document.
SESSION_SECURITY = {"security": [{SESSION_SCHEME: []}]}


def session_cookie_scheme(settings: Settings) -> APIKeyCookie:
    return APIKeyCookie(name=settings.cookie_name, scheme_name=SESSION_SCHEME, auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user(request: Request) -> Principal:
    """
    Authenticates the request from its session cookie and attaches the
    principal to request.state for downstream handlers.
    """
    settings = get_settings(request)
    token = await request.app.state.session_cookie(request)
    principal = decode_session_token(token, secret=settings.jwt_secret)
    request.state.principal = principal
    return principal
