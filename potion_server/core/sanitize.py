# potion_server/core/sanitize.py

import html
import re
from urllib.parse import parse_qsl, urlencode


_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def strip_control(value: str) -> str:
    return _CONTROL_CHARS.sub("", value).strip()


def clean_text(value: str) -> str:
    """
    Trims a user-supplied string and escapes HTML-significant characters,
    so names and passwords are stored and compared in the same form.
    """
    return html.escape(strip_control(value), quote=True).replace("/", "&#x2F;")


class SanitizeQueryMiddleware:
    """
    ASGI middleware that trims every query-string value and drops control
    characters before routing, so handlers only ever see clean parameters.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope.get("query_string"):
            cleaned = clean_query_string(scope["query_string"])
            if cleaned is not None:
                scope = dict(scope)
                scope["query_string"] = cleaned
        await self.app(scope, receive, send)


def clean_query_string(query_string: bytes) -> bytes | None:
    """
    Returns the sanitized query string, or None when nothing needed cleaning.
    Bytes that are not valid UTF-8 survive the round trip unchanged.
    """
    raw = query_string.decode("utf-8", errors="surrogateescape")
    pairs = parse_qsl(raw, keep_blank_values=True, encoding="utf-8", errors="surrogateescape")
    cleaned = [(strip_control(k), strip_control(v)) for k, v in pairs]
    if cleaned == pairs:
        return None
    return urlencode(cleaned, encoding="utf-8", errors="surrogateescape").encode("ascii")
