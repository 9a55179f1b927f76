from datetime import datetime, timedelta, timezone

import pytest

from potion_server.core.errors import UnauthorizedError
from potion_server.core.security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)


SECRET = "test-secret"
ISSUED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def token():
    return create_session_token(secret=SECRET, user_id=42, user_name="luna", expire_hours=24, now=ISSUED)


def test_password_hash_round_trip():
    hashed = get_password_hash("nargles")
    assert hashed != "nargles"
    assert verify_password("nargles", hashed)
    assert not verify_password("wrackspurt", hashed)


def test_verify_password_rejects_blank_inputs():
    assert not verify_password("", get_password_hash("nargles"))
    assert not verify_password("nargles", "")


def test_token_accepted_before_expiry(token):
    principal = decode_session_token(token, secret=SECRET, now=ISSUED + timedelta(hours=23, minutes=59))
    assert principal.user_id == 42
    assert principal.user_name == "luna"


def test_token_rejected_at_expiry(token):
    with pytest.raises(UnauthorizedError):
        decode_session_token(token, secret=SECRET, now=ISSUED + timedelta(hours=24))


def test_token_rejected_after_expiry(token):
    with pytest.raises(UnauthorizedError):
        decode_session_token(token, secret=SECRET, now=ISSUED + timedelta(days=3))


def test_token_signed_with_other_secret_rejected(token):
    with pytest.raises(UnauthorizedError):
        decode_session_token(token, secret="other-secret", now=ISSUED)


def test_tampered_token_rejected(token):
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(UnauthorizedError):
        decode_session_token(forged, secret=SECRET, now=ISSUED)


def test_missing_token_rejected():
    with pytest.raises(UnauthorizedError):
        decode_session_token(None, secret=SECRET)
