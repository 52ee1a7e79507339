from datetime import datetime, timedelta, timezone

from jose import jwt

from securewallet_client.core.tokens import expires_at, expires_within, read_claims

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _token(expiry: datetime) -> str:
    return jwt.encode({"sub": "1", "exp": expiry}, "key", algorithm="HS256")


def test_expiry_is_read_without_the_signing_key():
    token = _token(NOW + timedelta(minutes=15))

    assert read_claims(token)["sub"] == "1"
    assert expires_at(token) == NOW + timedelta(minutes=15)


def test_opaque_tokens_have_no_expiry():
    assert read_claims("not-a-jwt") == {}
    assert expires_at("not-a-jwt") is None
    assert not expires_within("not-a-jwt", 30, now=NOW)


def test_expires_within_leeway():
    token = _token(NOW + timedelta(seconds=20))

    assert expires_within(token, 30, now=NOW)
    assert not expires_within(token, 10, now=NOW)
