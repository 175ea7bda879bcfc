import jwt

from taskboard_api.app.core.config import Settings
from taskboard_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


CONFIG = Settings(secret_key="unit-test-secret")


def test_hash_is_salted_and_verifiable():
    first = hash_password("secret1")
    second = hash_password("secret1")
    assert first != second
    assert "secret1" not in first
    assert verify_password("secret1", first)
    assert not verify_password("secret2", first)


def test_verify_rejects_malformed_hash():
    assert not verify_password("secret1", "not-a-hash")
    assert not verify_password("secret1", "zz$zz")


def test_token_roundtrip_carries_identity():
    token = create_access_token({"sub": "7", "username": "alice"}, config=CONFIG)
    payload = decode_access_token(token, CONFIG)
    assert payload["sub"] == "7"
    assert payload["username"] == "alice"
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "7"}, expires_delta=-10, config=CONFIG)
    assert decode_access_token(token, CONFIG) is None


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode({"sub": "7", "exp": 9999999999}, "someone-else", algorithm="HS256")
    assert decode_access_token(forged, CONFIG) is None
    assert decode_access_token("garbage", CONFIG) is None
