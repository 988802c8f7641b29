"""Tests for Cognito token verification against a signing key."""
from __future__ import annotations

import time
from types import SimpleNamespace

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from utils import auth as auth_module


REAL_VERIFY_JWT = auth_module.verify_jwt
ISSUER = "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_TESTPOOL"

SIGNING_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
OTHER_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)


class StaticJwksClient:
    """Serves the one public key, whatever kid the token names."""

    def get_signing_key_from_jwt(self, token):
        return SimpleNamespace(key=SIGNING_KEY.public_key())


@pytest.fixture
def app_context(app, monkeypatch):
    monkeypatch.setattr(auth_module, "verify_jwt", REAL_VERIFY_JWT)
    monkeypatch.setattr(auth_module, "_get_jwks_client", lambda: StaticJwksClient())
    with app.app_context():
        yield app


def _token(key=SIGNING_KEY, **overrides):
    claims = {
        "sub": "admin-sub-123",
        "iss": ISSUER,
        "exp": int(time.time()) + 3600,
        "token_use": "access",
        "client_id": "test-client",
        "email": "admin@example.com",
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, key, algorithm="RS256")


def test_access_token_is_accepted(app_context):
    claims = auth_module.verify_jwt(_token())

    assert claims["sub"] == "admin-sub-123"
    assert claims["token_use"] == "access"


def test_id_token_checks_audience(app_context):
    claims = auth_module.verify_jwt(_token(token_use="id", client_id=None, aud="test-client"))

    assert claims["aud"] == "test-client"


@pytest.mark.parametrize("overrides, error", [
    ({"client_id": "someone-else"}, jwt.InvalidAudienceError),
    ({"token_use": "id", "client_id": None, "aud": "someone-else"}, jwt.InvalidAudienceError),
    ({"iss": "https://cognito-idp.us-east-1.amazonaws.com/other-pool"}, jwt.InvalidIssuerError),
    ({"exp": int(time.time()) - 60}, jwt.ExpiredSignatureError),
    ({"token_use": "refresh"}, jwt.InvalidTokenError),
    ({"sub": None}, jwt.MissingRequiredClaimError),
])
def test_rejected_tokens(app_context, overrides, error):
    with pytest.raises(error):
        auth_module.verify_jwt(_token(**overrides))


def test_token_signed_with_other_key_is_rejected(app_context):
    with pytest.raises(jwt.InvalidSignatureError):
        auth_module.verify_jwt(_token(key=OTHER_KEY))


def test_signed_cookie_authenticates_api_request(app_context):
    client = app_context.test_client()
    client.set_cookie("access_token", _token())

    resp = client.get("/api/auth/me")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"email": "admin@example.com", "sub": "admin-sub-123"}


def test_expired_cookie_is_unauthorized(app_context):
    client = app_context.test_client()
    client.set_cookie("access_token", _token(exp=int(time.time()) - 60))

    resp = client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.get_json()["error"]["message"] == "Invalid or expired token"
