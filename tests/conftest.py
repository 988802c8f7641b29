"""Shared fixtures: an in-memory app, an admin session and stubbed outside services."""
from __future__ import annotations

import jwt
import pytest

from app import create_app
from blueprints.messages import routes as message_routes
from utils import auth as auth_module
from utils import storage
from utils.security import reset_rate_limits


ADMIN_TOKEN = "valid-admin-token"
ADMIN_CLAIMS = {
    "sub": "admin-sub-123",
    "email": "admin@example.com",
    "token_use": "access",
}


class FakeS3:
    """Records calls made through the boto3 S3 client interface."""

    def __init__(self):
        self.objects = {}
        self.deleted = []

    def put_object(self, Bucket, Key, Body, ContentType, CacheControl):
        self.objects[Key] = {"body": Body, "content_type": ContentType, "cache_control": CacheControl}

    def delete_object(self, Bucket, Key):
        self.deleted.append(Key)
        self.objects.pop(Key, None)

    def get_paginator(self, name):
        fake = self

        class _Paginator:
            def paginate(self, Bucket, Prefix):
                keys = [k for k in list(fake.objects) if k.startswith(Prefix)]
                yield {"Contents": [{"Key": k} for k in keys]}

        return _Paginator()

    def generate_presigned_url(self, operation, Params, ExpiresIn):
        return f"https://test-bucket.s3.amazonaws.com/{Params['Key']}?expires={ExpiresIn}"


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture(autouse=True)
def fake_verify_jwt(monkeypatch):
    def _verify(token):
        if token == ADMIN_TOKEN:
            return dict(ADMIN_CLAIMS)
        raise jwt.InvalidTokenError("bad token")

    monkeypatch.setattr(auth_module, "verify_jwt", _verify)
    return _verify


@pytest.fixture(autouse=True)
def notifications(monkeypatch):
    sent = []

    def _record(name, email, subject, message, message_id):
        sent.append({"name": name, "email": email, "subject": subject, "message": message, "id": message_id})

    monkeypatch.setattr(message_routes, "send_contact_notification", _record)
    return sent


@pytest.fixture(autouse=True)
def s3(monkeypatch):
    fake = FakeS3()
    monkeypatch.setattr(storage, "get_s3_client", lambda: fake)
    return fake


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    client.set_cookie(auth_module.ACCESS_TOKEN_COOKIE, ADMIN_TOKEN)
    return client
