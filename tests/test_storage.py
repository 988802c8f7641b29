"""Tests for object storage helpers."""
from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from utils import storage


REAL_GET_S3_CLIENT = storage.get_s3_client


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


def test_variant_keys_expand_known_prefixes():
    keys = storage.variant_keys("projects/p1/med_abc.webp")

    assert "projects/p1/thumb_abc.webp" in keys
    assert "projects/p1/orig_abc.webp" in keys
    assert "projects/p1/headshot_abc.webp" in keys
    assert len(keys) == 8


def test_variant_keys_leave_plain_files_alone():
    assert storage.variant_keys("resume/resume_latest.pdf") == ["resume/resume_latest.pdf"]


def test_upload_returns_cdn_url(app_context, s3):
    url = storage.upload_to_s3(b"data", "profile/headshot_x.webp", "image/webp")

    assert url == "https://cdn.example.com/profile/headshot_x.webp"
    assert s3.objects["profile/headshot_x.webp"]["cache_control"] == "max-age=31536000, immutable"


def test_upload_failure_raises_storage_error(monkeypatch, app_context, s3):
    def _fail(**kwargs):
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "no"}}, "PutObject")

    monkeypatch.setattr(s3, "put_object", _fail)

    with pytest.raises(storage.StorageError):
        storage.upload_to_s3(b"data", "profile/x.webp", "image/webp")


def test_delete_folder_removes_only_prefix(app_context, s3):
    s3.objects.update({"blog/1/a.webp": {}, "blog/1/b.webp": {}, "blog/2/a.webp": {}})

    assert storage.delete_s3_folder("blog/1/") == 2
    assert list(s3.objects) == ["blog/2/a.webp"]


def test_unconfigured_storage(monkeypatch, app_context):
    monkeypatch.setattr(storage, "get_s3_client", REAL_GET_S3_CLIENT)
    app_context.config["S3_BUCKET_NAME"] = ""

    with pytest.raises(storage.StorageNotConfiguredError):
        storage.get_s3_client()
    assert storage.delete_folder_quietly("projects/1/") == 0


def test_presigned_url(app_context):
    url = storage.get_presigned_upload_url("blog/1/featured_x.webp", "image/webp")

    assert url.startswith("https://test-bucket.s3.amazonaws.com/blog/1/featured_x.webp")
