"""Tests for the upload API."""
from __future__ import annotations

import io

import pytest
from PIL import Image

from blueprints.uploads import routes as upload_routes


def _png_bytes(size=(900, 700), color=(200, 30, 30)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def _upload(client, data, folder, filename="photo.png", content_type="image/png", **form):
    payload = {"file": (io.BytesIO(data), filename, content_type), "folder": folder}
    payload.update(form)
    return client.post("/api/upload", data=payload, content_type="multipart/form-data")


@pytest.fixture(autouse=True)
def fixed_file_id(monkeypatch):
    monkeypatch.setattr(upload_routes, "new_file_id", lambda: "abc123def456")


def test_upload_requires_auth(client):
    resp = _upload(client, _png_bytes(), "projects")

    assert resp.status_code == 401


def test_project_upload_stores_four_webp_variants(admin_client, s3):
    resp = _upload(admin_client, _png_bytes(), "projects", entityId="p1")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["key"] == "projects/p1/orig_abc123def456.webp"
    assert data["urls"] == {
        "thumbnail": "https://cdn.example.com/projects/p1/thumb_abc123def456.webp",
        "medium": "https://cdn.example.com/projects/p1/med_abc123def456.webp",
        "large": "https://cdn.example.com/projects/p1/lg_abc123def456.webp",
        "original": "https://cdn.example.com/projects/p1/orig_abc123def456.webp",
    }
    assert all(obj["content_type"] == "image/webp" for obj in s3.objects.values())

    thumb = Image.open(io.BytesIO(s3.objects["projects/p1/thumb_abc123def456.webp"]["body"]))
    medium = Image.open(io.BytesIO(s3.objects["projects/p1/med_abc123def456.webp"]["body"]))
    original = Image.open(io.BytesIO(s3.objects["projects/p1/orig_abc123def456.webp"]["body"]))
    assert thumb.format == "WEBP"
    assert thumb.size == (400, 300)
    assert medium.size == (771, 600)
    assert original.size == (900, 700)


def test_project_upload_without_entity_uses_folder_root(admin_client):
    resp = _upload(admin_client, _png_bytes(), "projects")

    assert resp.get_json()["data"]["key"] == "projects/orig_abc123def456.webp"


def test_profile_upload_makes_square_headshot(admin_client, s3):
    resp = _upload(admin_client, _png_bytes(), "profile")

    data = resp.get_json()["data"]
    assert data["key"] == "profile/headshot_abc123def456.webp"
    assert set(data["urls"]) == {"display", "original"}
    headshot = Image.open(io.BytesIO(s3.objects["profile/headshot_abc123def456.webp"]["body"]))
    assert headshot.size == (400, 400)


def test_logo_upload_requires_entity_id(admin_client):
    resp = _upload(admin_client, _png_bytes(), "logos")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "MISSING_ENTITY_ID"


def test_blog_upload_keys_by_post(admin_client):
    resp = _upload(admin_client, _png_bytes(), "blog", entityId="post-1")

    data = resp.get_json()["data"]
    assert data["key"] == "blog/post-1/featured_abc123def456.webp"
    assert set(data["urls"]) == {"featured", "original"}


def test_resume_upload_stores_pdf_at_fixed_key(admin_client, s3):
    resp = _upload(admin_client, b"%PDF-1.4 test", "resume", filename="cv.pdf", content_type="application/pdf")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "urls": {"original": "https://cdn.example.com/resume/resume_latest.pdf"},
        "key": "resume/resume_latest.pdf",
    }
    assert s3.objects["resume/resume_latest.pdf"]["content_type"] == "application/pdf"


def test_resume_must_be_pdf(admin_client):
    resp = _upload(admin_client, _png_bytes(), "resume")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_FILE_TYPE"


def test_missing_file(admin_client):
    resp = admin_client.post("/api/upload", data={"folder": "projects"}, content_type="multipart/form-data")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "MISSING_FILE"


def test_invalid_folder(admin_client):
    resp = _upload(admin_client, _png_bytes(), "secrets")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_FOLDER"


def test_disallowed_content_type(admin_client):
    resp = _upload(admin_client, b"GIF89a", "projects", filename="x.svg", content_type="image/svg+xml")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_FILE_TYPE"


def test_unreadable_image(admin_client):
    resp = _upload(admin_client, b"not really a png", "projects")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_FILE_TYPE"


def test_file_too_large(app, admin_client):
    app.config["MAX_UPLOAD_SIZE"] = 10

    resp = _upload(admin_client, _png_bytes(), "projects")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "FILE_TOO_LARGE"


def test_upload_rate_limit(app, admin_client):
    app.config["UPLOAD_RATE_LIMIT"] = (2, 60)

    statuses = [_upload(admin_client, b"%PDF", "resume", content_type="application/pdf").status_code
                for _ in range(3)]

    assert statuses == [200, 200, 429]


def test_delete_removes_all_variants(admin_client, s3):
    resp = admin_client.delete("/api/upload", json={"key": "projects/p1/thumb_abc.webp"})

    assert resp.status_code == 200
    assert resp.get_json() == {"data": {"success": True}}
    assert "projects/p1/orig_abc.webp" in s3.deleted
    assert "projects/p1/med_abc.webp" in s3.deleted


def test_delete_plain_file(admin_client, s3):
    admin_client.delete("/api/upload", json={"key": "resume/resume_latest.pdf"})

    assert s3.deleted == ["resume/resume_latest.pdf"]


def test_delete_rejects_foreign_prefix(admin_client):
    resp = admin_client.delete("/api/upload", json={"key": "../etc/passwd"})

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_KEY"
