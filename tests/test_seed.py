"""Tests for the sample data seed script."""
from __future__ import annotations

from extensions import db
from migrations.seed_db import seed_database
from models import Project, SiteSettings, Skill


def test_seed_fills_empty_database_once(app):
    with app.app_context():
        first = seed_database()
        second = seed_database()

        assert first["projects"] == 2
        assert first["skills"] == 8
        assert set(second.values()) == {0}
        assert Project.query.count() == 2
        assert Skill.query.count() == 8
        assert db.session.get(SiteSettings, "default").site_name == "John Doe | Portfolio"


def test_seeded_content_is_served(app, client):
    with app.app_context():
        seed_database()

    projects = client.get("/api/projects").get_json()["data"]
    posts = client.get("/api/blog").get_json()["data"]

    assert [p["slug"] for p in projects] == ["e-commerce-platform", "task-management-app"]
    assert posts[0]["publishedAt"] == "2026-01-15T00:00:00.000Z"
