"""Tests for the public site pages, sitemap and robots.txt."""
from __future__ import annotations

from datetime import datetime

import pytest

from extensions import db
from models import BlogPost, ContactMessage, Project, Skill


@pytest.fixture
def content(app):
    with app.app_context():
        db.session.add_all([
            Project(slug="live-project", title="Live Project", short_description="Shown",
                    description="**Bold** write-up", tech_tags=["Flask"], status="PUBLISHED",
                    display_order=0),
            Project(slug="second-project", title="Second Project", short_description="Also shown",
                    description="More", tech_tags=["Go"], status="PUBLISHED", display_order=1),
            Project(slug="draft-project", title="Draft Project", short_description="Hidden",
                    description="Secret", tech_tags=["Rust"], status="DRAFT", display_order=2),
            BlogPost(slug="hello-world", title="Hello World", content="# Hi\n\n<script>x</script>",
                     excerpt="First post", tags=["intro"], status="PUBLISHED",
                     published_at=datetime(2026, 1, 15)),
            BlogPost(slug="unfinished", title="Unfinished", content="...", excerpt="Draft",
                     status="DRAFT"),
            Skill(name="Python", category="Languages"),
        ])
        db.session.commit()


def test_home_page(client, content):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_projects_page_hides_drafts(client, content):
    body = client.get("/projects").get_data(as_text=True)

    assert "Live Project" in body
    assert "Draft Project" not in body


def test_projects_page_filters_by_tag(client, content):
    body = client.get("/projects?tag=Go").get_data(as_text=True)

    assert "Second Project" in body
    assert "Live Project" not in body


def test_project_detail_renders_markdown_and_neighbours(client, content):
    body = client.get("/projects/live-project").get_data(as_text=True)

    assert "<strong>Bold</strong>" in body
    assert "/projects/second-project" in body


def test_draft_project_detail_is_404(client, content):
    resp = client.get("/projects/draft-project")

    assert resp.status_code == 404


def test_blog_post_escapes_raw_html(client, content):
    body = client.get("/blog/hello-world").get_data(as_text=True)

    assert "<script>x</script>" not in body
    assert "Hello World" in body


def test_blog_index_filters_by_tag(client, content):
    assert "Hello World" in client.get("/blog?tag=intro").get_data(as_text=True)
    assert "Hello World" not in client.get("/blog?tag=other").get_data(as_text=True)


def test_about_page(client, content):
    resp = client.get("/about")

    assert resp.status_code == 200
    assert "Python" in resp.get_data(as_text=True)


def test_unknown_page_uses_html_404(client):
    resp = client.get("/no-such-page")

    assert resp.status_code == 404
    assert resp.content_type.startswith("text/html")


def test_unknown_api_route_uses_json_404(client):
    resp = client.get("/api/no-such-thing")

    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "NOT_FOUND"


def test_sitemap_lists_published_content(app, client, content):
    app.config["APP_URL"] = "https://portfolio.example.com"

    resp = client.get("/sitemap.xml")

    body = resp.get_data(as_text=True)
    assert resp.headers["Content-Type"].startswith("application/xml")
    assert "<loc>https://portfolio.example.com/</loc>" in body
    assert "<loc>https://portfolio.example.com/projects/live-project</loc>" in body
    assert "<loc>https://portfolio.example.com/blog/hello-world</loc>" in body
    assert "draft-project" not in body
    assert "unfinished" not in body


def test_robots_txt(client):
    body = client.get("/robots.txt").get_data(as_text=True)

    assert "Disallow: /admin/" in body
    assert "Disallow: /api/" in body
    assert "Sitemap: http://localhost/sitemap.xml" in body


def test_contact_form_submission(app, client, notifications):
    resp = client.post("/contact", data={
        "name": "Ada",
        "email": "ada@example.com",
        "message": "Looking forward to hearing from you.",
    })

    assert resp.status_code == 302
    assert len(notifications) == 1
    with app.app_context():
        assert ContactMessage.query.count() == 1


def test_contact_form_shows_field_errors(app, client):
    resp = client.post("/contact", data={"name": "", "email": "bad", "message": "short"})

    assert resp.status_code == 400
    with app.app_context():
        assert ContactMessage.query.count() == 0


def test_health(client):
    assert client.get("/health").get_json()["status"] == "ok"


def test_projects_search_matches_tags_case_insensitively(client, content):
    body = client.get("/projects?search=fla").get_data(as_text=True)

    assert "Live Project" in body
    assert "Second Project" not in body


def test_projects_search_matches_tag_with_original_case(app, client):
    with app.app_context():
        db.session.add(Project(slug="ui-kit", title="Component Library", short_description="Widgets",
                               description="UI", tech_tags=["React"], status="PUBLISHED"))
        db.session.commit()

    body = client.get("/projects?search=React").get_data(as_text=True)

    assert "Component Library" in body


@pytest.fixture
def dated_projects(app):
    with app.app_context():
        db.session.add_all([
            Project(slug="zeta", title="Zeta Tool", short_description="z", description="z",
                    tech_tags=["Go"], status="PUBLISHED", display_order=0, start_date=datetime(2021, 1, 1)),
            Project(slug="alpha", title="Alpha App", short_description="a", description="a",
                    tech_tags=["Go"], status="PUBLISHED", display_order=1, start_date=datetime(2024, 1, 1)),
            Project(slug="mid", title="Mid Service", short_description="m", description="m",
                    tech_tags=["Go"], status="PUBLISHED", display_order=2),
        ])
        db.session.commit()


def _titles_in_order(body, titles):
    return sorted(titles, key=body.index)


@pytest.mark.parametrize("sort, expected", [
    ("order", ["Zeta Tool", "Alpha App", "Mid Service"]),
    ("newest", ["Alpha App", "Zeta Tool", "Mid Service"]),
    ("oldest", ["Mid Service", "Zeta Tool", "Alpha App"]),
    ("title", ["Alpha App", "Mid Service", "Zeta Tool"]),
    ("bogus", ["Zeta Tool", "Alpha App", "Mid Service"]),
])
def test_projects_page_sorts(client, dated_projects, sort, expected):
    body = client.get(f"/projects?sort={sort}").get_data(as_text=True)

    assert _titles_in_order(body, expected) == expected
