"""Tests for contact notification delivery."""
from __future__ import annotations

from types import SimpleNamespace

import pytest

from utils import notifications


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


def test_email_body_escapes_visitor_input(app_context):
    title, text_body, html_body = notifications.build_contact_email(
        "<b>Eve</b>", "eve@example.com", "", "Hi <script>alert(1)</script>", "msg-1"
    )

    assert title == "New contact message from <b>Eve</b>"
    assert "Message ID: msg-1" in text_body
    assert "<script>" not in html_body
    assert "&lt;script&gt;" in html_body


def test_subject_is_used_in_title(app_context):
    title, _, _ = notifications.build_contact_email("Eve", "eve@example.com", "Job offer", "Hello there!", "m")

    assert title == "New contact message: Job offer"


def test_smtp_used_when_ses_not_configured(monkeypatch, app_context):
    calls = []
    monkeypatch.setattr(notifications, "send_smtp_email", lambda *args: calls.append("smtp") or True)
    monkeypatch.setattr(notifications, "send_ses_email", lambda *args: calls.append("ses") or True)

    delivered = notifications.deliver_contact_notification("Eve", "eve@example.com", "", "Hello there!", "m")

    assert delivered == ["smtp"]
    assert calls == ["smtp"]


def test_ses_and_telegram_when_configured(monkeypatch, app_context):
    app_context.config.update(
        SES_FROM_EMAIL="noreply@example.com",
        CONTACT_EMAIL="owner@example.com",
        ADMIN_TELEGRAM_BOT_TOKEN="bot-token",
        ADMIN_TELEGRAM_CHAT_ID="42",
    )
    posted = {}

    def _post(url, json, timeout):
        posted["url"] = url
        posted["json"] = json
        return SimpleNamespace(status_code=200)

    monkeypatch.setattr(notifications, "send_ses_email", lambda *args: True)
    monkeypatch.setattr(notifications, "send_smtp_email", lambda *args: pytest.fail("SMTP should not be used"))
    monkeypatch.setattr(notifications.requests, "post", _post)

    delivered = notifications.deliver_contact_notification("Eve", "eve@example.com", "", "Hello & bye", "m")

    assert delivered == ["ses", "telegram"]
    assert posted["url"] == "https://api.telegram.org/botbot-token/sendMessage"
    assert posted["json"]["chat_id"] == "42"
    assert "Hello &amp; bye" in posted["json"]["text"]


def test_unconfigured_smtp_is_skipped(app_context):
    cfg = notifications.get_admin_notifications_config()

    assert notifications.send_smtp_email(cfg["smtp"], "eve@example.com", "s", "t", "h") is False


def test_background_send_swallows_errors(monkeypatch, app_context):
    def _boom(*args):
        raise RuntimeError("network down")

    monkeypatch.setattr(notifications, "deliver_contact_notification", _boom)

    thread = notifications.send_contact_notification("Eve", "eve@example.com", "", "Hello there!", "m")
    thread.join(timeout=5)

    assert not thread.is_alive()
