"""Tests for markdown rendering."""
from __future__ import annotations

from markupsafe import Markup

from utils.markdown_render import markdown_filter, markdown_to_html


def test_blank_input_renders_empty():
    assert markdown_to_html("") == ""
    assert markdown_to_html("   \n") == ""


def test_raw_html_is_escaped():
    html = markdown_to_html('Hello <script>alert("x")</script>\n\n<div onclick="x()">block</div>')

    assert "<script>" not in html
    assert "<div onclick" not in html
    assert "&lt;script&gt;" in html


def test_tables_render():
    html = markdown_to_html("| a | b |\n|---|---|\n| 1 | 2 |")

    assert "<table>" in html
    assert "<td>1</td>" in html


def test_fenced_code_is_highlighted():
    html = markdown_to_html("```python\ndef hello():\n    return 1\n```")

    assert 'class="highlight"' in html
    assert "<span" in html


def test_headings_get_anchor_links():
    html = markdown_to_html("## Getting Started")

    assert 'id="getting-started"' in html
    assert 'href="#getting-started"' in html


def test_task_lists_and_strikethrough():
    html = markdown_to_html("- [x] done\n- [ ] todo\n\n~~old~~")

    assert 'type="checkbox"' in html
    assert "<del>old</del>" in html


def test_bare_urls_are_linked():
    html = markdown_to_html("See https://example.com for details")

    assert '<a href="https://example.com"' in html


def test_filter_returns_markup(app):
    with app.app_context():
        rendered = markdown_filter("**bold**")

    assert isinstance(rendered, Markup)
    assert "<strong>bold</strong>" in rendered
