"""Tests for small helper functions."""
from __future__ import annotations

from datetime import date, datetime

import pytest

from utils.helpers import (
    calculate_read_time, format_date, format_date_range, format_month_year, generate_slug, total_pages
)


@pytest.mark.parametrize("text, slug", [
    ("Hello World", "hello-world"),
    ("  Flask & SQLAlchemy: Tips!  ", "flask-sqlalchemy-tips"),
    ("snake_case_title", "snake-case-title"),
    ("---", ""),
])
def test_generate_slug(text, slug):
    assert generate_slug(text) == slug


def test_read_time_rounds_up_with_minimum_of_one():
    assert calculate_read_time("") == 1
    assert calculate_read_time("word " * 200) == 1
    assert calculate_read_time("word " * 201) == 2


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(21, 10) == 3


def test_format_dates(app):
    with app.app_context():
        assert format_month_year(datetime(2023, 1, 15)) == "Jan 2023"
        assert format_month_year(date(2024, 6, 1)) == "Jun 2024"
        assert format_month_year("2022-03-01T00:00:00.000Z") == "Mar 2022"
        assert format_date(None, "%Y") == "N/A"
        assert format_date("garbage", "%Y") == "N/A"


def test_format_date_range(app):
    with app.app_context():
        assert format_date_range(datetime(2020, 1, 1), None) == "Jan 2020 – Present"
        assert format_date_range(datetime(2020, 1, 1), datetime(2021, 5, 1)) == "Jan 2020 – May 2021"
