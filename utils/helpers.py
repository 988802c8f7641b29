"""
Helpers Module - Utility functions for common operations
"""

import math
import re
from datetime import date, datetime
from flask import current_app, request


WORDS_PER_MINUTE = 200


def generate_slug(text: str) -> str:
    """Generate a URL-friendly slug from a string.

    Removes special characters, turns whitespace and underscores into
    hyphens and collapses repeated hyphens.
    """
    slug = (text or '').lower().strip()
    slug = re.sub(r'[^\w\s-]', '', slug)
    slug = re.sub(r'[\s_]+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def calculate_read_time(content: str) -> int:
    """Estimated reading time in whole minutes (never below one)"""
    word_count = len((content or '').split())
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def parse_int_arg(name, default):
    """Integer query parameter, or ``default`` when missing or malformed"""
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def total_pages(total, per_page):
    return math.ceil(total / per_page) if per_page else 0


def _to_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        return datetime.fromisoformat(text)
    raise TypeError(f"Unsupported date value: {value!r}")


def format_date(value, fmt, fallback='N/A'):
    """Safely format a date value, returning ``fallback`` if it is missing or invalid"""
    if not value:
        return fallback
    try:
        return _to_datetime(value).strftime(fmt)
    except (TypeError, ValueError) as e:
        current_app.logger.warning(f"Failed to format date {value!r}: {str(e)}")
        return fallback


def format_month_year(value):
    """e.g. "Jan 2023\""""
    return format_date(value, '%b %Y')


def format_year(value):
    return format_date(value, '%Y')


def format_date_range(start, end, fmt='%b %Y'):
    """Format a start/end pair; a missing end date reads as "Present\""""
    start_text = format_date(start, fmt)
    end_text = format_date(end, fmt) if end else 'Present'
    return f"{start_text} – {end_text}"


def register_template_filters(app):
    """Expose date and markdown helpers to Jinja templates"""
    from .markdown_render import markdown_filter

    app.jinja_env.filters['format_date'] = format_date
    app.jinja_env.filters['month_year'] = format_month_year
    app.jinja_env.filters['year'] = format_year
    app.jinja_env.filters['date_range'] = format_date_range
    app.jinja_env.filters['markdown'] = markdown_filter
