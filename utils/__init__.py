"""
Utils Package - Centralized utility modules initialization
"""

from .errors import ApiError, ErrorCodes, error_response, register_error_handlers
from .security import get_client_ip, rate_limit, check_rate_limit, reset_rate_limits
from .auth import require_auth, optional_auth, verify_jwt
from .decorators import guard_admin_pages, api_auth_required
from .helpers import (
    generate_slug,
    calculate_read_time,
    parse_int_arg,
    format_date,
    format_month_year,
    format_year,
    format_date_range,
    register_template_filters
)
from .markdown_render import markdown_to_html, MarkdownError
from .notifications import send_contact_notification

__all__ = [
    # Errors
    'ApiError',
    'ErrorCodes',
    'error_response',
    'register_error_handlers',

    # Security
    'get_client_ip',
    'rate_limit',
    'check_rate_limit',
    'reset_rate_limits',

    # Auth
    'require_auth',
    'optional_auth',
    'verify_jwt',

    # Decorators
    'guard_admin_pages',
    'api_auth_required',

    # Helpers
    'generate_slug',
    'calculate_read_time',
    'parse_int_arg',
    'format_date',
    'format_month_year',
    'format_year',
    'format_date_range',
    'register_template_filters',

    # Markdown
    'markdown_to_html',
    'MarkdownError',

    # Notifications
    'send_contact_notification'
]
