"""
Decorators Module - Authentication decorators and guards
"""

from functools import wraps
from urllib.parse import urlencode
from flask import redirect, request

from .auth import optional_auth, require_auth


# Admin paths reachable without a session
PUBLIC_ADMIN_PATHS = ('/admin/login', '/admin/logout')


def login_redirect():
    """Redirect to the admin sign-in page, remembering where we were going"""
    return redirect(f"/admin/login?{urlencode({'redirect': request.path})}")


def guard_admin_pages():
    """``before_request`` hook: every /admin page except sign-in/out needs a valid token"""
    path = request.path
    if path != '/admin' and not path.startswith('/admin/'):
        return None
    if path in PUBLIC_ADMIN_PATHS:
        return None
    if optional_auth() is None:
        return login_redirect()
    return None


def api_auth_required(f):
    """Decorator for API views: a 401 JSON error unless the access token verifies"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        require_auth()
        return f(*args, **kwargs)
    return decorated_function


__all__ = ['login_redirect', 'guard_admin_pages', 'api_auth_required']
