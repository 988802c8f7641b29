"""
Auth Blueprint - Authentication and authorization
Handles: Admin sign-in page, OAuth2 callback, session cookies, token refresh
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='')

from . import routes
