"""
Site Blueprint - Singleton site content API
Handles: Hero section and site settings
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__, url_prefix='/api')

from . import routes
