"""
Dashboard Blueprint - Admin area pages
Handles: Overview stats and the contact message inbox
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/admin')

from . import routes
