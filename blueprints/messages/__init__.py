"""
Messages Blueprint - Contact form and admin inbox API
Handles: Public contact submissions, message review and bulk updates
"""

from flask import Blueprint

messages_bp = Blueprint('messages', __name__, url_prefix='/api')

from . import routes
