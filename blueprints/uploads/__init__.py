"""
Uploads Blueprint - Image and resume uploads
Handles: Variant generation, storage and deletion of uploaded files
"""

from flask import Blueprint

uploads_bp = Blueprint('uploads', __name__, url_prefix='/api/upload')

from . import routes
