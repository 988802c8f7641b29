"""
Projects Blueprint - Portfolio projects API
Handles: Listing, CRUD and ordering of projects
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
