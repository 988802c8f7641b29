"""
About Blueprint - About page content API
Handles: Skills, experience, education and certifications
"""

from flask import Blueprint

about_bp = Blueprint('about', __name__, url_prefix='/api')

from . import routes
