"""
Pages Blueprint - Public site pages
Handles: Home, Projects, Blog, About, Contact, sitemap and robots.txt
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
