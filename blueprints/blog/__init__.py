"""
Blog Blueprint - Blog posts API
Handles: Listing, filtering and CRUD of blog posts
"""

from flask import Blueprint

blog_bp = Blueprint('blog', __name__, url_prefix='/api/blog')

from . import routes
