"""
Portfolio CMS - Application Factory

This module initializes the Flask application with all necessary extensions,
configuration and middleware. All actual route handling is delegated to blueprints.
"""

from datetime import datetime, timezone
from flask import Flask
from config import get_config
from extensions import db, login_manager
from utils.data import get_site_settings, get_unread_messages_count
from utils.decorators import guard_admin_pages
from utils.errors import register_error_handlers
from utils.helpers import register_template_filters

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.dashboard import dashboard_bp
from blueprints.projects import projects_bp
from blueprints.blog import blog_bp
from blueprints.about import about_bp
from blueprints.site import site_bp
from blueprints.messages import messages_bp
from blueprints.uploads import uploads_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    app.json.sort_keys = app.config.get('JSON_SORT_KEYS', False)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register Jinja filters
    register_template_filters(app)
    app.logger.debug('✓ Registered Jinja filters')

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio application is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(about_bp)
    app.register_blueprint(site_bp)
    app.register_blueprint(messages_bp)
    app.register_blueprint(uploads_bp)


def register_hooks(app):
    """Register request/response hooks and context processors"""

    app.before_request(guard_admin_pages)

    @app.context_processor
    def inject_global_vars():
        """Site-wide template values"""
        settings = get_site_settings()
        return {
            'site_settings': settings,
            'site_name': settings.site_name if settings else 'Portfolio',
            'site_description': (settings.site_description if settings else '') or '',
            'social_links': (settings.social_links if settings else None) or {},
            'current_year': datetime.now(timezone.utc).year,
            'get_unread_messages_count': get_unread_messages_count,
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response
