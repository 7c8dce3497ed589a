"""
Roadmap Admin - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask
from roadmap.extensions import db, login_manager
from roadmap.config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'admin.login'

    # Register blueprints
    from roadmap.admin import admin_bp
    from roadmap.api import api_bp

    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Resource service; writes are checked against the same predicate the guard uses
    from roadmap.admin.guard import has_admin_access
    from roadmap.services import ResourceService
    app.extensions['resources'] = ResourceService(app.config, authorizer=has_admin_access)

    # Context processor for admin flag
    @app.context_processor
    def inject_is_admin_flag():
        """Inject `is_admin` hint into templates based on SESSION."""
        from flask import session
        return dict(is_admin=session.get('is_admin', False))

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from roadmap.models import AdminUser
        return db.session.get(AdminUser, int(user_id))

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and not app.testing:
            os.makedirs(os.path.join(Config.basedir, 'instance'), exist_ok=True)
        db.create_all()
        if app.config.get('SEED_DEFAULT_DATA'):
            _ensure_default_data(app)

    return app


def _ensure_default_data(app):
    """Ensure the default admin, field types and categories exist."""
    from roadmap.models import AdminUser, Category, FieldType

    email = app.config['ADMIN_EMAIL'].lower()
    if not AdminUser.query.filter_by(email=email).first():
        AdminUser.create_or_promote(email, app.config['ADMIN_PASSWORD'], name='Admin User')
        logger.info('Created default admin account %s', email)

    default_field_types = [
        {'name': 'Process',    'type': 'PROCESS',    'description': 'Process steps and workflows'},
        {'name': 'Technology', 'type': 'TECHNOLOGY', 'description': 'Technologies and tools used'},
        {'name': 'Service',    'type': 'SERVICE',    'description': 'Services provided or utilized'},
        {'name': 'Data',       'type': 'DATA',       'description': 'Data types and sources'},
    ]
    for ft in default_field_types:
        if not FieldType.query.filter_by(type=ft['type']).first():
            db.session.add(FieldType(**ft))

    default_categories = [
        {'id': 'cat1', 'name': 'Digital Workplace', 'color': '#4299E1', 'icon': 'ComputerIcon'},
        {'id': 'cat2', 'name': 'Infrastructure',    'color': '#48BB78', 'icon': 'ServerIcon'},
        {'id': 'cat3', 'name': 'Security',          'color': '#ED8936', 'icon': 'ShieldIcon'},
        {'id': 'cat4', 'name': 'Digitalisierung',   'color': '#805AD5', 'icon': 'DeviceTabletIcon'},
    ]
    for cat in default_categories:
        if not db.session.get(Category, cat['id']):
            db.session.add(Category(**cat))

    try:
        db.session.commit()
        logger.info('Default roadmap data verified/created')
    except Exception:
        db.session.rollback()
        logger.exception('Could not create default roadmap data')
