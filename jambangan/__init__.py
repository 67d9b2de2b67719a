"""
Flask Application Factory
"""

import click
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from config import config
from extensions import db, migrate, jwt, bcrypt, cors, limiter
import os
from jambangan.services.token_service import register_jwt_callbacks
from jambangan.models import TokenBlocklist


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    if not app.config.get('JWT_SIGNING_KEYS') or \
            app.config.get('JWT_ACTIVE_KEY_ID') not in app.config['JWT_SIGNING_KEYS']:
        raise RuntimeError('JWT_SIGNING_KEYS must contain the JWT_ACTIVE_KEY_ID signing key')

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_callbacks(jwt)
    bcrypt.init_app(app)
    cors.init_app(app, resources={
        r"/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Origin", "X-Requested-With", "Content-Type", "Accept"],
            "supports_credentials": True
        }
    })
    limiter.init_app(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    register_commands(app)

    # Create database tables
    with app.app_context():
        db.create_all()

    return app


def register_blueprints(app):
    """Register Flask blueprints"""
    from jambangan.api.auth import auth_bp
    from jambangan.api.users import users_bp
    from jambangan.api.complaints import complaints_bp
    from jambangan.api.maps import maps_bp
    from jambangan.api.reports import reports_bp
    from jambangan.api.umkm import umkm_bp
    from jambangan.api.uploads import uploads_bp

    # Paths are served at the root, matching the deployed frontend
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(complaints_bp)
    app.register_blueprint(maps_bp, url_prefix='/maps')
    app.register_blueprint(reports_bp, url_prefix='/reportData')
    app.register_blueprint(umkm_bp)
    app.register_blueprint(uploads_bp, url_prefix='/uploads')

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return jsonify({'status': 'healthy', 'message': 'API is running'}), 200


def register_error_handlers(app):
    """Register error handlers"""

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({'error': 'Bad Request', 'message': 'Invalid request'}), 400

    @app.errorhandler(401)
    def unauthorized(error):
        return jsonify({'error': 'Unauthorized', 'message': 'Authentication required'}), 401

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({'error': 'Forbidden', 'message': 'Insufficient permissions'}), 403

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not Found', 'message': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method Not Allowed', 'message': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({'error': 'Payload Too Large', 'message': 'Uploaded file is too large'}), 413

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'Internal Server Error', 'message': 'Server Error'}), 500

    @app.errorhandler(SQLAlchemyError)
    def storage_error(error):
        db.session.rollback()
        app.logger.error(f'Database error: {str(error)}')
        return jsonify({'message': 'Server Error'}), 500

    @app.errorhandler(Exception)
    def handle_exception(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.name, 'message': error.description}), error.code
        db.session.rollback()
        app.logger.error(f'Unhandled exception: {str(error)}')
        return jsonify({'error': 'Internal Server Error', 'message': 'Server Error'}), 500


def register_commands(app):
    """Register maintenance CLI commands"""

    @app.cli.command('prune-tokens')
    def prune_tokens():
        """Delete blocklist entries for tokens that have expired anyway"""
        deleted = TokenBlocklist.prune_expired()
        click.echo(f'Removed {deleted} expired token(s) from the blocklist')
