from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from pathlib import Path
from teamstock.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
login_manager = LoginManager()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://"
)


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(overrides=None):
    """
    Application factory.

    Args:
        overrides: Config values applied after the environment is read (tests)

    Returns:
        Flask application with the store, repositories and managers attached
        under ``app.extensions['teamstock']``
    """
    app = Flask(__name__)

    logger = get_logger("teamstock")
    logger.info("Initializing Flask application")

    base_dir = Path(__file__).parent.parent
    instance_dir = base_dir / 'instance'

    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['STORE_BACKEND'] = os.environ.get('STORE_BACKEND', 'mock').lower()
    app.config['MOCK_STORE_PATH'] = os.environ.get('MOCK_STORE_PATH')
    app.config['SYSTEM_CONFIG_PATH'] = os.environ.get('SYSTEM_CONFIG_PATH')
    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED', 'True')
    app.config['LOGIN_RATE_LIMIT'] = os.environ.get('LOGIN_RATE_LIMIT', '10 per minute')
    app.config.update(overrides or {})

    # SECURITY: Require SECRET_KEY - no fallback
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if not app.config['SQLALCHEMY_DATABASE_URI']:
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'teamstock.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    if app.config['STORE_BACKEND'] not in ('mock', 'sql'):
        raise RuntimeError(f"STORE_BACKEND must be 'mock' or 'sql', got '{app.config['STORE_BACKEND']}'")

    logger.debug(f"Store backend: {app.config['STORE_BACKEND']}")

    # Initialize extensions with app
    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from teamstock.data.users.user import User
    from teamstock.data.store.stored_collection import StoredCollection

    from teamstock.build import build_context
    with app.app_context():
        db.create_all()
        app.extensions['teamstock'] = build_context(app)

    # Register blueprints
    from teamstock.auth import auth
    from teamstock.presentation.routes import init_app as init_routes

    app.register_blueprint(auth)
    init_routes(app)

    _register_error_handlers(app)

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Cache-Control'] = 'no-store'
        return response

    logger.info("Flask application initialization complete")

    return app


def _register_error_handlers(app):
    """Map domain exceptions to JSON error responses"""
    from werkzeug.exceptions import HTTPException
    from teamstock.buisness.errors import (
        ConcurrentModificationError,
        ImportRequiredFieldMissing,
        RecordNotFound,
        TransportFailure,
    )
    from teamstock.utils.logging_sanitizer import sanitize_exception_message

    logger = get_logger("teamstock.errors")

    @app.errorhandler(RecordNotFound)
    def handle_not_found(error):
        return jsonify({'error': str(error)}), 404

    @app.errorhandler(ImportRequiredFieldMissing)
    def handle_missing_field(error):
        return jsonify({'error': str(error), 'row': error.row, 'field': error.field}), 400

    # CSVImportError and InvalidTransition are ValueErrors
    @app.errorhandler(ValueError)
    def handle_invalid(error):
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(ConcurrentModificationError)
    def handle_conflict(error):
        logger.warning(str(error))
        return jsonify({'error': str(error)}), 409

    @app.errorhandler(TransportFailure)
    def handle_transport(error):
        logger.error(f"Store unavailable: {sanitize_exception_message(error.__cause__ or error)}")
        return jsonify({'error': str(error), 'retryable': True}), 503

    @app.errorhandler(HTTPException)
    def handle_http(error):
        return jsonify({'error': error.description}), error.code
