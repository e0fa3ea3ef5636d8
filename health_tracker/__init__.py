import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify, request
from flask_cors import CORS

from health_tracker.extensions import db, ma, jwt, migrate, limiter

__version__ = "1.0.0"


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)

    log_file = app.config.get("LOG_FILE")
    if log_file and not app.testing:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)

    @app.after_request
    def log_request(response):
        app.logger.info(f"{request.method} {request.path} -> {response.status_code}")
        return response


def configure_jwt(app):
    @jwt.unauthorized_loader
    def missing_token_callback(reason):
        return jsonify({"error": "Access denied. No token provided."}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        app.logger.info(f"Rejected invalid token: {reason}")
        return jsonify({"error": "Invalid or expired token."}), 403

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"error": "Invalid or expired token."}), 403


def create_app(config_name=None):
    from health_tracker.config import config

    app = Flask(__name__)
    config_name = config_name or os.getenv("APP_ENV", "default")
    app.config.from_object(config[config_name])

    configure_logging(app)

    # Extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "supports_credentials": True,
    }})
    configure_jwt(app)

    from health_tracker.errors import register_error_handlers
    from health_tracker.commands import register_commands
    register_error_handlers(app)
    register_commands(app)

    from health_tracker import models  # noqa: F401  registers tables on db.metadata
    from health_tracker.routes.home import home_bp
    from health_tracker.routes.auth import auth_bp
    from health_tracker.routes.records import records_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(records_bp, url_prefix="/api/records")

    app.logger.info(f"Health Tracker API started with '{config_name}' config")
    return app
