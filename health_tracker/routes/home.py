from datetime import datetime

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from health_tracker import __version__
from health_tracker.extensions import db

home_bp = Blueprint("home", __name__)


@home_bp.route("/", methods=["GET"])
def index():
    return jsonify({
        "message": "Health Tracker API is running",
        "version": __version__,
        "endpoints": {
            "auth": "/api/auth",
            "records": "/api/records",
        },
    })


@home_bp.route("/health", methods=["GET"])
def health_check():
    try:
        db.session.execute(text("SELECT 1"))
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Database health check failed: {e}")
        return jsonify({
            "status": "ERROR",
            "database": "Disconnected",
            "error": str(e),
        }), 500

    return jsonify({
        "status": "OK",
        "database": "Connected",
        "timestamp": datetime.utcnow().isoformat(),
    })
