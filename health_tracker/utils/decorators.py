# health_tracker/utils/decorators.py
from functools import wraps
from flask import current_app, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required

from health_tracker.extensions import db
from health_tracker.models import User


def with_user_id(view_func):
    """
    Require a valid JWT and pass the authenticated user's id to the view
    as the ``user_id`` keyword argument.
    Tokens whose user no longer exists are rejected with 401.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        identity = get_jwt_identity()
        try:
            user_id = int(identity)
        except (TypeError, ValueError):
            return jsonify({"error": "Invalid or expired token."}), 403

        if db.session.get(User, user_id) is None:
            current_app.logger.info(f"Token presented for missing user {user_id}")
            return jsonify({"error": "Access denied. User no longer exists."}), 401

        kwargs["user_id"] = user_id
        return view_func(*args, **kwargs)
    return wrapper
