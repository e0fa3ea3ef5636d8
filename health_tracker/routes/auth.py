from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import create_access_token

from health_tracker.errors import AuthenticationFailed
from health_tracker.extensions import db, limiter
from health_tracker.schemas import (
    user_schema,
    register_schema,
    login_schema,
    profile_update_schema,
    change_password_schema,
)
from health_tracker.services import users as user_service
from health_tracker.utils.decorators import with_user_id
from health_tracker.utils.request import json_body

auth_bp = Blueprint("auth", __name__)


def auth_rate_limit():
    return current_app.config["AUTH_RATE_LIMIT"]


def issue_token(user):
    # Lifetime comes from JWT_ACCESS_TOKEN_EXPIRES
    return create_access_token(identity=str(user.id))


@auth_bp.route("/register", methods=["POST"])
@limiter.limit(auth_rate_limit)
def register():
    data = register_schema.load(json_body())
    user = user_service.create_user(db.session, data)
    current_app.logger.info(f"Registered user {user.id} ({user.username})")

    return jsonify({
        "message": "User created successfully",
        "token": issue_token(user),
        "user": user_schema.dump(user),
    }), 201


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(auth_rate_limit)
def login():
    data = login_schema.load(json_body())
    try:
        user = user_service.authenticate(db.session, data["email"], data["password"])
    except AuthenticationFailed:
        current_app.logger.warning(f"Login failed for {data['email']}")
        raise

    current_app.logger.info(f"Login successful for user {user.id}")
    return jsonify({
        "message": "Login successful",
        "token": issue_token(user),
        "user": user_schema.dump(user),
    }), 200


@auth_bp.route("/profile", methods=["GET"])
@with_user_id
def get_profile(user_id):
    user = user_service.get_user(db.session, user_id)
    return jsonify({"user": user_schema.dump(user)}), 200


@auth_bp.route("/profile", methods=["PUT"])
@with_user_id
def update_profile(user_id):
    data = profile_update_schema.load(json_body())
    user = user_service.update_username(db.session, user_id, data["username"])
    return jsonify({
        "message": "Profile updated successfully",
        "user": user_schema.dump(user),
    }), 200


@auth_bp.route("/change-password", methods=["PUT"])
@with_user_id
def change_password(user_id):
    data = change_password_schema.load(json_body())
    user_service.change_password(
        db.session, user_id, data["current_password"], data["new_password"]
    )
    current_app.logger.info(f"Password changed for user {user_id}")
    return jsonify({"message": "Password changed successfully"}), 200
