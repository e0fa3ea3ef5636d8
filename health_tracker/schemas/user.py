from flask import current_app
from marshmallow import fields, validate, validates, pre_load, ValidationError, EXCLUDE

from health_tracker.extensions import ma

ALL_FIELDS_REQUIRED = "All fields are required"


def _check_password_length(value, label="Password"):
    min_length = current_app.config.get("PASSWORD_MIN_LENGTH", 6)
    if len(value) < min_length:
        raise ValidationError(f"{label} must be at least {min_length} characters")


class UserSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    username = fields.String(dump_only=True)
    email = fields.String(dump_only=True)
    created_at = fields.DateTime(data_key="createdAt", dump_only=True)


class RegisterSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(
        required=True,
        validate=validate.Length(min=1, max=50),
        error_messages={"required": ALL_FIELDS_REQUIRED},
    )
    email = fields.Email(required=True, error_messages={"required": ALL_FIELDS_REQUIRED})
    password = fields.String(required=True, error_messages={"required": ALL_FIELDS_REQUIRED})

    @pre_load
    def normalize(self, data, **kwargs):
        data = dict(data or {})
        if isinstance(data.get("username"), str):
            data["username"] = data["username"].strip()
        if isinstance(data.get("email"), str):
            data["email"] = data["email"].strip().lower()
        return data

    @validates("password")
    def validate_password(self, value, **kwargs):
        _check_password_length(value)


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(
        required=True,
        error_messages={"required": "Email and password are required"},
    )
    password = fields.String(
        required=True,
        error_messages={"required": "Email and password are required"},
    )

    @pre_load
    def normalize(self, data, **kwargs):
        data = dict(data or {})
        if isinstance(data.get("email"), str):
            data["email"] = data["email"].strip().lower()
        return data


class ProfileUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(
        required=True,
        validate=validate.Length(min=1, max=50, error="Username is required"),
        error_messages={"required": "Username is required"},
    )

    @pre_load
    def normalize(self, data, **kwargs):
        data = dict(data or {})
        if isinstance(data.get("username"), str):
            data["username"] = data["username"].strip()
        return data


class ChangePasswordSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    current_password = fields.String(
        data_key="currentPassword",
        required=True,
        error_messages={"required": "Both current and new passwords are required"},
    )
    new_password = fields.String(
        data_key="newPassword",
        required=True,
        error_messages={"required": "Both current and new passwords are required"},
    )

    @validates("new_password")
    def validate_new_password(self, value, **kwargs):
        _check_password_length(value, label="New password")


user_schema = UserSchema()
register_schema = RegisterSchema()
login_schema = LoginSchema()
profile_update_schema = ProfileUpdateSchema()
change_password_schema = ChangePasswordSchema()
