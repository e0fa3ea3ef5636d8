from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from health_tracker.errors import AuthenticationFailed, Conflict, NotFound, ValidationFailed
from health_tracker.models import User


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def create_user(db: Session, user_data: dict) -> User:
    existing = db.query(User).filter(
        or_(User.email == user_data["email"], User.username == user_data["username"])
    ).first()
    if existing:
        raise Conflict("Username or email already exists")

    user = User(username=user_data["username"], email=user_data["email"])
    user.set_password(user_data["password"])
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise Conflict("Username or email already exists")
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter_by(email=email).first()
    if not user or not user.check_password(password):
        raise AuthenticationFailed("Invalid credentials")
    return user


def update_username(db: Session, user_id: int, username: str) -> User:
    user = get_user(db, user_id)
    taken = db.query(User).filter(User.username == username, User.id != user_id).first()
    if taken:
        raise Conflict("Username is already taken")

    user.username = username
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username is already taken")
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> User:
    user = get_user(db, user_id)
    if not user.check_password(current_password):
        raise ValidationFailed("Incorrect current password")
    user.set_password(new_password)
    db.commit()
    return user


def delete_user(db: Session, email: str) -> User:
    user = db.query(User).filter_by(email=email).first()
    if user is None:
        raise NotFound("User not found")
    db.delete(user)
    db.commit()
    return user
