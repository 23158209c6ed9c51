import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidCredentialsError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.db.models.user import User, UserRole

logger = logging.getLogger(__name__)


def normalize_role(role: Optional[str]) -> UserRole:
    if role and role.strip().lower() == "teacher":
        return UserRole.TEACHER
    return UserRole.STUDENT


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email_or_username(db: Session, email: str, username: str):
    return db.query(User).filter(or_(User.email == email, User.username == username)).first()


def create_user(db: Session, user_data) -> User:
    username = (user_data.username or "").strip()
    email = (user_data.email or "").strip()
    if not username or not email or not user_data.password:
        raise ValidationError("Username, email and password are required")

    if get_user_by_email_or_username(db, email, username):
        logger.warning(f"Signup rejected, duplicate email or username: {email} / {username}")
        raise ValidationError("User with this email or username already exists")

    db_user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(user_data.password),
        role=normalize_role(user_data.role),
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup with the same email/username
        db.rollback()
        raise ValidationError("User with this email or username already exists")
    db.refresh(db_user)
    logger.info(f"User created: id={db_user.id} username={db_user.username} role={db_user.role.value}")
    return db_user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    # Same error for unknown email and wrong password
    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login for {email}")
        raise InvalidCredentialsError()
    return user
