# app/api/deps.py
import logging
from typing import Generator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import decode_access_token
from app.crud.user import get_user_by_id
from app.db.models.user import User, UserRole
from app.db.session import SessionLocal

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is a 401 from us, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationError("Unauthorized")

    user = get_user_by_id(db, payload["userId"])
    if not user or user.role.value != payload["role"]:
        raise AuthenticationError("Unauthorized")
    return user


def require_role(role: UserRole):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            logger.warning(f"User {current_user.id} ({current_user.role.value}) denied {role.value}-only endpoint")
            raise AuthorizationError("Access denied")
        return current_user

    return checker


require_teacher = require_role(UserRole.TEACHER)
require_student = require_role(UserRole.STUDENT)
