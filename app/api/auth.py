import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.security import create_access_token
from app.crud import user as crud_user
from app.schemas.user import LoginResponse, MessageResponse, UserCreate, UserLogin

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(user_in: UserCreate, db: Session = Depends(get_db)):
    crud_user.create_user(db, user_in)
    return {"message": "User created successfully"}


@router.post("/login", response_model=LoginResponse)
def login(form: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.authenticate_user(db, form.email, form.password)
    token = create_access_token(user_id=user.id, role=user.role.value)
    logger.info(f"User {user.id} logged in")
    return LoginResponse(
        message="Login successful",
        token=token,
        role=user.role.value,
        username=user.username,
        user_id=user.id,
    )


@router.post("/logout", response_model=MessageResponse)
def logout():
    # Stateless: the token stays valid until it expires
    logger.info("Logout request received")
    return {"message": "Logout successful"}
