from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    username: str
    email: str
    password: str
    role: str = "student"  # "teacher" or anything else -> STUDENT


class UserLogin(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    message: str
    token: str
    role: str
    username: str
    user_id: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AuthorRef(BaseModel):
    username: str

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
