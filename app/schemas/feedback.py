from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.schemas.user import AuthorRef


class FeedbackCreate(BaseModel):
    content: str = ""


class Feedback(BaseModel):
    id: int
    content: str
    thesis_id: int
    user_id: int
    created_at: datetime
    author: Optional[AuthorRef] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class FeedbackCreated(BaseModel):
    message: str
    feedback: Feedback
