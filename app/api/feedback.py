# app/api/feedback.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_teacher
from app.crud import feedback as crud_feedback
from app.db.models.user import User
from app.schemas.feedback import Feedback, FeedbackCreate, FeedbackCreated

router = APIRouter()


@router.post("/{thesis_id}/feedbacks", response_model=FeedbackCreated, status_code=status.HTTP_201_CREATED)
def add_feedback(
    thesis_id: int,
    body: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    feedback = crud_feedback.add_feedback(db, thesis_id, current_user.id, body.content)
    return FeedbackCreated(
        message="Feedback submitted successfully",
        feedback=Feedback.model_validate(feedback),
    )


@router.get("/{thesis_id}/feedbacks", response_model=List[Feedback])
def list_feedbacks(
    thesis_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [Feedback.model_validate(f) for f in crud_feedback.get_feedbacks(db, thesis_id)]
