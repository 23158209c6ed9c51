import logging
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ValidationError
from app.crud.thesis import get_thesis
from app.db.models.feedback import Feedback

logger = logging.getLogger(__name__)


def add_feedback(db: Session, thesis_id: int, author_id: int, content: Optional[str]) -> Feedback:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Feedback content is required")
    get_thesis(db, thesis_id)

    feedback = Feedback(content=content, thesis_id=thesis_id, user_id=author_id)
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    logger.info(f"Feedback {feedback.id} added to thesis {thesis_id} by user {author_id}")
    return feedback


def get_feedbacks(db: Session, thesis_id: int):
    # Insertion order
    return (
        db.query(Feedback)
        .options(selectinload(Feedback.author))
        .filter(Feedback.thesis_id == thesis_id)
        .order_by(Feedback.created_at, Feedback.id)
        .all()
    )
