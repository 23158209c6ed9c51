# app/db/models/thesis.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Date, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class Thesis(Base):
    __tablename__ = "theses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    request_due_date = Column(Date, nullable=False)
    thesis_due_date = Column(Date, nullable=False)

    added_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    # null -> Unassigned; set + approved=False -> Requested
    requested_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    approved = Column(Boolean, default=False, nullable=False)

    submitted = Column(Boolean, default=False, nullable=False)
    file_name = Column(String, nullable=True)
    last_update = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="authored_theses", foreign_keys=[added_by])
    student = relationship("User", back_populates="requested_theses", foreign_keys=[requested_by])
    subtasks = relationship(
        "Subtask",
        back_populates="thesis",
        cascade="all, delete-orphan",
        order_by="[Subtask.week, Subtask.id]",
    )
    feedbacks = relationship(
        "Feedback",
        back_populates="thesis",
        cascade="all, delete-orphan",
        order_by="[Feedback.created_at, Feedback.id]",
    )

    @property
    def student_name(self):
        return self.student.username if self.student else None
