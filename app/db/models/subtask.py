# app/db/models/subtask.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from app.db.base import Base


class Subtask(Base):
    __tablename__ = "subtasks"

    id = Column(Integer, primary_key=True, index=True)
    thesis_id = Column(Integer, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True)
    week = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    file_name = Column(String, nullable=True)
    submitted = Column(Boolean, default=False, nullable=False)

    thesis = relationship("Thesis", back_populates="subtasks")
