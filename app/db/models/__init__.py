from app.db.base import Base
from app.db.models.user import User, UserRole
from app.db.models.thesis import Thesis
from app.db.models.subtask import Subtask
from app.db.models.feedback import Feedback

__all__ = ["Base", "User", "UserRole", "Thesis", "Subtask", "Feedback"]
