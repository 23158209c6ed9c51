from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.schemas.feedback import Feedback
from app.schemas.user import AuthorRef


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class SubtaskCreate(CamelModel):
    week: int
    description: str


class Subtask(CamelModel):
    id: int
    week: int
    description: str
    file_name: Optional[str] = None
    submitted: bool = False


class SubtaskSummary(CamelModel):
    id: int
    week: int
    description: str


class ThesisCreate(CamelModel):
    title: str
    description: Optional[str] = None
    request_due_date: date
    thesis_due_date: date
    subtasks: List[SubtaskCreate] = Field(default_factory=list)


class DueDatesUpdate(CamelModel):
    request_due_date: Optional[date] = None
    thesis_due_date: Optional[date] = None


class ThesisRequest(CamelModel):
    thesis_id: int


class ThesisApprove(CamelModel):
    thesis_id: int
    student_id: int


class Thesis(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    request_due_date: date
    thesis_due_date: date
    added_by: int
    requested_by: Optional[int] = None
    approved: bool
    submitted: bool
    file_name: Optional[str] = None
    last_update: Optional[datetime] = None


class ThesisWithSubtasks(Thesis):
    subtasks: List[Subtask] = Field(default_factory=list)


class TeacherThesisView(Thesis):
    student: Optional[AuthorRef] = None
    subtasks: List[SubtaskSummary] = Field(default_factory=list)


class StudentThesis(Thesis):
    feedbacks: List[Feedback] = Field(default_factory=list)
    subtasks: List[Subtask] = Field(default_factory=list)


class ThesisDetails(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    request_due_date: date
    thesis_due_date: date
    student_id: Optional[int] = None
    student_name: Optional[str] = None
    approved: bool
    submitted: bool
    file_name: Optional[str] = None
    last_update: Optional[datetime] = None
    subtasks: List[Subtask] = Field(default_factory=list)


class ApprovalRequest(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    student_name: str
    approved: bool
    requested_by: Optional[int] = None


class ThesisResponse(BaseModel):
    message: str
    thesis: ThesisWithSubtasks


class ThesisUpdateResponse(BaseModel):
    message: str
    thesis: Thesis


class UploadResponse(CamelModel):
    message: str
    file_link: str


class SubtaskUploadResponse(BaseModel):
    message: str
    subtask: Subtask
