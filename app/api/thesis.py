# app/api/thesis.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_student, require_teacher
from app.crud import thesis as crud_thesis
from app.db.models.user import User
from app.schemas.thesis import (
    ApprovalRequest,
    DueDatesUpdate,
    StudentThesis,
    TeacherThesisView,
    Thesis,
    ThesisApprove,
    ThesisCreate,
    ThesisDetails,
    ThesisRequest,
    ThesisResponse,
    ThesisUpdateResponse,
    ThesisWithSubtasks,
    Subtask,
)
from app.schemas.user import MessageResponse

router = APIRouter()


# Teacher only: create a title together with its weekly subtasks
@router.post("/add", response_model=ThesisResponse, status_code=status.HTTP_201_CREATED)
def add_thesis(
    thesis_in: ThesisCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    thesis = crud_thesis.create_thesis(db, thesis_in, teacher_id=current_user.id)
    return ThesisResponse(
        message="Thesis title added successfully",
        thesis=ThesisWithSubtasks.model_validate(thesis),
    )


@router.get("/view", response_model=List[TeacherThesisView])
def view_theses(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    return [TeacherThesisView.model_validate(t) for t in crud_thesis.get_all_theses(db)]


@router.get("/unassigned", response_model=List[Thesis])
def unassigned_theses(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
):
    return [Thesis.model_validate(t) for t in crud_thesis.get_unassigned_theses(db)]


@router.post("/request", response_model=ThesisUpdateResponse)
def request_thesis(
    body: ThesisRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
):
    thesis = crud_thesis.request_thesis(db, body.thesis_id, current_user.id)
    return ThesisUpdateResponse(
        message="Thesis requested successfully",
        thesis=Thesis.model_validate(thesis),
    )


@router.get("/requests-for-approval", response_model=List[ApprovalRequest])
def requests_for_approval(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    return [
        ApprovalRequest(
            id=t.id,
            title=t.title,
            description=t.description,
            student_name=t.student_name or "Not assigned",
            approved=t.approved,
            requested_by=t.requested_by,
        )
        for t in crud_thesis.get_pending_requests(db)
    ]


@router.post("/approve", response_model=ThesisUpdateResponse)
def approve_thesis(
    body: ThesisApprove,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    thesis = crud_thesis.approve_thesis(db, body.thesis_id, body.student_id)
    return ThesisUpdateResponse(
        message="Thesis approved successfully",
        thesis=Thesis.model_validate(thesis),
    )


@router.put("/{thesis_id}/due-dates", response_model=ThesisUpdateResponse)
def update_due_dates(
    thesis_id: int,
    body: DueDatesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    thesis = crud_thesis.update_due_dates(db, thesis_id, body.request_due_date, body.thesis_due_date)
    return ThesisUpdateResponse(
        message="Due dates updated successfully",
        thesis=Thesis.model_validate(thesis),
    )


@router.delete("/{thesis_id}", response_model=MessageResponse)
def delete_thesis(
    thesis_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    crud_thesis.delete_thesis(db, thesis_id)
    return {"message": "Thesis deleted successfully"}


# Any authenticated user: theses assigned to the caller, with feedback and subtasks
@router.get("/student", response_model=List[StudentThesis])
def student_theses(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [StudentThesis.model_validate(t) for t in crud_thesis.get_theses_for_student(db, current_user.id)]


@router.get("/{thesis_id}/details", response_model=ThesisDetails)
def thesis_details(
    thesis_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    thesis = crud_thesis.get_thesis(db, thesis_id)
    return ThesisDetails(
        id=thesis.id,
        title=thesis.title,
        description=thesis.description,
        request_due_date=thesis.request_due_date,
        thesis_due_date=thesis.thesis_due_date,
        student_id=thesis.requested_by,
        student_name=thesis.student_name,
        approved=thesis.approved,
        submitted=thesis.submitted,
        file_name=thesis.file_name,
        last_update=thesis.last_update,
        subtasks=[Subtask.model_validate(s) for s in thesis.subtasks],
    )
