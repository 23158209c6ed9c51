# app/api/uploads.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_student
from app.core import upload_service
from app.core.exceptions import ValidationError
from app.crud import thesis as crud_thesis
from app.db.models.user import User
from app.schemas.thesis import Subtask, SubtaskUploadResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()

THESIS_FILES_PREFIX = "/thesis/files"
SUBTASK_FILES_PREFIX = "/subtask/files"


@router.post("/upload-thesis", response_model=UploadResponse)
def upload_thesis(
    file: Optional[UploadFile] = File(default=None),
    thesis_id: Optional[int] = Form(default=None, alias="thesisId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
):
    if thesis_id is None:
        raise ValidationError("Thesis ID is required")
    extension = upload_service.validate_upload(file)
    logger.info(f"Upload thesis request: user={current_user.id} thesis={thesis_id}")

    thesis = crud_thesis.get_submittable_thesis(db, thesis_id, current_user.id)
    staged = upload_service.stage_upload(file)
    thesis = crud_thesis.submit_thesis_file(db, thesis, current_user.id, staged, extension)

    return UploadResponse(
        message="Thesis uploaded successfully",
        file_link=f"{THESIS_FILES_PREFIX}/{thesis.file_name}",
    )


@router.get("/{thesis_id}/subtasks", response_model=List[Subtask])
def list_subtasks(
    thesis_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [Subtask.model_validate(s) for s in crud_thesis.get_subtasks(db, thesis_id)]


@router.post("/subtask/{subtask_id}/upload", response_model=SubtaskUploadResponse)
def upload_subtask(
    subtask_id: int,
    file: Optional[UploadFile] = File(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
):
    extension = upload_service.validate_upload(file)
    subtask = crud_thesis.get_student_subtask(db, subtask_id, current_user.id)
    staged = upload_service.stage_upload(file)
    subtask = crud_thesis.submit_subtask_file(db, subtask, staged, extension)

    return SubtaskUploadResponse(
        message="File uploaded successfully",
        subtask=Subtask.model_validate(subtask),
    )
