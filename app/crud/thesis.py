import logging
from pathlib import Path

from sqlalchemy.orm import Session, selectinload

from app.core import upload_service
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.base import utcnow
from app.db.models.subtask import Subtask
from app.db.models.thesis import Thesis
from app.db.models.user import User, UserRole

logger = logging.getLogger(__name__)


def _check_due_dates(request_due_date, thesis_due_date):
    if request_due_date is None or thesis_due_date is None:
        raise ValidationError("Both request due date and thesis due date are required")
    if request_due_date > thesis_due_date:
        raise ValidationError("Request due date must not be after the thesis due date")


def create_thesis(db: Session, thesis_in, teacher_id: int) -> Thesis:
    title = (thesis_in.title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    _check_due_dates(thesis_in.request_due_date, thesis_in.thesis_due_date)

    thesis = Thesis(
        title=title,
        description=thesis_in.description,
        request_due_date=thesis_in.request_due_date,
        thesis_due_date=thesis_in.thesis_due_date,
        added_by=teacher_id,
        subtasks=[
            Subtask(week=subtask.week, description=subtask.description)
            for subtask in thesis_in.subtasks
        ],
    )
    db.add(thesis)
    db.commit()
    db.refresh(thesis)
    logger.info(f"Thesis {thesis.id} '{thesis.title}' added by teacher {teacher_id}")
    return thesis


def get_thesis(db: Session, thesis_id: int) -> Thesis:
    thesis = db.query(Thesis).filter(Thesis.id == thesis_id).first()
    if not thesis:
        raise NotFoundError("Thesis not found")
    return thesis


def get_unassigned_theses(db: Session):
    return db.query(Thesis).filter(Thesis.requested_by.is_(None)).order_by(Thesis.id).all()


def get_theses_for_student(db: Session, student_id: int):
    return (
        db.query(Thesis)
        .options(selectinload(Thesis.feedbacks), selectinload(Thesis.subtasks))
        .filter(Thesis.requested_by == student_id)
        .order_by(Thesis.id)
        .all()
    )


def get_all_theses(db: Session):
    return (
        db.query(Thesis)
        .options(selectinload(Thesis.student), selectinload(Thesis.subtasks))
        .order_by(Thesis.id)
        .all()
    )


def get_pending_requests(db: Session):
    return (
        db.query(Thesis)
        .options(selectinload(Thesis.student))
        .filter(Thesis.requested_by.isnot(None), Thesis.approved.is_(False))
        .order_by(Thesis.id)
        .all()
    )


def request_thesis(db: Session, thesis_id: int, student_id: int) -> Thesis:
    # Compare-and-swap: only one student can claim an unassigned thesis
    claimed = (
        db.query(Thesis)
        .filter(Thesis.id == thesis_id, Thesis.requested_by.is_(None))
        .update({Thesis.requested_by: student_id}, synchronize_session=False)
    )
    db.commit()

    if not claimed:
        thesis = get_thesis(db, thesis_id)
        logger.warning(
            f"Student {student_id} requested thesis {thesis_id}, already held by {thesis.requested_by}"
        )
        raise ConflictError("Thesis has already been requested")

    thesis = get_thesis(db, thesis_id)
    db.refresh(thesis)
    logger.info(f"Thesis {thesis_id} requested by student {student_id}")
    return thesis


def approve_thesis(db: Session, thesis_id: int, student_id: int) -> Thesis:
    thesis = get_thesis(db, thesis_id)

    student = db.query(User).filter(User.id == student_id, User.role == UserRole.STUDENT).first()
    if not student:
        raise NotFoundError("Student not found")

    if thesis.requested_by is None:
        raise ConflictError("Thesis has not been requested yet")
    if thesis.approved:
        logger.warning(f"Thesis {thesis_id} is already approved for student {thesis.requested_by}")
        raise ConflictError("Thesis has already been approved")

    thesis.requested_by = student.id
    thesis.approved = True
    db.commit()
    db.refresh(thesis)
    logger.info(f"Thesis {thesis_id} approved for student {student_id}")
    return thesis


def update_due_dates(db: Session, thesis_id: int, request_due_date, thesis_due_date) -> Thesis:
    _check_due_dates(request_due_date, thesis_due_date)
    thesis = get_thesis(db, thesis_id)

    thesis.request_due_date = request_due_date
    thesis.thesis_due_date = thesis_due_date
    db.commit()
    db.refresh(thesis)
    logger.info(f"Thesis {thesis_id} due dates set to {request_due_date} / {thesis_due_date}")
    return thesis


def delete_thesis(db: Session, thesis_id: int) -> None:
    thesis = get_thesis(db, thesis_id)
    thesis_file = thesis.file_name
    subtask_files = [subtask.file_name for subtask in thesis.subtasks if subtask.file_name]

    # Subtasks and feedbacks go with it (cascade="all, delete-orphan")
    db.delete(thesis)
    db.commit()

    upload_service.remove_stored(upload_service.thesis_dir(), thesis_file)
    for file_name in subtask_files:
        upload_service.remove_stored(upload_service.subtask_dir(), file_name)
    logger.info(f"Thesis {thesis_id} deleted")


def get_submittable_thesis(db: Session, thesis_id: int, student_id: int) -> Thesis:
    thesis = db.query(Thesis).filter(
        Thesis.id == thesis_id,
        Thesis.requested_by == student_id,
    ).first()
    if not thesis:
        raise NotFoundError("Thesis not found or not assigned to the user")
    if not thesis.approved:
        raise ConflictError("Thesis has not been approved yet")
    return thesis


def submit_thesis_file(db: Session, thesis: Thesis, student_id: int, staged: Path, extension: str) -> Thesis:
    file_name = upload_service.thesis_file_name(student_id, thesis.id, extension)
    upload_service.commit_upload(
        db,
        thesis,
        {"file_name": file_name, "submitted": True, "last_update": utcnow()},
        staged,
        upload_service.thesis_dir(),
        file_name,
    )
    logger.info(f"Thesis {thesis.id} submitted by student {student_id} as {file_name}")
    return thesis


def get_subtasks(db: Session, thesis_id: int):
    get_thesis(db, thesis_id)
    return (
        db.query(Subtask)
        .filter(Subtask.thesis_id == thesis_id)
        .order_by(Subtask.week, Subtask.id)
        .all()
    )


def get_student_subtask(db: Session, subtask_id: int, student_id: int) -> Subtask:
    subtask = (
        db.query(Subtask)
        .join(Thesis, Subtask.thesis_id == Thesis.id)
        .filter(Subtask.id == subtask_id, Thesis.requested_by == student_id)
        .first()
    )
    if not subtask:
        raise NotFoundError("Subtask not found or not assigned to the user")
    return subtask


def submit_subtask_file(db: Session, subtask: Subtask, staged: Path, extension: str) -> Subtask:
    file_name = upload_service.subtask_file_name(subtask.id, extension)
    upload_service.commit_upload(
        db,
        subtask,
        {"file_name": file_name, "submitted": True},
        staged,
        upload_service.subtask_dir(),
        file_name,
    )
    logger.info(f"Subtask {subtask.id} of thesis {subtask.thesis_id} uploaded as {file_name}")
    return subtask
