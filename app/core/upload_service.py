# app/core/upload_service.py
"""
Stored thesis and subtask files.

Each thesis/subtask has at most one stored file, named deterministically so a
re-upload replaces the previous one. Incoming bytes go to a staging file
first; the database row is committed, and only then is the staging file
renamed into place. If the rename fails the row is restored to its previous
values.
"""
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import InternalError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "application/pdf": ".pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}

CHUNK_SIZE = 1024 * 1024


def upload_root() -> Path:
    return Path(settings.UPLOAD_DIR)


def thesis_dir() -> Path:
    return upload_root() / "theses"


def subtask_dir() -> Path:
    return upload_root() / "subtasks"


def staging_dir() -> Path:
    return upload_root() / ".staging"


def ensure_dirs() -> None:
    for directory in (thesis_dir(), subtask_dir(), staging_dir()):
        directory.mkdir(parents=True, exist_ok=True)


def thesis_file_name(user_id: int, thesis_id: int, extension: str) -> str:
    return f"thesis_{user_id}_{thesis_id}{extension}"


def subtask_file_name(subtask_id: int, extension: str) -> str:
    return f"subtask_{subtask_id}{extension}"


def validate_upload(file: Optional[UploadFile]) -> str:
    """Return the stored extension for ``file`` or raise ValidationError."""
    if file is None or not file.filename:
        raise ValidationError("A file is required")
    extension = ALLOWED_CONTENT_TYPES.get(file.content_type)
    if extension is None:
        logger.warning(f"Rejected upload {file.filename!r} with type {file.content_type!r}")
        raise ValidationError("Only .pdf and .docx files are allowed")
    return extension


def stage_upload(file: UploadFile) -> Path:
    """Copy the request body to a private staging file and return its path."""
    limit = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    staging_dir().mkdir(parents=True, exist_ok=True)
    staged = staging_dir() / uuid.uuid4().hex

    written = 0
    try:
        with open(staged, "wb") as out:
            while True:
                chunk = file.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > limit:
                    raise ValidationError(f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB} MB limit")
                out.write(chunk)
    except ValidationError:
        discard(staged)
        raise
    except OSError:
        discard(staged)
        logger.exception(f"Could not stage upload {file.filename!r}")
        raise InternalError("Failed to store uploaded file")

    if written == 0:
        discard(staged)
        raise ValidationError("Uploaded file is empty")
    return staged


def discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.exception(f"Could not remove {path}")


def remove_stored(directory: Path, file_name: Optional[str]) -> None:
    if file_name:
        discard(directory / file_name)


def promote(staged: Path, directory: Path, file_name: str, previous_name: Optional[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / file_name
    # Atomic, and replaces a file that already has the same name
    os.replace(staged, target)
    if previous_name and previous_name != file_name:
        remove_stored(directory, previous_name)
    return target


def commit_upload(
    db: Session,
    record,
    changes: dict,
    staged: Path,
    directory: Path,
    file_name: str,
):
    """Apply ``changes`` to ``record``, commit, then move ``staged`` into place.

    The previous stored file (``record.file_name`` before the change) is
    removed once the new file is in place.
    """
    previous_name = record.file_name
    original = {key: getattr(record, key) for key in changes}

    for key, value in changes.items():
        setattr(record, key, value)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard(staged)
        logger.exception(f"Database update failed for upload {file_name}")
        raise InternalError("Failed to save upload")

    try:
        promote(staged, directory, file_name, previous_name)
    except OSError:
        logger.exception(f"Could not move upload into place as {file_name}")
        discard(staged)
        _restore(db, record, original)
        raise InternalError("Failed to store uploaded file")

    db.refresh(record)
    logger.info(f"Stored {directory.name}/{file_name}")
    return record


def _restore(db: Session, record, original: dict) -> None:
    for key, value in original.items():
        setattr(record, key, value)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Compensating update failed; row {record!r} may reference a missing file")
