"""
Task status registry.
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, require_principal
from ..core.exceptions import ConflictError, DuplicateNameError, NotFoundError
from ..models.task import Task
from ..models.task_status import TaskStatus
from .validation import validate_name, validate_slug

logger = logging.getLogger(__name__)


def _ensure_unique(db: Session, name: str, slug: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(TaskStatus).filter(or_(TaskStatus.name == name, TaskStatus.slug == slug))
    if exclude_id is not None:
        query = query.filter(TaskStatus.id != exclude_id)
    existing = query.first()
    if existing:
        clash = "name" if existing.name == name else "slug"
        raise DuplicateNameError(f"Task status with this {clash} already exists: {existing.name} ({existing.slug})")


def _commit_status(db: Session, task_status: TaskStatus) -> TaskStatus:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateNameError(f"Task status already exists: {task_status.name}")
    db.refresh(task_status)
    return task_status


def create_task_status(
    db: Session,
    principal: Optional[CurrentUser],
    name: str,
    slug: Optional[str] = None,
) -> TaskStatus:
    require_principal(principal)
    name = validate_name(name)
    slug = validate_slug(slug, name)
    _ensure_unique(db, name, slug)

    task_status = TaskStatus(name=name, slug=slug)
    db.add(task_status)
    task_status = _commit_status(db, task_status)
    logger.info(f"Task status {task_status.id} '{task_status.slug}' created by {principal}")
    return task_status


def get_task_status(db: Session, status_id: int) -> TaskStatus:
    task_status = db.get(TaskStatus, status_id)
    if task_status is None:
        raise NotFoundError("TaskStatus", status_id)
    return task_status


def list_task_statuses(db: Session) -> List[TaskStatus]:
    return db.query(TaskStatus).order_by(TaskStatus.id).all()


def update_task_status(
    db: Session,
    principal: Optional[CurrentUser],
    status_id: int,
    name: Optional[str] = None,
    slug: Optional[str] = None,
) -> TaskStatus:
    """Renames a status; the slug is kept unless a new one is given."""
    require_principal(principal)
    task_status = get_task_status(db, status_id)
    name = validate_name(name) if name is not None else task_status.name
    slug = validate_slug(slug, name) if slug is not None else task_status.slug
    _ensure_unique(db, name, slug, exclude_id=status_id)

    task_status.name = name
    task_status.slug = slug
    return _commit_status(db, task_status)


def delete_task_status(db: Session, principal: Optional[CurrentUser], status_id: int) -> None:
    require_principal(principal)
    task_status = get_task_status(db, status_id)

    in_use = db.query(Task).filter(Task.task_status_id == status_id).count()
    if in_use:
        logger.warning(f"Refusing to delete task status {status_id}: used by {in_use} task(s)")
        raise ConflictError(f"Task status '{task_status.slug}' is used by {in_use} task(s)")

    db.delete(task_status)
    try:
        db.commit()
    except IntegrityError:
        # A task picked up this status after the check above
        db.rollback()
        raise ConflictError(f"Task status '{task_status.slug}' is in use")
    logger.info(f"Task status {status_id} deleted by {principal}")
