"""
Task lifecycle: create, partial update, delete, lookup and filtered listing.

References (status, assignee, labels) are resolved before the session is
touched, so a rejected request never leaves a half-applied task behind.
A task and its label associations are always committed together.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, require_principal
from ..core.exceptions import ConflictError, InvalidReferenceError, NotFoundError
from ..core.security import utc_now
from ..models.label import Label
from ..models.task import Task
from ..models.task_status import TaskStatus
from ..models.user import User
from .filters import TaskFilter
from .validation import validate_task_fields

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "index", "status_id", "assignee_id", "label_ids")


def _resolve_status(db: Session, status_id: int) -> TaskStatus:
    task_status = db.get(TaskStatus, status_id)
    if task_status is None:
        raise InvalidReferenceError("status_id", status_id)
    return task_status


def _resolve_assignee(db: Session, assignee_id: Optional[int]) -> Optional[User]:
    if assignee_id is None:
        return None
    assignee = db.get(User, assignee_id)
    if assignee is None:
        raise InvalidReferenceError("assignee_id", assignee_id)
    return assignee


def _resolve_labels(db: Session, label_ids: Optional[Iterable[int]]) -> List[Label]:
    wanted = sorted(set(label_ids or []))
    if not wanted:
        return []
    labels = db.query(Label).filter(Label.id.in_(wanted)).order_by(Label.id).all()
    missing = sorted(set(wanted) - {label.id for label in labels})
    if missing:
        raise InvalidReferenceError("label_ids", missing)
    return labels


def _commit_task(db: Session, task: Task) -> Task:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Task write rejected by the store: {e.orig}")
        raise ConflictError("Task references changed while saving, please retry")
    db.refresh(task)
    return task


def create_task(
    db: Session,
    principal: Optional[CurrentUser],
    title: str,
    status_id: int,
    description: Optional[str] = None,
    assignee_id: Optional[int] = None,
    label_ids: Optional[Iterable[int]] = None,
    index: Optional[int] = None,
    clock: Callable[[], datetime] = utc_now,
) -> Task:
    require_principal(principal)
    validate_task_fields({"title": title, "status_id": status_id, "index": index}, creating=True)

    task_status = _resolve_status(db, status_id)
    assignee = _resolve_assignee(db, assignee_id)
    labels = _resolve_labels(db, label_ids)

    task = Task(
        title=title.strip(),
        description=description,
        index=index,
        task_status=task_status,
        assignee=assignee,
        labels=labels,
        created_at=clock(),
    )
    db.add(task)
    task = _commit_task(db, task)
    logger.info(f"Task {task.id} created by {principal}")
    return task


def get_task(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    return task


def list_tasks(
    db: Session,
    task_filter: Optional[TaskFilter] = None,
    skip: int = 0,
    limit: Optional[int] = None,
) -> Tuple[List[Task], int]:
    """Returns one page of matching tasks in id order and the total match count."""
    query = (task_filter or TaskFilter()).apply(db.query(Task))
    total = query.count()

    query = query.order_by(Task.id).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all(), total


def update_task(db: Session, principal: Optional[CurrentUser], task_id: int, changes: Dict[str, Any]) -> Task:
    """Partial update; only keys present in ``changes`` are applied."""
    require_principal(principal)
    task = get_task(db, task_id)

    changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
    validate_task_fields(changes, creating=False)

    # Resolve everything first; the task stays untouched if any lookup fails
    resolved: Dict[str, Any] = {}
    if "status_id" in changes:
        resolved["task_status"] = _resolve_status(db, changes["status_id"])
    if "assignee_id" in changes:
        resolved["assignee"] = _resolve_assignee(db, changes["assignee_id"])
    if "label_ids" in changes:
        resolved["labels"] = _resolve_labels(db, changes["label_ids"])
    if "title" in changes:
        resolved["title"] = changes["title"].strip()
    for field in ("description", "index"):
        if field in changes:
            resolved[field] = changes[field]

    for attr, value in resolved.items():
        setattr(task, attr, value)

    task = _commit_task(db, task)
    logger.info(f"Task {task.id} updated by {principal}: {sorted(changes)}")
    return task


def delete_task(db: Session, principal: Optional[CurrentUser], task_id: int) -> None:
    require_principal(principal)
    task = get_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info(f"Task {task_id} deleted by {principal}")
