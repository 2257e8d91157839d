"""
Label registry.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, require_principal
from ..core.exceptions import DuplicateNameError, NotFoundError
from ..models.label import Label
from .validation import validate_name

logger = logging.getLogger(__name__)


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Label).filter(Label.name == name)
    if exclude_id is not None:
        query = query.filter(Label.id != exclude_id)
    if query.first():
        raise DuplicateNameError(f"Label already exists: {name}")


def _commit_label(db: Session, label: Label) -> Label:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateNameError(f"Label already exists: {label.name}")
    db.refresh(label)
    return label


def create_label(db: Session, principal: Optional[CurrentUser], name: str) -> Label:
    require_principal(principal)
    name = validate_name(name)
    _ensure_unique_name(db, name)

    label = Label(name=name)
    db.add(label)
    label = _commit_label(db, label)
    logger.info(f"Label {label.id} '{label.name}' created by {principal}")
    return label


def get_label(db: Session, label_id: int) -> Label:
    label = db.get(Label, label_id)
    if label is None:
        raise NotFoundError("Label", label_id)
    return label


def list_labels(db: Session) -> List[Label]:
    return db.query(Label).order_by(Label.id).all()


def update_label(db: Session, principal: Optional[CurrentUser], label_id: int, name: str) -> Label:
    require_principal(principal)
    label = get_label(db, label_id)
    name = validate_name(name)
    _ensure_unique_name(db, name, exclude_id=label_id)

    label.name = name
    return _commit_label(db, label)


def delete_label(db: Session, principal: Optional[CurrentUser], label_id: int) -> None:
    """Removes the label from every task's label set; the tasks themselves stay."""
    require_principal(principal)
    label = get_label(db, label_id)
    detached = len(label.tasks)

    db.delete(label)
    db.commit()
    logger.info(f"Label {label_id} deleted by {principal}, detached from {detached} task(s)")
