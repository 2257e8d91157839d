"""
Bootstrap data created on startup.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateEmailError
from ..models.label import Label
from ..models.task_status import TaskStatus
from ..models.user import UserTypeEnum
from .users import create_user

logger = logging.getLogger(__name__)

DEFAULT_STATUSES = {
    "draft": "Draft",
    "to_review": "To review",
    "to_be_fixed": "To be fixed",
    "to_publish": "To publish",
    "published": "Published",
}

DEFAULT_LABELS = ("feature", "bug")


def seed_defaults(db: Session, admin_email: str = "", admin_password: str = "") -> None:
    """Idempotently create the default statuses, labels and admin account."""
    # A default is skipped when either its name or its slug is already taken
    taken = set()
    for name, slug in db.query(TaskStatus.name, TaskStatus.slug):
        taken.update((name, slug))
    for slug, name in DEFAULT_STATUSES.items():
        if slug not in taken and name not in taken:
            db.add(TaskStatus(name=name, slug=slug))

    existing_labels = {name for (name,) in db.query(Label.name)}
    for name in DEFAULT_LABELS:
        if name not in existing_labels:
            db.add(Label(name=name))
    try:
        db.commit()
    except IntegrityError as e:
        # Another instance seeded concurrently
        db.rollback()
        logger.warning(f"Skipped seeding default statuses and labels: {e.orig}")

    if admin_email and admin_password:
        try:
            create_user(
                db,
                first_name="Admin",
                last_name="Admin",
                email=admin_email,
                password=admin_password,
                user_type=UserTypeEnum.admin,
            )
            logger.info(f"Created administrator account {admin_email}")
        except DuplicateEmailError:
            logger.debug(f"Administrator account {admin_email} already exists")

    logger.info("Default statuses and labels are in place")
