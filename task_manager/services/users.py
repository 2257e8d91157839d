"""
User registration, login and account management.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, require_user_access
from ..core.exceptions import ConflictError, DuplicateEmailError, NotFoundError, UnauthenticatedError
from ..core.security import get_password_hash, verify_password
from ..models.task import Task
from ..models.user import User, UserTypeEnum
from .validation import canonical_email, validate_new_user, validate_user_changes

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "email", "password")


def _find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def _assigned_task_count(db: Session, user_id: int) -> int:
    return db.query(Task).filter(Task.assignee_id == user_id).count()


def _commit_user(db: Session, user: User) -> User:
    """Commit, translating a lost uniqueness race into DuplicateEmailError."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Email already registered: {user.email}")
        raise DuplicateEmailError(f"Email already registered: {user.email}")
    db.refresh(user)
    return user


def create_user(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    user_type: UserTypeEnum = UserTypeEnum.normal,
) -> User:
    email = validate_new_user(first_name, last_name, email, password)
    if _find_by_email(db, email):
        raise DuplicateEmailError(f"Email already registered: {email}")

    user = User(
        email=email,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        hashed_password=get_password_hash(password),
        user_type=user_type,
    )
    db.add(user)
    user = _commit_user(db, user)
    logger.info(f"Registered user {user.id} ({user.email})")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = _find_by_email(db, canonical_email(email))
    if not user or not verify_password(password, user.hashed_password):
        raise UnauthenticatedError("Incorrect email or password")
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def update_user(db: Session, principal: Optional[CurrentUser], user_id: int, changes: Dict[str, Any]) -> User:
    """Partial update; only keys present in ``changes`` are applied."""
    require_user_access(principal, user_id)
    user = get_user(db, user_id)

    changes = validate_user_changes({k: v for k, v in changes.items() if k in UPDATABLE_FIELDS})
    if "email" in changes and changes["email"] != user.email:
        if _find_by_email(db, changes["email"]):
            raise DuplicateEmailError(f"Email already registered: {changes['email']}")

    for field, value in changes.items():
        if field == "password":
            user.hashed_password = get_password_hash(value)
        elif field in ("first_name", "last_name"):
            setattr(user, field, value.strip())
        else:
            setattr(user, field, value)

    user = _commit_user(db, user)
    logger.info(f"User {user.id} updated by {principal}")
    return user


def delete_user(db: Session, principal: Optional[CurrentUser], user_id: int) -> None:
    require_user_access(principal, user_id)
    user = get_user(db, user_id)

    assigned = _assigned_task_count(db, user_id)
    if assigned:
        raise ConflictError(f"User {user_id} is assignee of {assigned} task(s)")

    db.delete(user)
    try:
        db.commit()
    except IntegrityError:
        # A task was assigned to this user after the check above
        db.rollback()
        raise ConflictError(f"User {user_id} is assigned to tasks")
    logger.info(f"User {user_id} deleted by {principal}")
