"""
Authentication module for Task Manager.
Resolves the bearer token of a request into the acting principal.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from .database import get_db
from .exceptions import ForbiddenError, UnauthenticatedError
from .security import decode_token
from ..models.user import User, UserTypeEnum

# Configure logging
logger = logging.getLogger(__name__)

# Security scheme; missing credentials are reported as 401, not 403
security = HTTPBearer(
    scheme_name="Bearer Token",
    description="JWT Bearer token issued by POST /login",
    auto_error=False
)


class CurrentUser:
    """Represents the current authenticated user."""

    def __init__(self, user_id: int, email: str, user_type: UserTypeEnum = UserTypeEnum.normal):
        self.user_id = user_id
        self.email = email
        self.user_type = user_type

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserTypeEnum.admin

    def can_manage_user(self, user_id: int) -> bool:
        return self.is_admin or self.user_id == user_id

    def __str__(self):
        return f"User(id={self.user_id}, email={self.email})"

    def __repr__(self):
        return self.__str__()

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        """Create CurrentUser from a stored user."""
        return cls(user_id=user.id, email=user.email, user_type=user.user_type)


def require_principal(principal: Optional[CurrentUser]) -> CurrentUser:
    if principal is None:
        raise UnauthenticatedError("Authentication required")
    return principal


def require_user_access(principal: Optional[CurrentUser], user_id: int) -> CurrentUser:
    """Only the account owner or an administrator may change a user record."""
    principal = require_principal(principal)
    if not principal.can_manage_user(user_id):
        logger.warning(f"{principal} denied access to user {user_id}")
        raise ForbiddenError("You may only modify your own account")
    return principal


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> CurrentUser:
    """
    Dependency to get current authenticated user.

    Args:
        credentials: HTTP Bearer credentials from request
        db: Database session

    Returns:
        CurrentUser: Current authenticated user

    Raises:
        UnauthenticatedError: If the token is missing, invalid, or its user is gone
    """
    if credentials is None:
        raise UnauthenticatedError("Not authenticated")

    payload = decode_token(credentials.credentials)
    email = payload["sub"]

    user = db.query(User).filter(User.email == email).first()
    if not user:
        logger.warning(f"Token subject no longer exists: {email}")
        raise UnauthenticatedError("Could not validate user")

    current_user = CurrentUser.from_user(user)
    logger.debug(f"Authenticated user: {current_user}")
    return current_user
