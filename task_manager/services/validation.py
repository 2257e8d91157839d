"""
Input checks run before any store mutation.

Each function raises ``ValidationError`` carrying every offending field,
so a client sees all problems with one request.
"""
import re
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from ..core.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 3

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


class FieldErrors:
    """Collects field problems and raises them together."""

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def add(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    def require_text(self, field: str, value: Optional[str]) -> None:
        if value is None or not value.strip():
            self.add(field, "must not be blank")

    def raise_if_any(self) -> None:
        if self.errors:
            fields = ", ".join(error["field"] for error in self.errors)
            raise ValidationError(f"Invalid fields: {fields}", self.errors)


def normalize_email(errors: FieldErrors, email: Optional[str]) -> Optional[str]:
    """Emails are stored lower-cased, so lookups are case-insensitive."""
    if email is None or not email.strip():
        errors.add("email", "must not be blank")
        return None
    try:
        return validate_email(email.strip(), check_deliverability=False).normalized.lower()
    except EmailNotValidError as e:
        errors.add("email", str(e))
        return None


def canonical_email(email: Optional[str]) -> str:
    """Lookup key for an email; malformed input is only trimmed and lower-cased."""
    normalized = normalize_email(FieldErrors(), email)
    return normalized if normalized is not None else (email or "").strip().lower()


def check_password(errors: FieldErrors, password: Optional[str]) -> None:
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        errors.add("password", f"must be at least {MIN_PASSWORD_LENGTH} characters")


def validate_new_user(first_name: str, last_name: str, email: str, password: str) -> str:
    """Returns the normalized email."""
    errors = FieldErrors()
    errors.require_text("first_name", first_name)
    errors.require_text("last_name", last_name)
    normalized = normalize_email(errors, email)
    check_password(errors, password)
    errors.raise_if_any()
    return normalized


def validate_user_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    errors = FieldErrors()
    cleaned = dict(changes)
    for field in ("first_name", "last_name"):
        if field in changes:
            errors.require_text(field, changes[field])
    if "email" in changes:
        cleaned["email"] = normalize_email(errors, changes["email"])
    if "password" in changes:
        check_password(errors, changes["password"])
    errors.raise_if_any()
    return cleaned


def validate_task_fields(changes: Dict[str, Any], creating: bool) -> None:
    """Title and status are mandatory on create and may not be cleared later."""
    errors = FieldErrors()
    if creating or "title" in changes:
        errors.require_text("title", changes.get("title"))
    if (creating or "status_id" in changes) and changes.get("status_id") is None:
        errors.add("status_id", "is required")
    index = changes.get("index")
    if index is not None and (isinstance(index, bool) or not isinstance(index, int)):
        errors.add("index", "must be an integer")
    errors.raise_if_any()


def validate_name(name: Optional[str]) -> str:
    errors = FieldErrors()
    errors.require_text("name", name)
    errors.raise_if_any()
    return name.strip()


def slugify(name: str) -> str:
    return _SLUG_SEPARATORS.sub("_", name.lower()).strip("_")


def validate_slug(slug: Optional[str], name: str) -> str:
    """Derives the slug from the name when none is supplied."""
    value = slugify(slug if slug is not None else name)
    if not value:
        errors = FieldErrors()
        errors.add("slug", "must contain letters or digits")
        errors.raise_if_any()
    return value
