from datetime import datetime, timezone
from typing import Annotated

from pydantic import Field


def convert_datetime_to_utc(dt) -> datetime:
    """Convert datetime to UTC timezone-aware datetime"""
    if dt is None:
        return None

    if isinstance(dt, datetime):
        if dt.tzinfo is None:
            # Naive datetime, assume UTC
            return dt.replace(tzinfo=timezone.utc)
        else:
            # Already timezone-aware, convert to UTC
            return dt.astimezone(timezone.utc)

    return dt


# Largest value a signed 64-bit INTEGER column holds
MAX_DB_ID = 2 ** 63 - 1

DbId = Annotated[int, Field(ge=1, le=MAX_DB_ID)]
