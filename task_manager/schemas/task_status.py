from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import convert_datetime_to_utc


class TaskStatusCreate(BaseModel):
    name: str = Field(..., max_length=100, description="Unique status name")
    slug: Optional[str] = Field(None, max_length=100, description="Unique slug, derived from the name when omitted")


class TaskStatusUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)


class TaskStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value):
        return convert_datetime_to_utc(value)
