from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import convert_datetime_to_utc


class LabelCreate(BaseModel):
    name: str = Field(..., max_length=100, description="Unique label name")


class LabelUpdate(LabelCreate):
    pass


class LabelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value):
        return convert_datetime_to_utc(value)
