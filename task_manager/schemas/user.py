from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .common import convert_datetime_to_utc


class UserCreate(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    """Every field is optional; omitted fields keep their stored value"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    first_name: str
    last_name: str
    user_type: str
    created_at: datetime

    @field_validator("user_type", mode="before")
    @classmethod
    def _enum_value(cls, value):
        return getattr(value, "value", value)

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value):
        return convert_datetime_to_utc(value)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
