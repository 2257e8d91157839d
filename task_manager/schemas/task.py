"""
Pydantic schemas for tasks.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import DbId, convert_datetime_to_utc


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., max_length=200, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    index: Optional[int] = Field(None, description="Informational ordering hint")
    status_id: DbId = Field(..., description="Task status ID")
    assignee_id: Optional[DbId] = Field(None, description="Assignee user ID")
    label_ids: List[DbId] = Field(default_factory=list, description="Label IDs")


class TaskUpdate(BaseModel):
    """Schema for updating a task; only the fields sent are applied"""
    title: Optional[str] = Field(None, max_length=200, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    index: Optional[int] = Field(None, description="Informational ordering hint")
    status_id: Optional[DbId] = Field(None, description="Task status ID")
    assignee_id: Optional[DbId] = Field(None, description="Assignee user ID, null to unassign")
    label_ids: Optional[List[DbId]] = Field(None, description="Replacement set of label IDs")


class TaskResponse(BaseModel):
    """Schema for task response"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Task ID")
    title: str
    description: Optional[str] = None
    index: Optional[int] = None
    status_id: int = Field(..., validation_alias="task_status_id", description="Task status ID")
    assignee_id: Optional[int] = None
    label_ids: List[int] = Field(default_factory=list)
    created_at: datetime = Field(..., description="Task creation timestamp")

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value):
        return convert_datetime_to_utc(value)


class TaskList(BaseModel):
    """Schema for paginated task list"""
    tasks: List[TaskResponse] = Field(..., description="List of tasks")
    total: int = Field(..., description="Total number of matching tasks")
    skip: int = Field(..., description="Number of tasks skipped")
    limit: int = Field(..., description="Page size requested")
    has_next: bool = Field(default=False, description="Whether there are more tasks")
