"""Database models for Task Manager."""
from .user import User, UserTypeEnum
from .task_status import TaskStatus
from .task import Task, task_labels
from .label import Label

__all__ = ["User", "UserTypeEnum", "TaskStatus", "Task", "task_labels", "Label"]
