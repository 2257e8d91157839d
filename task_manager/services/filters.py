"""
Task query composition.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Query

from ..models.label import Label
from ..models.task import Task
from ..models.task_status import TaskStatus


@dataclass
class TaskFilter:
    """Conjunction of optional predicates; ``None`` means unconstrained."""

    assignee_id: Optional[int] = None
    status_id: Optional[int] = None
    status_slug: Optional[str] = None
    label_id: Optional[int] = None
    title_cont: Optional[str] = None

    def apply(self, query: Query) -> Query:
        if self.assignee_id is not None:
            query = query.filter(Task.assignee_id == self.assignee_id)

        if self.status_id is not None:
            query = query.filter(Task.task_status_id == self.status_id)

        if self.status_slug is not None:
            query = query.filter(Task.task_status.has(TaskStatus.slug == self.status_slug))

        if self.label_id is not None:
            query = query.filter(Task.labels.any(Label.id == self.label_id))

        if self.title_cont:
            query = query.filter(Task.title.icontains(self.title_cont, autoescape=True))

        return query
