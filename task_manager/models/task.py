from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from ..core.database import Base


task_labels = Table(
    "task_labels",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("label_id", Integer, ForeignKey("labels.id", ondelete="CASCADE"), primary_key=True),
)


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Informational ordering only, no uniqueness
    index = Column(Integer, nullable=True)

    task_status_id = Column(
        Integer,
        ForeignKey("task_statuses.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    assignee_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True,
        index=True
    )

    # Set from the injected clock at creation, never updated
    created_at = Column(DateTime(timezone=True), nullable=False)

    task_status = relationship("TaskStatus", back_populates="tasks")
    assignee = relationship("User", back_populates="assigned_tasks")
    labels = relationship(
        "Label",
        secondary=task_labels,
        back_populates="tasks",
        order_by="Label.id",
        lazy="selectin"
    )

    @property
    def label_ids(self) -> list:
        return [label.id for label in self.labels]

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', task_status_id={self.task_status_id})>"
