from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..core.database import Base
from .task import task_labels


class Label(Base):
    """Free-form tag attachable to many tasks"""
    __tablename__ = "labels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Deleting a label drops its task_labels rows, never the tasks
    tasks = relationship("Task", secondary=task_labels, back_populates="labels")

    def __repr__(self):
        return f"<Label(id={self.id}, name='{self.name}')>"
