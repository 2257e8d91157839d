import enum
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..core.database import Base


class UserTypeEnum(enum.Enum):
    admin = "admin"
    normal = "normal"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    hashed_password = Column(String, nullable=False)
    user_type = Column(Enum(UserTypeEnum), default=UserTypeEnum.normal, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    assigned_tasks = relationship("Task", back_populates="assignee", passive_deletes="all")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
