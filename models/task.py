"""
A module defining the ``Task`` ORM model and its ``Priority`` enumeration.

Tasks live either in a project or, when ``project_id`` is null, in the inbox.
Each task owns its subtasks, comments and label assignments.
"""

import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel


class Priority(str, enum.Enum):
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @classmethod
    def normalize(cls, value) -> "Priority":
        """Return the matching priority, or NONE for absent/unrecognized values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return cls.NONE
        return cls.NONE


class Task(BaseModel):
    __tablename__ = "tasks"

    project_id = Column(UUID(), ForeignKey("projects.id", ondelete="CASCADE"))

    title = Column(String(500), nullable=False)
    description = Column(Text)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(String(16), nullable=False, default=Priority.NONE.value)
    due_date = Column(DateTime)
    order = Column(Integer, nullable=False, default=0)

    # Relationships
    project = relationship("Project", back_populates="tasks")
    subtasks = relationship(
        "Subtask",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="Subtask.order",
    )
    comments = relationship(
        "Comment", back_populates="task", cascade="all, delete-orphan"
    )
    task_labels = relationship(
        "TaskLabel", back_populates="task", cascade="all, delete-orphan"
    )
