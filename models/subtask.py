"""
Subtask model: a checklist item ordered within its parent task.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel


class Subtask(BaseModel):
    __tablename__ = "subtasks"

    task_id = Column(UUID(), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(500), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)

    task = relationship("Task", back_populates="subtasks")
