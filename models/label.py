"""
Label model and the task/label join table.
"""

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel

DEFAULT_LABEL_COLOR = "#6b7280"


class Label(BaseModel):
    """
    A tag that can be attached to many tasks.

    A label without ``project_id`` is global; otherwise it is scoped to that project.
    """

    __tablename__ = "labels"

    name = Column(String(255), nullable=False)
    color = Column(String(32), nullable=False, default=DEFAULT_LABEL_COLOR)
    project_id = Column(UUID(), ForeignKey("projects.id", ondelete="CASCADE"))

    # Relationships
    project = relationship("Project", back_populates="labels")
    task_labels = relationship(
        "TaskLabel", back_populates="label", cascade="all, delete-orphan"
    )


class TaskLabel(BaseModel):
    """Join row between a task and a label."""

    __tablename__ = "task_labels"
    __table_args__ = (UniqueConstraint("task_id", "label_id", name="uq_task_label"),)

    task_id = Column(UUID(), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    label_id = Column(UUID(), ForeignKey("labels.id", ondelete="CASCADE"), nullable=False)

    task = relationship("Task", back_populates="task_labels")
    label = relationship("Label", back_populates="task_labels", lazy="selectin")
