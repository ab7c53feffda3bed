"""
Project model for grouping tasks and labels.
"""

from sqlalchemy import Boolean, Column, String, Text
from sqlalchemy.orm import relationship

from .base import BaseModel

DEFAULT_PROJECT_COLOR = "#6366f1"


class Project(BaseModel):
    """
    Represents a project entity in the application.

    Deleting a project removes its tasks and its project-scoped labels.
    """

    __tablename__ = "projects"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    color = Column(String(32), nullable=False, default=DEFAULT_PROJECT_COLOR)
    icon = Column(String(64))
    is_favorite = Column(Boolean, nullable=False, default=False)

    # Relationships
    tasks = relationship(
        "Task", back_populates="project", cascade="all, delete-orphan"
    )
    labels = relationship(
        "Label", back_populates="project", cascade="all, delete-orphan"
    )
