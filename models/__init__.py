"""
Models package initialization.
"""

from .base import Base, BaseModel
from .comment import Comment
from .label import DEFAULT_LABEL_COLOR, Label, TaskLabel
from .project import DEFAULT_PROJECT_COLOR, Project
from .subtask import Subtask
from .task import Priority, Task

__all__ = [
    "Base",
    "BaseModel",
    "Project",
    "Label",
    "TaskLabel",
    "Task",
    "Priority",
    "Subtask",
    "Comment",
    "DEFAULT_PROJECT_COLOR",
    "DEFAULT_LABEL_COLOR",
]
