"""Task, subtask and comment schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from models.task import Priority

from .base import BaseModelSchema, BaseSchema
from .label import LabelResponse


class TaskCreate(BaseSchema):
    """Schema for creating a new task."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    priority: Priority = Priority.NONE
    due_date: datetime | None = None
    project_id: UUID | None = None
    label_ids: list[UUID] | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v):
        return Priority.normalize(v)


class TaskUpdate(BaseSchema):
    """Schema for updating a task.

    Only fields present in the request are applied. An explicit ``project_id: null``
    moves the task to the inbox; ``label_ids`` replaces the whole label set.
    """

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    project_id: UUID | None = None
    order: int | None = Field(None, ge=0)
    label_ids: list[UUID] | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v):
        return None if v is None else Priority.normalize(v)


class TaskFilter(BaseSchema):
    """Schema for filtering tasks."""

    project_id: UUID | None = None
    inbox: bool = False
    completed: bool | None = None


class TaskResponse(BaseModelSchema):
    """Schema for task response."""

    title: str
    description: str | None = None
    completed: bool
    priority: Priority
    due_date: datetime | None = None
    order: int
    project_id: UUID | None = None
    labels: list[LabelResponse] = []


class SubtaskCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=500)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v


class SubtaskUpdate(BaseSchema):
    title: str | None = Field(None, min_length=1, max_length=500)
    completed: bool | None = None
    order: int | None = Field(None, ge=0)


class SubtaskResponse(BaseModelSchema):
    task_id: UUID
    title: str
    completed: bool
    order: int


class CommentCreate(BaseSchema):
    content: str = Field(..., min_length=1)


class CommentUpdate(BaseSchema):
    content: str | None = Field(None, min_length=1)


class CommentResponse(BaseModelSchema):
    task_id: UUID
    content: str
