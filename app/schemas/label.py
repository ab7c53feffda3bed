"""Label schemas for request/response serialization."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from .base import BaseModelSchema, BaseSchema
from .project import HEX_COLOR


class LabelCreate(BaseSchema):
    """Schema for creating a label; ``project_id`` scopes it to one project."""

    name: str = Field(..., min_length=1, max_length=255)
    color: str | None = Field(None, pattern=HEX_COLOR)
    project_id: UUID | None = None


class LabelUpdate(BaseSchema):
    """Only name and color of a label can change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    color: str | None = Field(None, pattern=HEX_COLOR)


class LabelResponse(BaseModelSchema):
    name: str
    color: str
    project_id: UUID | None = None
