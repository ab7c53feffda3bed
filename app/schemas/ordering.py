"""Reordering schemas."""

from uuid import UUID

from pydantic import Field, field_validator

from .base import BaseSchema


class ReorderRequest(BaseSchema):
    """The full new display order of a scope's visible entities."""

    ids: list[UUID] = Field(default_factory=list)

    @field_validator("ids")
    @classmethod
    def validate_unique(cls, v: list[UUID]) -> list[UUID]:
        if len(set(v)) != len(v):
            raise ValueError("Reorder ids must be unique")
        return v


class ReorderResult(BaseSchema):
    """Outcome of a reorder; ``errors`` lists entities left with their previous order."""

    updated: int = 0
    errors: list[str] = Field(default_factory=list)
