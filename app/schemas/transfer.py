"""Import/export schemas.

File payloads use camelCase keys (``exportDate``, ``projectId``, ``recordCount``)
so JSON exports stay importable as-is.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.task import Priority


class ExportFormat(str, Enum):
    json = "json"
    csv = "csv"
    markdown = "markdown"


class DuplicatePolicy(str, Enum):
    """How an import treats records whose name/title already exists."""

    skip = "skip"
    merge = "merge"
    overwrite = "overwrite"

    @property
    def effective(self) -> "DuplicatePolicy":
        # merge has no behaviour of its own yet and falls back to skip
        if self is DuplicatePolicy.merge:
            return DuplicatePolicy.skip
        return self


class CamelSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ExportFilter(CamelSchema):
    """Which tasks to export. Projects and labels are always exported in full."""

    project_id: UUID | None = None
    completed_only: bool = False
    start_date: datetime | None = None
    end_date: datetime | None = None


class ImportSummary(CamelSchema):
    imported: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)

    def merge(self, other: "ImportSummary") -> "ImportSummary":
        return ImportSummary(
            imported=self.imported + other.imported,
            skipped=self.skipped + other.skipped,
            errors=self.errors + other.errors,
        )


class ValidationReport(CamelSchema):
    valid: bool
    format: str
    record_count: int = 0
    preview: list[dict[str, Any]] | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def _optional_text(v):
    """Exports write missing values as ""; read those back as absent."""
    if v is None:
        return None
    if isinstance(v, str):
        return v if v.strip() else None
    return str(v)


class ImportRecord(CamelSchema):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class ImportProject(ImportRecord):
    id: str | None = None
    name: str = Field(..., min_length=1)
    description: str | None = None
    color: str | None = None
    icon: str | None = None
    is_favorite: bool = False

    @field_validator("id", "description", "color", "icon", mode="before")
    @classmethod
    def validate_optional_text(cls, v):
        return _optional_text(v)

    @field_validator("is_favorite", mode="before")
    @classmethod
    def validate_is_favorite(cls, v):
        return False if v is None else v


class ImportLabel(ImportRecord):
    id: str | None = None
    name: str = Field(..., min_length=1)
    color: str | None = None
    project_id: str | None = None

    @field_validator("id", "color", "project_id", mode="before")
    @classmethod
    def validate_optional_text(cls, v):
        return _optional_text(v)


class ImportSubtask(ImportRecord):
    title: str = Field(..., min_length=1)
    completed: bool = False

    @field_validator("completed", mode="before")
    @classmethod
    def validate_completed(cls, v):
        return False if v is None else v


class ImportTask(ImportRecord):
    title: str = Field(..., min_length=1)
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.NONE
    due_date: datetime | None = None
    project_id: str | None = None
    labels: str | list[str] | None = None
    subtasks: list[ImportSubtask] = Field(default_factory=list)

    @field_validator("description", "project_id", mode="before")
    @classmethod
    def validate_optional_text(cls, v):
        return _optional_text(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v):
        return Priority.normalize(v)

    @field_validator("completed", mode="before")
    @classmethod
    def validate_completed(cls, v):
        return False if v is None else v

    @field_validator("subtasks", mode="before")
    @classmethod
    def validate_subtasks(cls, v):
        return [] if v is None else v

    @property
    def label_names(self) -> list[str]:
        """Label names from either a comma-separated string or a list."""
        if isinstance(self.labels, str):
            return [name.strip() for name in self.labels.split(",") if name.strip()]
        if isinstance(self.labels, list):
            return [name.strip() for name in self.labels if name and name.strip()]
        return []


class ExportSubtask(CamelSchema):
    title: str
    completed: bool


class ExportTask(CamelSchema):
    """A task as written to export files; absent values are rendered as ""."""

    id: str
    title: str
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.NONE
    due_date: str = ""
    created_at: str
    updated_at: str
    project_id: str = ""
    project_name: str = ""
    labels: str = ""
    subtasks: list[ExportSubtask] = Field(default_factory=list)


class ExportProject(CamelSchema):
    id: str
    name: str
    description: str = ""
    color: str
    icon: str = ""
    is_favorite: bool = False
    created_at: str
    updated_at: str


class ExportLabel(CamelSchema):
    id: str
    name: str
    color: str
    project_id: str = ""


class ExportDocument(CamelSchema):
    export_date: str
    version: str
    projects: list[ExportProject] = Field(default_factory=list)
    labels: list[ExportLabel] = Field(default_factory=list)
    tasks: list[ExportTask] = Field(default_factory=list)
