"""Import of JSON exports and CSV task lists into the entity store.

Records are processed one at a time: a duplicate lookup, then the writes for
that record, before the next record starts. A failing record is reported in
the summary's ``errors`` and the import carries on. Structural problems (bad
JSON, no ``tasks`` array, unreadable CSV) abort before anything is written.
"""

import csv
import io
import json
import logging
import re
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.domains.ordering.service import OrderingService
from app.exceptions.base import BaseAppException
from app.exceptions.transfer import InvalidImportFileError
from app.schemas.transfer import (
    DuplicatePolicy,
    ImportLabel,
    ImportProject,
    ImportSummary,
    ImportTask,
)
from app.shared.dates import parse_datetime, to_naive_utc
from app.store import EntityStore
from models.task import Priority

logger = logging.getLogger(__name__)

_WORDS = re.compile(r"[a-z]+")

# Accepted CSV header spellings, compared case-insensitively
CSV_COLUMNS = {
    "title": ("title",),
    "description": ("description",),
    "priority": ("priority",),
    "due_date": ("due date", "duedate", "due_date"),
    "status": ("status",),
    "project": ("project",),
    "labels": ("labels",),
}
COMPLETED_STATUSES = ("completed", "done")


def map_priority(value: str | None) -> Priority:
    """Map free-text priority such as ``Urgent!!`` or ``hi-pri`` onto a Priority."""
    text = (value or "").lower()
    words = set(_WORDS.findall(text))
    if "urgent" in text:
        return Priority.URGENT
    if "high" in text or "hi" in words:
        return Priority.HIGH
    if "medium" in text or "med" in text:
        return Priority.MEDIUM
    if "low" in text:
        return Priority.LOW
    return Priority.NONE


def describe_error(error: Exception) -> str:
    """Short, single-line reason for a failed record."""
    if isinstance(error, PydanticValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or 'record'}: {item['msg']}"
            for item in error.errors()
        )
    if isinstance(error, BaseAppException):
        return error.message
    return str(error) or error.__class__.__name__


def _record_name(raw: Any, field: str) -> str:
    if isinstance(raw, dict) and raw.get(field):
        return str(raw[field])
    return "(unnamed)"


def read_csv_rows(content: str) -> tuple[list[str], list[dict[str, str]]]:
    """Parse CSV with a header row; keys are lower-cased and missing cells dropped."""
    # A single cell may use up to the whole upload size
    csv.field_size_limit(max(settings.max_import_file_size, csv.field_size_limit()))
    try:
        reader = csv.DictReader(io.StringIO(content))
        fieldnames = [name.strip().lower() for name in (reader.fieldnames or []) if name]
        rows = []
        for row in reader:
            rows.append(
                {
                    key.strip().lower(): (value or "")
                    for key, value in row.items()
                    if isinstance(key, str) and isinstance(value, str)
                }
            )
    except csv.Error as e:
        raise InvalidImportFileError(f"Invalid CSV: {str(e)}") from e
    return fieldnames, rows


def csv_value(row: dict[str, str], column: str) -> str:
    for name in CSV_COLUMNS[column]:
        value = row.get(name)
        if value:
            return value
    return ""


class TaskImporter:
    """Imports projects, labels, tasks and subtasks with duplicate detection."""

    def __init__(
        self,
        store: EntityStore,
        policy: DuplicatePolicy = DuplicatePolicy.skip,
        ordering: OrderingService | None = None,
    ):
        self.store = store
        self.requested_policy = policy
        self.policy = policy.effective
        self.ordering = ordering or OrderingService(store)

    @property
    def overwrite(self) -> bool:
        return self.policy is DuplicatePolicy.overwrite

    # ===== JSON =====

    async def import_json(self, content: str) -> ImportSummary:
        """Import a JSON export: projects, then labels, then tasks with their subtasks."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidImportFileError(f"Invalid JSON: {str(e)}") from e

        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise InvalidImportFileError("Invalid JSON format: missing or invalid tasks array")

        project_map: dict[str, UUID] = {}
        projects = data.get("projects") if isinstance(data.get("projects"), list) else []
        labels = data.get("labels") if isinstance(data.get("labels"), list) else []

        summary = await self._import_projects(projects, project_map)
        summary = summary.merge(await self._import_labels(labels, project_map))
        summary = summary.merge(await self._import_tasks(data["tasks"], project_map))

        logger.info(
            "JSON import finished (%s): %d imported, %d skipped, %d errors",
            self.requested_policy.value,
            summary.imported,
            summary.skipped,
            len(summary.errors),
        )
        return summary

    async def _import_projects(
        self, records: list[Any], project_map: dict[str, UUID]
    ) -> ImportSummary:
        summary = ImportSummary()
        for raw in records:
            try:
                project = ImportProject.model_validate(raw)
                existing = await self.store.projects.find_by_field("name", project.name)
                existing_id = existing.id if existing else None
                # A blank incoming color keeps the stored one
                fallback_color = existing.color if existing else settings.default_project_color

                if existing_id and not self.overwrite:
                    summary.skipped += 1
                    self._remember(project_map, project.id, existing_id)
                    continue

                fields = {
                    "name": project.name,
                    "description": project.description,
                    "color": project.color or fallback_color,
                    "icon": project.icon,
                    "is_favorite": project.is_favorite,
                }
                if existing_id:
                    await self.store.projects.update(existing_id, **fields)
                    self._remember(project_map, project.id, existing_id)
                    summary.skipped += 1
                else:
                    created = await self.store.projects.create(**fields)
                    self._remember(project_map, project.id, created.id)
                    summary.imported += 1
            except Exception as e:
                self._record_failure(summary, "project", _record_name(raw, "name"), e)
        return summary

    async def _import_labels(
        self, records: list[Any], project_map: dict[str, UUID]
    ) -> ImportSummary:
        summary = ImportSummary()
        for raw in records:
            try:
                label = ImportLabel.model_validate(raw)
                existing = await self.store.labels.find_by_field("name", label.name)
                existing_id = existing.id if existing else None
                fallback_color = existing.color if existing else settings.default_label_color

                if existing_id and not self.overwrite:
                    summary.skipped += 1
                    continue

                fields = {
                    "name": label.name,
                    "color": label.color or fallback_color,
                    "project_id": project_map.get(label.project_id) if label.project_id else None,
                }
                if existing_id:
                    await self.store.labels.update(existing_id, **fields)
                    summary.skipped += 1
                else:
                    await self.store.labels.create(**fields)
                    summary.imported += 1
            except Exception as e:
                self._record_failure(summary, "label", _record_name(raw, "name"), e)
        return summary

    async def _import_tasks(
        self, records: list[Any], project_map: dict[str, UUID]
    ) -> ImportSummary:
        summary = ImportSummary()
        for raw in records:
            try:
                task = ImportTask.model_validate(raw)
                existing = await self.store.tasks.find_by_field("title", task.title)
                existing_id = existing.id if existing else None

                if existing_id and not self.overwrite:
                    summary.skipped += 1
                    continue

                project_id = project_map.get(task.project_id) if task.project_id else None
                label_ids = await self._existing_label_ids(task.label_names)

                task_id = await self._create_task(
                    title=task.title,
                    description=task.description,
                    completed=task.completed,
                    priority=task.priority,
                    due_date=to_naive_utc(task.due_date),
                    project_id=project_id,
                    label_ids=label_ids,
                )
                for subtask in task.subtasks:
                    await self.store.subtasks.create(
                        task_id=task_id,
                        title=subtask.title,
                        completed=subtask.completed,
                        order=await self.ordering.next_subtask_order(task_id),
                    )

                if existing_id:
                    # The replacement exists before the old task is removed
                    await self.store.tasks.delete(existing_id)
                    summary.skipped += 1
                else:
                    summary.imported += 1
            except Exception as e:
                self._record_failure(summary, "task", _record_name(raw, "title"), e)
        return summary

    # ===== CSV =====

    async def import_csv(self, content: str) -> ImportSummary:
        """Import one task per CSV row, creating missing projects and labels by name."""
        _, rows = read_csv_rows(content)
        summary = ImportSummary()

        for index, row in enumerate(rows, start=1):
            title = csv_value(row, "title").strip()
            if not title:
                continue

            try:
                existing = await self.store.tasks.find_by_field("title", title)
                existing_id = existing.id if existing else None

                if existing_id and not self.overwrite:
                    summary.skipped += 1
                    continue

                due_date = parse_datetime(csv_value(row, "due_date"))
                status = csv_value(row, "status").strip().lower()
                project_name = csv_value(row, "project").strip()
                label_names = [
                    name.strip() for name in csv_value(row, "labels").split(",") if name.strip()
                ]

                project_id = (
                    await self._find_or_create_project(project_name) if project_name else None
                )
                label_ids = [await self._find_or_create_label(name) for name in label_names]

                await self._create_task(
                    title=title,
                    description=csv_value(row, "description") or None,
                    completed=status in COMPLETED_STATUSES,
                    priority=map_priority(csv_value(row, "priority")),
                    due_date=due_date,
                    project_id=project_id,
                    label_ids=label_ids,
                )

                if existing_id:
                    await self.store.tasks.delete(existing_id)
                    summary.skipped += 1
                else:
                    summary.imported += 1
            except Exception as e:
                self._record_failure(summary, f"row {index}", title, e)

        logger.info(
            "CSV import finished (%s): %d imported, %d skipped, %d errors",
            self.requested_policy.value,
            summary.imported,
            summary.skipped,
            len(summary.errors),
        )
        return summary

    # Private helper methods

    async def _create_task(
        self,
        *,
        title: str,
        description: str | None,
        completed: bool,
        priority: Priority,
        due_date,
        project_id: UUID | None,
        label_ids: list[UUID],
    ) -> UUID:
        created = await self.store.tasks.create(
            title=title,
            description=description,
            completed=completed,
            priority=priority.value,
            due_date=due_date,
            project_id=project_id,
            order=await self.ordering.next_task_order(project_id),
        )
        task_id = created.id
        if label_ids:
            await self.store.set_task_labels(task_id, label_ids)
        return task_id

    async def _existing_label_ids(self, names: list[str]) -> list[UUID]:
        """Resolve label names to ids; unknown names are dropped."""
        label_ids = []
        for name in names:
            label = await self.store.labels.find_by_field("name", name)
            if label:
                label_ids.append(label.id)
        return label_ids

    async def _find_or_create_project(self, name: str) -> UUID:
        project = await self.store.projects.find_by_field("name", name)
        if project:
            return project.id
        created = await self.store.projects.create(
            name=name, color=settings.default_project_color
        )
        return created.id

    async def _find_or_create_label(self, name: str) -> UUID:
        label = await self.store.labels.find_by_field("name", name)
        if label:
            return label.id
        created = await self.store.labels.create(name=name, color=settings.default_label_color)
        return created.id

    @staticmethod
    def _remember(project_map: dict[str, UUID], old_id: str | None, new_id: UUID) -> None:
        if old_id:
            project_map[old_id] = new_id

    @staticmethod
    def _record_failure(summary: ImportSummary, kind: str, name: str, error: Exception) -> None:
        message = f'Failed to import {kind} "{name}": {describe_error(error)}'
        logger.warning(message)
        summary.errors.append(message)
