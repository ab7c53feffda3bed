"""Dry-run validation of import files; never touches the store."""

import json
from typing import Any

from app.core.config import settings
from app.exceptions.transfer import InvalidImportFileError
from app.schemas.transfer import ValidationReport

from .importer import csv_value, read_csv_rows


NO_TITLE = "(no title)"


def detect_format(filename: str | None) -> str | None:
    """``json`` or ``csv`` from the file extension, None for anything else."""
    name = (filename or "").lower()
    if name.endswith(".json"):
        return "json"
    if name.endswith(".csv"):
        return "csv"
    return None


class ImportValidator:
    """Checks an import file and previews its first records."""

    def __init__(
        self,
        preview_size: int | None = None,
        large_dataset_threshold: int | None = None,
    ):
        self.preview_size = preview_size or settings.import_preview_size
        self.large_dataset_threshold = (
            large_dataset_threshold or settings.import_large_dataset_threshold
        )

    def validate(self, filename: str | None, content: str) -> ValidationReport:
        file_format = detect_format(filename)
        if file_format == "json":
            return self.validate_json(content)
        if file_format == "csv":
            return self.validate_csv(content)
        return ValidationReport(
            valid=False,
            format="unknown",
            record_count=0,
            errors=["Unsupported file format. Use JSON or CSV."],
        )

    def validate_json(self, content: str) -> ValidationReport:
        errors: list[str] = []
        warnings: list[str] = []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            return ValidationReport(
                valid=False, format="json", errors=[f"Invalid JSON: {str(e)}"]
            )

        tasks = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(tasks, list):
            return ValidationReport(
                valid=False,
                format="json",
                errors=["Invalid JSON: missing or invalid tasks array"],
            )

        for i, task in enumerate(tasks):
            if not self._field(task, "title"):
                errors.append(f"Task at index {i} is missing a title")
        for kind in ("projects", "labels"):
            records = data.get(kind)
            if isinstance(records, list):
                for i, record in enumerate(records):
                    if not self._field(record, "name"):
                        errors.append(f"{kind[:-1].capitalize()} at index {i} is missing a name")

        preview = [
            {
                "title": self._field(task, "title") or NO_TITLE,
                "completed": self._field(task, "completed") or False,
                "priority": self._field(task, "priority") or "NONE",
                "dueDate": self._field(task, "dueDate") or "",
            }
            for task in tasks[: self.preview_size]
        ]

        if len(tasks) > self.large_dataset_threshold:
            warnings.append(f"Large dataset: {len(tasks)} tasks may take some time to import")
        if not data.get("version"):
            warnings.append("Export version not specified")

        return ValidationReport(
            valid=not errors,
            format="json",
            record_count=len(tasks),
            preview=preview,
            errors=errors,
            warnings=warnings,
        )

    def validate_csv(self, content: str) -> ValidationReport:
        errors: list[str] = []
        warnings: list[str] = []

        try:
            fieldnames, rows = read_csv_rows(content)
        except InvalidImportFileError as e:
            return ValidationReport(valid=False, format="csv", errors=[e.message])

        if "title" not in fieldnames:
            errors.append('CSV missing required "Title" column')

        for i, row in enumerate(rows, start=1):
            if not csv_value(row, "title").strip():
                errors.append(f"Row {i} is missing a title")

        preview = [
            {
                "title": csv_value(row, "title") or NO_TITLE,
                "priority": csv_value(row, "priority") or "NONE",
                "status": csv_value(row, "status"),
                "dueDate": csv_value(row, "due_date"),
            }
            for row in rows[: self.preview_size]
        ]

        if len(rows) > self.large_dataset_threshold:
            warnings.append(f"Large dataset: {len(rows)} rows may take some time to import")
        if "project" not in fieldnames:
            warnings.append('No "Project" column found. All tasks will be imported to inbox.')

        return ValidationReport(
            valid=not errors,
            format="csv",
            record_count=len(rows),
            preview=preview,
            errors=errors,
            warnings=warnings,
        )

    @staticmethod
    def _field(record: Any, name: str) -> Any:
        return record.get(name) if isinstance(record, dict) else None
