"""Export of the task graph to JSON, CSV and Markdown.

``TaskExporter.collect`` reads everything once into an ``ExportDocument``;
the ``render_*`` functions are pure and turn that document into file text.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime

from app.core.config import settings
from app.schemas.transfer import (
    ExportDocument,
    ExportFilter,
    ExportFormat,
    ExportLabel,
    ExportProject,
    ExportSubtask,
    ExportTask,
)
from app.shared.dates import format_short_date, parse_datetime, to_naive_utc
from app.store import EntityStore
from models import Label, Project, Task
from models.task import Priority

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Title",
    "Description",
    "Priority",
    "Due Date",
    "Status",
    "Project",
    "Labels",
    "Created Date",
]
LABEL_SEPARATOR = ", "
INBOX_HEADING = "Inbox"
UNKNOWN_PROJECT = "Unknown"


@dataclass
class ExportResult:
    content: str
    filename: str
    media_type: str


def isoformat(dt: datetime | None) -> str:
    """UTC timestamp in the ``2024-01-05T09:30:00.000Z`` form, or "" when absent."""
    if dt is None:
        return ""
    return to_naive_utc(dt).isoformat(timespec="milliseconds") + "Z"


def _date_only(value: str) -> str:
    return parse_datetime(value).strftime("%Y-%m-%d") if value else ""


def render_json(document: ExportDocument) -> str:
    return document.model_dump_json(by_alias=True, indent=2)


def render_csv(tasks: list[ExportTask]) -> str:
    """One row per task; fields with commas, quotes or newlines are quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for task in tasks:
        writer.writerow(
            [
                task.title,
                task.description,
                task.priority.value,
                _date_only(task.due_date),
                "Completed" if task.completed else "Incomplete",
                task.project_name,
                task.labels,
                _date_only(task.created_at),
            ]
        )
    return buffer.getvalue()


def render_task_line(task: ExportTask) -> str:
    """``- [ ] [H] Title 📅 Jan 5 🏷️ work, home`` followed by indented subtasks."""
    line = "- [x]" if task.completed else "- [ ]"
    if task.priority != Priority.NONE:
        line += f" [{task.priority.value[0]}]"
    line += f" {task.title}"
    if task.due_date:
        line += f" 📅 {format_short_date(parse_datetime(task.due_date))}"
    if task.labels:
        line += f" 🏷️ {task.labels}"
    for subtask in task.subtasks:
        line += f"\n  - {'[x]' if subtask.completed else '[ ]'} {subtask.title}"
    return line


def render_markdown(tasks: list[ExportTask], exported_at: datetime) -> str:
    """Checklist grouped under an Inbox section, then one section per project."""
    sections: list[tuple[str, list[ExportTask]]] = []

    inbox = [task for task in tasks if not task.project_id]
    if inbox:
        sections.append((INBOX_HEADING, inbox))

    # Projects appear in order of first encounter
    grouped: dict[str, list[ExportTask]] = {}
    for task in tasks:
        if task.project_id:
            grouped.setdefault(task.project_name or UNKNOWN_PROJECT, []).append(task)
    sections.extend(grouped.items())

    markdown = "# TaskFlow Export\n\n"
    markdown += f"Export Date: {exported_at.strftime('%Y-%m-%d %H:%M:%S')}\n\n"
    for heading, section_tasks in sections:
        markdown += f"## {heading}\n\n"
        markdown += "\n".join(render_task_line(task) for task in section_tasks)
        markdown += "\n\n"
    return markdown


def export_filename(export_format: ExportFormat, exported_at: datetime) -> str:
    day = exported_at.strftime("%Y-%m-%d")
    if export_format == ExportFormat.csv:
        return f"taskflow-tasks-{day}.csv"
    if export_format == ExportFormat.markdown:
        return f"taskflow-export-{day}.md"
    return f"taskflow-export-{day}.json"


MEDIA_TYPES = {
    ExportFormat.json: "application/json",
    ExportFormat.csv: "text/csv",
    ExportFormat.markdown: "text/markdown",
}


class TaskExporter:
    """Reads projects, labels and filtered tasks from the store and renders them."""

    def __init__(self, store: EntityStore, version: str | None = None):
        self.store = store
        self.version = version or settings.export_version

    async def collect(self, filters: ExportFilter, exported_at: datetime) -> ExportDocument:
        """Build the export document: full project/label catalogs plus the filtered tasks."""
        projects = await self.store.projects.list(order_by=[Project.created_at.desc()])
        labels = await self.store.labels.list(order_by=[Label.name.asc()])
        tasks = await self.store.tasks.list(
            self._task_filters(filters),
            order_by=[Task.order.asc(), Task.created_at.asc()],
            criteria=self._date_criteria(filters),
        )

        project_names = {project.id: project.name for project in projects}
        task_ids = [task.id for task in tasks]
        task_labels = await self.store.labels_for_tasks(task_ids)
        task_subtasks = await self.store.subtasks_for_tasks(task_ids)

        return ExportDocument(
            export_date=isoformat(exported_at),
            version=self.version,
            projects=[self._export_project(project) for project in projects],
            labels=[self._export_label(label) for label in labels],
            tasks=[
                ExportTask(
                    id=str(task.id),
                    title=task.title,
                    description=task.description or "",
                    completed=task.completed,
                    priority=Priority.normalize(task.priority),
                    due_date=isoformat(task.due_date),
                    created_at=isoformat(task.created_at),
                    updated_at=isoformat(task.updated_at),
                    project_id=str(task.project_id) if task.project_id else "",
                    project_name=project_names.get(task.project_id, "") if task.project_id else "",
                    labels=LABEL_SEPARATOR.join(
                        label.name for label in task_labels.get(task.id, [])
                    ),
                    subtasks=[
                        ExportSubtask(title=subtask.title, completed=subtask.completed)
                        for subtask in task_subtasks.get(task.id, [])
                    ],
                )
                for task in tasks
            ],
        )

    async def export(
        self,
        export_format: ExportFormat,
        filters: ExportFilter,
        exported_at: datetime | None = None,
    ) -> ExportResult:
        """Serialize to ``export_format`` and suggest a dated filename."""
        exported_at = to_naive_utc(exported_at) if exported_at else datetime.utcnow()
        document = await self.collect(filters, exported_at)

        if export_format == ExportFormat.csv:
            content = render_csv(document.tasks)
        elif export_format == ExportFormat.markdown:
            content = render_markdown(document.tasks, exported_at)
        else:
            content = render_json(document)

        logger.info(
            "Exported %d tasks, %d projects, %d labels as %s",
            len(document.tasks),
            len(document.projects),
            len(document.labels),
            export_format.value,
        )
        return ExportResult(
            content=content,
            filename=export_filename(export_format, exported_at),
            media_type=MEDIA_TYPES[export_format],
        )

    # Private helper methods

    @staticmethod
    def _task_filters(filters: ExportFilter) -> dict:
        conditions = {}
        if filters.project_id:
            conditions["project_id"] = filters.project_id
        if filters.completed_only:
            conditions["completed"] = True
        return conditions

    @staticmethod
    def _date_criteria(filters: ExportFilter) -> list:
        criteria = []
        if filters.start_date:
            criteria.append(Task.created_at >= to_naive_utc(filters.start_date))
        if filters.end_date:
            criteria.append(Task.created_at <= to_naive_utc(filters.end_date))
        return criteria

    @staticmethod
    def _export_project(project: Project) -> ExportProject:
        return ExportProject(
            id=str(project.id),
            name=project.name,
            description=project.description or "",
            color=project.color,
            icon=project.icon or "",
            is_favorite=project.is_favorite,
            created_at=isoformat(project.created_at),
            updated_at=isoformat(project.updated_at),
        )

    @staticmethod
    def _export_label(label: Label) -> ExportLabel:
        return ExportLabel(
            id=str(label.id),
            name=label.name,
            color=label.color,
            project_id=str(label.project_id) if label.project_id else "",
        )
