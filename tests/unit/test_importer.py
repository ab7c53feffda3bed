"""
Unit tests for TaskImporter.

Exercises JSON and CSV imports against a real store, duplicate handling
policies, per-record error isolation and free-text priority mapping.
"""

import json
from datetime import datetime

import pytest

from app.domains.transfer.exporter import TaskExporter
from app.domains.transfer.importer import TaskImporter, csv_value, map_priority, read_csv_rows
from app.exceptions.transfer import InvalidImportFileError
from app.schemas.transfer import DuplicatePolicy, ExportFilter, ExportFormat
from models import Subtask
from models.task import Priority


class TestPriorityMapping:
    """Test cases for free-text priority mapping."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Urgent!!", Priority.URGENT),
            ("hi-pri", Priority.HIGH),
            ("High", Priority.HIGH),
            ("Med", Priority.MEDIUM),
            ("medium", Priority.MEDIUM),
            ("LOW ", Priority.LOW),
            ("", Priority.NONE),
            (None, Priority.NONE),
            ("whenever", Priority.NONE),
        ],
    )
    def test_map_priority(self, text, expected):
        assert map_priority(text) == expected


class TestCsvReading:
    """Test cases for CSV parsing helpers."""

    def test_headers_are_case_insensitive(self):
        fieldnames, rows = read_csv_rows("TITLE,Due Date\nA,2026-01-01\n")

        assert fieldnames == ["title", "due date"]
        assert csv_value(rows[0], "title") == "A"
        assert csv_value(rows[0], "due_date") == "2026-01-01"

    def test_quoted_fields(self):
        _, rows = read_csv_rows('Title,Labels\n"Buy milk, eggs ""fresh""","a, b"\n')

        assert csv_value(rows[0], "title") == 'Buy milk, eggs "fresh"'
        assert csv_value(rows[0], "labels") == "a, b"

    def test_short_rows_have_blank_values(self):
        _, rows = read_csv_rows("Title,Priority,Status\nOnly title\n")

        assert csv_value(rows[0], "priority") == ""
        assert csv_value(rows[0], "status") == ""


class TestJsonImport:
    """Test cases for JSON imports."""

    @pytest.mark.asyncio
    async def test_import_into_empty_store(self, store, export_payload):
        """Test a full import: projects, labels, tasks and subtasks with remapped ids."""
        summary = await TaskImporter(store).import_json(json.dumps(export_payload))

        # 1 project + 2 labels + 2 tasks
        assert summary.imported == 5
        assert summary.skipped == 0
        assert summary.errors == []

        project = await store.projects.find_by_field("name", "Garden")
        assert project.color == "#16a34a"
        assert project.is_favorite is True

        outdoor = await store.labels.find_by_field("name", "outdoor")
        weekend = await store.labels.find_by_field("name", "weekend")
        assert outdoor.project_id == project.id
        assert weekend.project_id is None

        tomatoes = await store.tasks.find_by_field("title", "Plant tomatoes")
        assert tomatoes.project_id == project.id
        assert tomatoes.priority == "MEDIUM"
        assert tomatoes.due_date == datetime(2026, 5, 1)
        assert tomatoes.order == 0
        subtasks = await store.subtasks.list(
            {"task_id": tomatoes.id}, order_by=[Subtask.order.asc()]
        )
        assert [(s.title, s.completed, s.order) for s in subtasks] == [
            ("Buy seedlings", True, 0),
            ("Dig holes", False, 1),
        ]
        labels = await store.labels_for_tasks([tomatoes.id])
        assert [label.name for label in labels[tomatoes.id]] == ["outdoor", "weekend"]

        library = await store.tasks.find_by_field("title", "Renew library card")
        assert library.project_id is None
        assert library.completed is True
        assert library.priority == "NONE"
        assert library.due_date is None
        labels = await store.labels_for_tasks([library.id])
        assert [label.name for label in labels[library.id]] == ["weekend"]

    @pytest.mark.asyncio
    async def test_repeat_skip_import_is_idempotent(self, store, export_payload):
        """Test that importing the same file twice with skip adds nothing."""
        content = json.dumps(export_payload)
        await TaskImporter(store).import_json(content)

        summary = await TaskImporter(store, DuplicatePolicy.skip).import_json(content)

        assert summary.imported == 0
        assert summary.skipped == 5
        assert await store.tasks.count() == 2
        assert await store.projects.count() == 1
        assert await store.labels.count() == 2

    @pytest.mark.asyncio
    async def test_merge_behaves_like_skip(self, store, export_payload):
        content = json.dumps(export_payload)
        await TaskImporter(store).import_json(content)

        summary = await TaskImporter(store, DuplicatePolicy.merge).import_json(content)

        assert summary.imported == 0
        assert summary.skipped == 5
        assert await store.tasks.count() == 2

    @pytest.mark.asyncio
    async def test_skipped_project_still_maps_ids(self, store, test_project):
        """Test that tasks land in the existing project when the project is skipped."""
        payload = {
            "projects": [{"id": "old-1", "name": "Work"}],
            "tasks": [{"title": "New task", "projectId": "old-1"}],
        }

        summary = await TaskImporter(store).import_json(json.dumps(payload))

        assert summary.imported == 1
        assert summary.skipped == 1
        task = await store.tasks.find_by_field("title", "New task")
        assert task.project_id == test_project.id

    @pytest.mark.asyncio
    async def test_overwrite_replaces_task(self, store, test_task):
        """Test that overwrite creates a fresh task and removes the old one."""
        old_id = test_task.id
        payload = {
            "tasks": [
                {
                    "title": "Prepare quarterly report",
                    "priority": "LOW",
                    "subtasks": [{"title": "Only step", "completed": False}],
                }
            ]
        }

        summary = await TaskImporter(store, DuplicatePolicy.overwrite).import_json(
            json.dumps(payload)
        )

        assert summary.imported == 0
        assert summary.skipped == 1
        assert await store.tasks.find_by_id(old_id) is None
        replaced = await store.tasks.list({"title": "Prepare quarterly report"})
        assert len(replaced) == 1
        assert replaced[0].priority == "LOW"
        assert replaced[0].project_id is None
        subtasks = await store.subtasks.list({"task_id": replaced[0].id})
        assert [s.title for s in subtasks] == ["Only step"]

    @pytest.mark.asyncio
    async def test_overwrite_updates_project_in_place(self, store, test_project):
        project_id = test_project.id
        payload = {
            "projects": [{"name": "Work", "color": "#123456", "isFavorite": True}],
            "tasks": [],
        }

        summary = await TaskImporter(store, DuplicatePolicy.overwrite).import_json(
            json.dumps(payload)
        )

        assert summary.skipped == 1
        project = await store.projects.get(project_id)
        assert project.color == "#123456"
        assert project.is_favorite is True

    @pytest.mark.asyncio
    async def test_overwrite_blank_color_keeps_stored_color(self, store, test_project, test_label):
        """Test that a blank color in the file does not reset the stored color."""
        payload = {
            "projects": [{"name": "Work", "color": "", "description": "Updated"}],
            "labels": [{"name": "urgent", "color": ""}],
            "tasks": [],
        }

        summary = await TaskImporter(store, DuplicatePolicy.overwrite).import_json(
            json.dumps(payload)
        )

        assert summary.skipped == 2
        project = await store.projects.get(test_project.id)
        assert project.color == "#ef4444"
        assert project.description == "Updated"
        label = await store.labels.get(test_label.id)
        assert label.color == "#dc2626"

    @pytest.mark.asyncio
    async def test_bad_record_does_not_stop_import(self, store):
        """Test that a failing record is reported and the rest still import."""
        payload = {
            "tasks": [
                {"title": ""},
                {"title": "Valid one"},
                "not an object",
                {"title": "Bad date", "dueDate": "someday"},
            ]
        }

        summary = await TaskImporter(store).import_json(json.dumps(payload))

        assert summary.imported == 1
        assert len(summary.errors) == 3
        assert all(error.startswith('Failed to import task "') for error in summary.errors)
        assert 'Failed to import task "Bad date"' in summary.errors[2]
        assert await store.tasks.count() == 1

    @pytest.mark.asyncio
    async def test_default_colors_applied(self, store):
        payload = {
            "projects": [{"name": "Plain"}],
            "labels": [{"name": "bare", "color": ""}],
            "tasks": [],
        }

        await TaskImporter(store).import_json(json.dumps(payload))

        assert (await store.projects.find_by_field("name", "Plain")).color == "#6366f1"
        assert (await store.labels.find_by_field("name", "bare")).color == "#6b7280"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        ["{not json", json.dumps({"projects": []}), json.dumps({"tasks": "nope"}), "[]"],
    )
    async def test_structural_errors_abort(self, store, content):
        with pytest.raises(InvalidImportFileError):
            await TaskImporter(store).import_json(content)
        assert await store.tasks.count() == 0

    @pytest.mark.asyncio
    async def test_export_then_import_round_trip(self, store, test_task, inbox_tasks):
        """Test that a JSON export imported into an empty store reproduces the data."""
        exported = await TaskExporter(store).export(
            ExportFormat.json, ExportFilter(), datetime(2026, 10, 17)
        )
        before = json.loads(exported.content)

        for project in await store.projects.list():
            await store.projects.delete(project.id)
        for label in await store.labels.list():
            await store.labels.delete(label.id)
        for task in await store.tasks.list():
            await store.tasks.delete(task.id)
        assert await store.tasks.count() == 0

        summary = await TaskImporter(store).import_json(exported.content)

        assert summary.errors == []
        assert summary.imported == 1 + 1 + 4
        after = json.loads(
            (
                await TaskExporter(store).export(
                    ExportFormat.json, ExportFilter(), datetime(2026, 10, 17)
                )
            ).content
        )

        def comparable(task):
            return (
                task["title"],
                task["description"],
                task["completed"],
                task["priority"],
                task["dueDate"],
                task["projectName"],
                task["labels"],
                [(s["title"], s["completed"]) for s in task["subtasks"]],
            )

        assert sorted(map(comparable, before["tasks"])) == sorted(map(comparable, after["tasks"]))
        assert [p["name"] for p in before["projects"]] == [p["name"] for p in after["projects"]]
        assert [(l["name"], l["color"]) for l in before["labels"]] == [
            (l["name"], l["color"]) for l in after["labels"]
        ]


class TestCsvImport:
    """Test cases for CSV imports."""

    @pytest.mark.asyncio
    async def test_simple_csv_goes_to_inbox(self, store):
        """Test the minimal Title/Priority/Status file."""
        summary = await TaskImporter(store).import_csv("Title,Priority,Status\nWash car,High,Done\n")

        assert summary.imported == 1
        assert summary.errors == []
        task = await store.tasks.find_by_field("title", "Wash car")
        assert task.priority == "HIGH"
        assert task.completed is True
        assert task.project_id is None

    @pytest.mark.asyncio
    async def test_csv_creates_projects_and_labels(self, store, test_label):
        content = (
            "Title,Description,Priority,Due Date,Status,Project,Labels\n"
            "Fix fence,Back side,urgent,2026-04-02,Incomplete,Garden,\"urgent, outdoor\"\n"
            "Mow lawn,,low,,completed,Garden,outdoor\n"
        )

        summary = await TaskImporter(store).import_csv(content)

        assert summary.imported == 2
        assert await store.projects.count({"name": "Garden"}) == 1
        # "urgent" already existed; only "outdoor" is new
        assert await store.labels.count() == 2

        fence = await store.tasks.find_by_field("title", "Fix fence")
        assert fence.description == "Back side"
        assert fence.priority == "URGENT"
        assert fence.due_date == datetime(2026, 4, 2)
        assert fence.completed is False
        labels = await store.labels_for_tasks([fence.id])
        assert sorted(label.name for label in labels[fence.id]) == ["outdoor", "urgent"]

        mow = await store.tasks.find_by_field("title", "Mow lawn")
        assert mow.completed is True
        assert mow.project_id == fence.project_id
        assert mow.order == 1

    @pytest.mark.asyncio
    async def test_rows_without_title_are_ignored(self, store):
        summary = await TaskImporter(store).import_csv("Title,Priority\n,High\n   ,Low\nReal,\n")

        assert summary.imported == 1
        assert summary.skipped == 0
        assert summary.errors == []

    @pytest.mark.asyncio
    async def test_bad_date_reports_row_and_creates_nothing(self, store):
        """Test that a row failing on its date leaves no project or label behind."""
        content = "Title,Due Date,Project,Labels\nBroken,not-a-date,Ghost,phantom\nGood,,,\n"

        summary = await TaskImporter(store).import_csv(content)

        assert summary.imported == 1
        assert len(summary.errors) == 1
        assert summary.errors[0].startswith('Failed to import row 1 "Broken"')
        assert await store.projects.count() == 0
        assert await store.labels.count() == 0

    @pytest.mark.asyncio
    async def test_csv_duplicate_skip(self, store, inbox_tasks):
        summary = await TaskImporter(store).import_csv("Title\nBuy milk\nNew errand\n")

        assert summary.imported == 1
        assert summary.skipped == 1
        assert await store.tasks.count({"title": "Buy milk"}) == 1

    @pytest.mark.asyncio
    async def test_csv_with_very_long_field(self, store):
        """Test that a cell larger than the csv module default limit still imports."""
        long_description = "x" * 200_000
        content = f"Title,Description\nOk,short\nBig,{long_description}\n"

        summary = await TaskImporter(store).import_csv(content)

        assert summary.imported == 2
        assert summary.errors == []
        big = await store.tasks.find_by_field("title", "Big")
        assert len(big.description) == 200_000

    @pytest.mark.asyncio
    async def test_csv_duplicate_overwrite(self, store, inbox_tasks):
        old_id = inbox_tasks[0].id

        summary = await TaskImporter(store, DuplicatePolicy.overwrite).import_csv(
            "Title,Priority\nBuy milk,medium\n"
        )

        assert summary.skipped == 1
        assert await store.tasks.find_by_id(old_id) is None
        replacement = await store.tasks.find_by_field("title", "Buy milk")
        assert replacement.priority == "MEDIUM"
        assert replacement.order == 3
