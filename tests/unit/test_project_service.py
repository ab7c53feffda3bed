"""
Unit tests for ProjectService and LabelService.
"""

import uuid

import pytest

from app.domains.label.service import LabelService
from app.domains.project.service import ProjectService
from app.exceptions.entities import (
    InvalidLabelProjectError,
    LabelNotFoundError,
    ProjectNotFoundError,
)
from app.schemas.label import LabelCreate, LabelUpdate
from app.schemas.project import ProjectCreate, ProjectUpdate


class TestProjectService:
    """Test cases for ProjectService."""

    @pytest.mark.asyncio
    async def test_create_project_success(self, test_db):
        """Test successful project creation."""
        service = ProjectService(test_db)
        project_data = ProjectCreate(
            name="  Side project  ", description="Weekend hacking", color="#abcdef", icon="rocket"
        )

        result = await service.create_project(project_data)

        assert result is not None
        assert result.name == "Side project"
        assert result.description == "Weekend hacking"
        assert result.color == "#abcdef"
        assert result.icon == "rocket"
        assert result.is_favorite is False

    @pytest.mark.asyncio
    async def test_create_project_default_color(self, test_db):
        service = ProjectService(test_db)

        result = await service.create_project(ProjectCreate(name="Plain"))

        assert result.color == "#6366f1"

    @pytest.mark.asyncio
    async def test_get_project_not_found(self, test_db):
        service = ProjectService(test_db)

        with pytest.raises(ProjectNotFoundError):
            await service.get_project(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_projects_list_with_counts(
        self, test_db, test_project, test_project_2, test_task
    ):
        """Test listing projects newest first with task counts."""
        service = ProjectService(test_db)

        projects = await service.get_projects_list()

        assert [p["name"] for p in projects] == ["Home", "Work"]
        counts = {p["name"]: p["task_count"] for p in projects}
        assert counts == {"Home": 0, "Work": 1}

    @pytest.mark.asyncio
    async def test_get_project_with_task_count(self, test_db, test_project, test_task):
        service = ProjectService(test_db)

        result = await service.get_project_with_task_count(test_project.id)

        assert result["id"] == test_project.id
        assert result["task_count"] == 1

    @pytest.mark.asyncio
    async def test_update_project_partial(self, test_db, test_project):
        """Test that only supplied fields change."""
        service = ProjectService(test_db)

        result = await service.update_project(test_project.id, ProjectUpdate(color="#000000"))

        assert result.color == "#000000"
        assert result.name == "Work"
        assert result.description == "Work related tasks"

    @pytest.mark.asyncio
    async def test_update_project_ignores_null_name(self, test_db, test_project):
        service = ProjectService(test_db)

        result = await service.update_project(
            test_project.id, ProjectUpdate.model_validate({"name": None, "description": None})
        )

        assert result.name == "Work"
        assert result.description is None

    @pytest.mark.asyncio
    async def test_toggle_favorite(self, test_db, test_project):
        service = ProjectService(test_db)

        assert (await service.toggle_favorite(test_project.id)).is_favorite is True
        assert (await service.toggle_favorite(test_project.id)).is_favorite is False

    @pytest.mark.asyncio
    async def test_delete_project(self, test_db, test_project, test_task):
        service = ProjectService(test_db)
        project_id = test_project.id
        task_id = test_task.id

        assert await service.delete_project(project_id) is True
        assert await service.store.projects.find_by_id(project_id) is None
        assert await service.store.tasks.find_by_id(task_id) is None

    @pytest.mark.asyncio
    async def test_delete_project_not_found(self, test_db):
        with pytest.raises(ProjectNotFoundError):
            await ProjectService(test_db).delete_project(uuid.uuid4())


class TestLabelService:
    """Test cases for LabelService."""

    @pytest.mark.asyncio
    async def test_create_global_label(self, test_db):
        service = LabelService(test_db)

        label = await service.create_label(LabelCreate(name="later"))

        assert label.project_id is None
        assert label.color == "#6b7280"

    @pytest.mark.asyncio
    async def test_create_label_unknown_project(self, test_db):
        service = LabelService(test_db)

        with pytest.raises(InvalidLabelProjectError):
            await service.create_label(LabelCreate(name="x", project_id=uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_labels_list_scoping(
        self, test_db, test_label, test_project_label, test_project_2
    ):
        """Test that a project sees global labels plus its own."""
        service = LabelService(test_db)
        other = await service.create_label(
            LabelCreate(name="garden", project_id=test_project_2.id)
        )

        everything = await service.get_labels_list()
        for_project = await service.get_labels_list(test_project_label.project_id)

        assert [label.name for label in everything] == ["garden", "meeting", "urgent"]
        assert [label.name for label in for_project] == ["meeting", "urgent"]
        assert other.id not in {label.id for label in for_project}

    @pytest.mark.asyncio
    async def test_update_label(self, test_db, test_label):
        service = LabelService(test_db)

        label = await service.update_label(test_label.id, LabelUpdate(color="#111111"))

        assert label.color == "#111111"
        assert label.name == "urgent"

    @pytest.mark.asyncio
    async def test_delete_label(self, test_db, test_label):
        service = LabelService(test_db)
        label_id = test_label.id

        await service.delete_label(label_id)

        with pytest.raises(LabelNotFoundError):
            await service.delete_label(label_id)
