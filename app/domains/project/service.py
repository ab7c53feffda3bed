"""Project service layer with business logic."""

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.config import settings
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.store import EntityStore
from models.project import Project
from models.task import Task

logger = logging.getLogger(__name__)

# Columns that cannot be unset through an update
NON_NULLABLE_FIELDS = {"name", "color", "is_favorite"}


class ProjectService:
    """Service class for project business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = EntityStore(db)

    async def create_project(self, project_data: ProjectCreate) -> Project:
        """Create a new project."""
        return await self.store.projects.create(
            name=project_data.name,
            description=project_data.description,
            color=project_data.color or settings.default_project_color,
            icon=project_data.icon,
            is_favorite=project_data.is_favorite,
        )

    async def get_project(self, project_id: UUID) -> Project:
        """Get a project by ID, raising when it does not exist."""
        return await self.store.projects.get(project_id)

    async def get_projects_list(self) -> List[Dict[str, Any]]:
        """Get all projects, newest first, each with its task count."""
        task_counts = (
            select(Task.project_id, func.count(Task.id).label("task_count"))
            .group_by(Task.project_id)
            .subquery()
        )
        stmt = (
            select(Project, func.coalesce(task_counts.c.task_count, 0))
            .outerjoin(task_counts, task_counts.c.project_id == Project.id)
            .order_by(desc(Project.created_at))
        )
        result = await self.db.execute(stmt)
        return [
            self._project_dict(project, task_count) for project, task_count in result.all()
        ]

    async def get_project_with_task_count(self, project_id: UUID) -> Dict[str, Any]:
        """Get a project together with the number of tasks it holds."""
        project = await self.store.projects.get(project_id)
        task_count = await self.store.tasks.count({"project_id": project.id})
        return self._project_dict(project, task_count)

    async def update_project(self, project_id: UUID, project_data: ProjectUpdate) -> Project:
        """Update a project with the fields present in the request."""
        update_data = project_data.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                update_data.pop(field)
        return await self.store.projects.update(project_id, **update_data)

    async def toggle_favorite(self, project_id: UUID) -> Project:
        """Flip the favorite flag of a project."""
        project = await self.store.projects.get(project_id)
        return await self.store.projects.update(project.id, is_favorite=not project.is_favorite)

    async def delete_project(self, project_id: UUID) -> bool:
        """Delete a project together with its tasks and project-scoped labels."""
        await self.store.projects.delete(project_id)
        logger.info("Deleted project %s", project_id)
        return True

    # Private helper methods

    @staticmethod
    def _project_dict(project: Project, task_count: int) -> Dict[str, Any]:
        return {
            "id": project.id,
            "name": project.name,
            "description": project.description,
            "color": project.color,
            "icon": project.icon,
            "is_favorite": project.is_favorite,
            "created_at": project.created_at,
            "updated_at": project.updated_at,
            "task_count": task_count,
        }
