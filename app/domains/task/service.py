"""Task service layer with business logic."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.ordering.service import OrderingService
from app.exceptions.entities import LabelNotFoundError, ProjectNotFoundError
from app.schemas.label import LabelResponse
from app.schemas.ordering import ReorderResult
from app.schemas.task import TaskCreate, TaskFilter, TaskResponse, TaskUpdate
from app.shared.dates import to_naive_utc
from app.store import EntityStore
from models.task import Task

logger = logging.getLogger(__name__)

# Columns that cannot be unset through an update
NON_NULLABLE_FIELDS = {"title", "completed", "priority", "order"}


class TaskService:
    """Service class for task business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = EntityStore(db)
        self.ordering = OrderingService(self.store)

    async def create_task(self, task_data: TaskCreate) -> TaskResponse:
        """Create a task at the end of its project (or the inbox)."""
        if task_data.project_id:
            await self._validate_project(task_data.project_id)
        if task_data.label_ids:
            await self._validate_labels(task_data.label_ids)

        task = await self.store.tasks.create(
            title=task_data.title,
            description=task_data.description,
            priority=task_data.priority.value,
            due_date=to_naive_utc(task_data.due_date),
            project_id=task_data.project_id,
            order=await self.ordering.next_task_order(task_data.project_id),
        )
        if task_data.label_ids:
            await self.store.set_task_labels(task.id, task_data.label_ids)

        return await self.get_task(task.id)

    async def get_task(self, task_id: UUID) -> TaskResponse:
        """Get a task with its labels."""
        task = await self.store.tasks.get(task_id)
        return (await self.to_responses([task]))[0]

    async def get_tasks_list(
        self,
        filters: Optional[TaskFilter] = None,
        project_id: UUID | None = None,
    ) -> List[TaskResponse]:
        """Get tasks in display order, optionally restricted to a project, the inbox or a completion state."""
        filters = filters or TaskFilter(project_id=project_id)
        conditions = {}
        if filters.project_id:
            conditions["project_id"] = filters.project_id
        elif filters.inbox:
            conditions["project_id"] = None
        if filters.completed is not None:
            conditions["completed"] = filters.completed

        tasks = await self.store.tasks.list(
            conditions, order_by=[Task.order.asc(), Task.created_at.asc()]
        )
        return await self.to_responses(tasks)

    async def update_task(self, task_id: UUID, task_data: TaskUpdate) -> TaskResponse:
        """Update a task with the fields present in the request.

        Moving a task to another project keeps its order value; the destination
        scope is only renumbered by its next reorder.
        """
        update_data = task_data.model_dump(exclude_unset=True)
        replace_labels = "label_ids" in update_data
        label_ids = update_data.pop("label_ids", None) or []

        for field in NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                update_data.pop(field)
        if update_data.get("project_id") is not None:
            await self._validate_project(update_data["project_id"])
        if "due_date" in update_data:
            update_data["due_date"] = to_naive_utc(update_data["due_date"])
        if "priority" in update_data:
            update_data["priority"] = update_data["priority"].value

        await self.store.tasks.update(task_id, **update_data)

        if replace_labels:
            await self._validate_labels(label_ids)
            await self.store.set_task_labels(task_id, label_ids)

        # Re-read to return labels as they are now stored
        return await self.get_task(task_id)

    async def toggle_task(self, task_id: UUID) -> TaskResponse:
        """Flip the completed flag of a task."""
        task = await self.store.tasks.get(task_id)
        await self.store.tasks.update(task.id, completed=not task.completed)
        return await self.get_task(task.id)

    async def delete_task(self, task_id: UUID) -> bool:
        """Delete a task with its subtasks, comments and label assignments."""
        await self.store.tasks.delete(task_id)
        return True

    async def reorder_tasks(self, task_ids: List[UUID]) -> ReorderResult:
        """Persist a new display order for the given tasks."""
        return await self.ordering.reorder_tasks(task_ids)

    async def to_responses(self, tasks: List[Task]) -> List[TaskResponse]:
        """Build task responses with resolved labels."""
        labels = await self.store.labels_for_tasks(task.id for task in tasks)
        return [
            TaskResponse.model_validate(task).model_copy(
                update={
                    "labels": [
                        LabelResponse.model_validate(label) for label in labels.get(task.id, [])
                    ]
                }
            )
            for task in tasks
        ]

    # Private helper methods

    async def _validate_project(self, project_id: UUID) -> None:
        if not await self.store.projects.find_by_id(project_id):
            raise ProjectNotFoundError()

    async def _validate_labels(self, label_ids: List[UUID]) -> None:
        for label_id in label_ids:
            if not await self.store.labels.find_by_id(label_id):
                raise LabelNotFoundError(f"Label {label_id} not found")
