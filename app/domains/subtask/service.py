"""Subtask service layer."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.ordering.service import OrderingService
from app.schemas.ordering import ReorderResult
from app.schemas.task import SubtaskCreate, SubtaskUpdate
from app.store import EntityStore
from models.subtask import Subtask


class SubtaskService:
    """Service class for subtask business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = EntityStore(db)
        self.ordering = OrderingService(self.store)

    async def get_subtasks_list(self, task_id: UUID) -> List[Subtask]:
        """Get the subtasks of a task in display order."""
        await self.store.tasks.get(task_id)
        return await self.store.subtasks.list(
            {"task_id": task_id}, order_by=[Subtask.order.asc(), Subtask.created_at.asc()]
        )

    async def create_subtask(self, task_id: UUID, subtask_data: SubtaskCreate) -> Subtask:
        """Append a subtask to a task."""
        task = await self.store.tasks.get(task_id)
        return await self.store.subtasks.create(
            task_id=task.id,
            title=subtask_data.title,
            order=await self.ordering.next_subtask_order(task.id),
        )

    async def get_subtask(self, subtask_id: UUID) -> Subtask:
        return await self.store.subtasks.get(subtask_id)

    async def update_subtask(self, subtask_id: UUID, subtask_data: SubtaskUpdate) -> Subtask:
        update_data = {
            field: value
            for field, value in subtask_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        return await self.store.subtasks.update(subtask_id, **update_data)

    async def toggle_subtask(self, subtask_id: UUID) -> Subtask:
        subtask = await self.store.subtasks.get(subtask_id)
        return await self.store.subtasks.update(subtask.id, completed=not subtask.completed)

    async def delete_subtask(self, subtask_id: UUID) -> bool:
        await self.store.subtasks.delete(subtask_id)
        return True

    async def reorder_subtasks(self, task_id: UUID, subtask_ids: List[UUID]) -> ReorderResult:
        return await self.ordering.reorder_subtasks(task_id, subtask_ids)
