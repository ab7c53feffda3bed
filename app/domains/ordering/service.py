"""Ordering service: integer display order per scope.

Scopes are the inbox (tasks without a project), each project's tasks, and
each task's subtasks. New entities are appended after the current maximum.
A reorder rewrites ``order = index`` for every entity it is given; each
entity is updated on its own, so a failure part-way through leaves the
remaining entities with their previous order. There is no rollback.
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from app.exceptions.base import BaseAppException
from app.schemas.ordering import ReorderResult
from app.store import EntityStore, Repository

logger = logging.getLogger(__name__)


class OrderingService:
    """Service class for task and subtask ordering."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def next_task_order(self, project_id: UUID | None) -> int:
        """Order for a task appended to the inbox or to ``project_id``."""
        current = await self.store.tasks.aggregate_max_order(project_id=project_id)
        return self._next(current)

    async def next_subtask_order(self, task_id: UUID) -> int:
        """Order for a subtask appended to ``task_id``."""
        current = await self.store.subtasks.aggregate_max_order(task_id=task_id)
        return self._next(current)

    async def reorder_tasks(self, task_ids: Sequence[UUID]) -> ReorderResult:
        """Assign ``order = index`` to each task in ``task_ids``."""
        return await self._reorder(self.store.tasks, task_ids)

    async def reorder_subtasks(self, task_id: UUID, subtask_ids: Sequence[UUID]) -> ReorderResult:
        """Assign ``order = index`` to each subtask of ``task_id`` in ``subtask_ids``."""
        await self.store.tasks.get(task_id)
        return await self._reorder(self.store.subtasks, subtask_ids, parent_id=task_id)

    # Private helper methods

    @staticmethod
    def _next(current: int | None) -> int:
        return 0 if current is None else current + 1

    async def _reorder(
        self,
        repository: Repository,
        entity_ids: Sequence[UUID],
        parent_id: UUID | None = None,
    ) -> ReorderResult:
        result = ReorderResult()
        for index, entity_id in enumerate(entity_ids):
            try:
                entity = await repository.get(entity_id)
                if parent_id is not None and entity.task_id != parent_id:
                    result.errors.append(
                        f"{repository.entity_name.capitalize()} {entity_id} does not belong to task {parent_id}"
                    )
                    continue
                if entity.order != index:
                    await repository.update(entity_id, order=index)
                result.updated += 1
            except BaseAppException as e:
                logger.warning("Failed to reorder %s %s: %s", repository.entity_name, entity_id, e.message)
                result.errors.append(f"Failed to reorder {repository.entity_name} {entity_id}: {e.message}")

        if result.errors:
            logger.warning(
                "Reorder finished with %d failures; scope left partially reordered",
                len(result.errors),
            )
        return result
