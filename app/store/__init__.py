"""Entity store: repositories for every entity kind over one session."""

import uuid
from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions.base import StoreError
from app.exceptions.entities import (
    CommentNotFoundError,
    LabelNotFoundError,
    ProjectNotFoundError,
    SubtaskNotFoundError,
    TaskNotFoundError,
)
from models import Comment, Label, Project, Subtask, Task, TaskLabel

from .repository import Repository, coerce_id


class EntityStore:
    """Aggregate of per-entity repositories sharing a database session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.projects: Repository[Project] = Repository(db, Project, ProjectNotFoundError)
        self.labels: Repository[Label] = Repository(db, Label, LabelNotFoundError)
        self.task_labels: Repository[TaskLabel] = Repository(db, TaskLabel)
        self.tasks: Repository[Task] = Repository(db, Task, TaskNotFoundError)
        self.subtasks: Repository[Subtask] = Repository(db, Subtask, SubtaskNotFoundError)
        self.comments: Repository[Comment] = Repository(db, Comment, CommentNotFoundError)

    async def set_task_labels(self, task_id: uuid.UUID, label_ids: Iterable) -> None:
        """Replace the label set of a task."""
        wanted = []
        for label_id in label_ids:
            key = coerce_id(label_id)
            if key is not None and key not in wanted:
                wanted.append(key)

        existing = await self.task_labels.list({"task_id": task_id})
        try:
            for row in existing:
                await self.db.delete(row)
            for label_id in wanted:
                self.db.add(TaskLabel(task_id=task_id, label_id=label_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Failed to update task labels: {str(e)}") from e

    async def labels_for_tasks(self, task_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, list[Label]]:
        """Map each task id to its labels, sorted by name."""
        ids = list(task_ids)
        if not ids:
            return {}
        stmt = (
            select(TaskLabel.task_id, Label)
            .join(Label, Label.id == TaskLabel.label_id)
            .where(TaskLabel.task_id.in_(ids))
            .order_by(Label.name.asc())
        )
        result = await self.db.execute(stmt)
        labels: dict[uuid.UUID, list[Label]] = defaultdict(list)
        for task_id, label in result.all():
            labels[task_id].append(label)
        return dict(labels)

    async def subtasks_for_tasks(
        self, task_ids: Iterable[uuid.UUID]
    ) -> dict[uuid.UUID, list[Subtask]]:
        """Map each task id to its subtasks in display order."""
        ids = list(task_ids)
        if not ids:
            return {}
        rows = await self.subtasks.list(
            order_by=[Subtask.order.asc(), Subtask.created_at.asc()],
            criteria=[Subtask.task_id.in_(ids)],
        )
        subtasks: dict[uuid.UUID, list[Subtask]] = defaultdict(list)
        for subtask in rows:
            subtasks[subtask.task_id].append(subtask)
        return dict(subtasks)


__all__ = ["EntityStore", "Repository", "coerce_id"]
