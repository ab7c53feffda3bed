"""Comment service layer."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.task import CommentCreate, CommentUpdate
from app.store import EntityStore
from models.comment import Comment


class CommentService:
    """Service class for task comments."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = EntityStore(db)

    async def get_comments_list(self, task_id: UUID) -> List[Comment]:
        """Get the comments of a task, newest first."""
        await self.store.tasks.get(task_id)
        return await self.store.comments.list(
            {"task_id": task_id}, order_by=[Comment.created_at.desc()]
        )

    async def create_comment(self, task_id: UUID, comment_data: CommentCreate) -> Comment:
        task = await self.store.tasks.get(task_id)
        return await self.store.comments.create(task_id=task.id, content=comment_data.content)

    async def update_comment(self, comment_id: UUID, comment_data: CommentUpdate) -> Comment:
        update_data = comment_data.model_dump(exclude_unset=True, exclude_none=True)
        return await self.store.comments.update(comment_id, **update_data)

    async def delete_comment(self, comment_id: UUID) -> bool:
        await self.store.comments.delete(comment_id)
        return True
