"""Comment API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.comment.service import CommentService
from app.schemas.base import ResponseSchema
from app.schemas.task import CommentResponse, CommentUpdate

router = APIRouter(
    prefix="/api/comments",
    tags=["comments"],
)


@router.patch("/{comment_id}", response_model=ResponseSchema)
async def update_comment(
    comment_id: UUID = Path(..., description="Comment ID"),
    comment_data: CommentUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Edit the content of a comment."""
    comment = await CommentService(db).update_comment(comment_id, comment_data)

    return ResponseSchema(
        status="success",
        message="Comment updated successfully",
        data=CommentResponse.model_validate(comment).model_dump(),
    )


@router.delete("/{comment_id}", response_model=ResponseSchema)
async def delete_comment(
    comment_id: UUID = Path(..., description="Comment ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a comment."""
    success = await CommentService(db).delete_comment(comment_id)

    return ResponseSchema(
        status="success" if success else "error",
        message="Comment deleted successfully" if success else "Failed to delete comment",
        data=None,
    )
