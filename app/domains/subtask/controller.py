"""Subtask API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.subtask.service import SubtaskService
from app.schemas.base import ResponseSchema
from app.schemas.task import SubtaskResponse, SubtaskUpdate

router = APIRouter(
    prefix="/api/subtasks",
    tags=["subtasks"],
)


@router.get("/{subtask_id}", response_model=ResponseSchema)
async def get_subtask(
    subtask_id: UUID = Path(..., description="Subtask ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific subtask by ID."""
    subtask = await SubtaskService(db).get_subtask(subtask_id)

    return ResponseSchema(
        status="success",
        message="Subtask retrieved successfully",
        data=SubtaskResponse.model_validate(subtask).model_dump(),
    )


@router.patch("/{subtask_id}", response_model=ResponseSchema)
async def update_subtask(
    subtask_id: UUID = Path(..., description="Subtask ID"),
    subtask_data: SubtaskUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update title, completion or order of a subtask."""
    subtask = await SubtaskService(db).update_subtask(subtask_id, subtask_data)

    return ResponseSchema(
        status="success",
        message="Subtask updated successfully",
        data=SubtaskResponse.model_validate(subtask).model_dump(),
    )


@router.post("/{subtask_id}/toggle", response_model=ResponseSchema)
async def toggle_subtask(
    subtask_id: UUID = Path(..., description="Subtask ID"),
    db: AsyncSession = Depends(get_db),
):
    """Toggle subtask completion."""
    subtask = await SubtaskService(db).toggle_subtask(subtask_id)

    return ResponseSchema(
        status="success",
        message="Subtask toggled successfully",
        data=SubtaskResponse.model_validate(subtask).model_dump(),
    )


@router.delete("/{subtask_id}", response_model=ResponseSchema)
async def delete_subtask(
    subtask_id: UUID = Path(..., description="Subtask ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a subtask."""
    success = await SubtaskService(db).delete_subtask(subtask_id)

    return ResponseSchema(
        status="success" if success else "error",
        message="Subtask deleted successfully" if success else "Failed to delete subtask",
        data=None,
    )
