"""Task API controller with FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.comment.service import CommentService
from app.domains.subtask.service import SubtaskService
from app.domains.task.service import TaskService
from app.schemas.base import ResponseSchema
from app.schemas.ordering import ReorderRequest
from app.schemas.task import (
    CommentCreate,
    CommentResponse,
    SubtaskCreate,
    SubtaskResponse,
    TaskCreate,
    TaskFilter,
    TaskUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)


@router.get("/", response_model=ResponseSchema)
async def get_tasks(
    project_id: UUID | None = Query(None),
    inbox: bool = Query(False, description="Only tasks without a project"),
    completed: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Get tasks in display order with optional filters."""
    filters = TaskFilter(project_id=project_id, inbox=inbox, completed=completed)
    tasks = await TaskService(db).get_tasks_list(filters)

    return ResponseSchema(
        status="success",
        message="Tasks retrieved successfully",
        data=[task.model_dump() for task in tasks],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    task = await TaskService(db).create_task(task_data)

    return ResponseSchema(
        status="success",
        message="Task created successfully",
        data=task.model_dump(),
    )


@router.post("/reorder", response_model=ResponseSchema)
async def reorder_tasks(
    reorder: ReorderRequest,
    db: AsyncSession = Depends(get_db),
):
    """Persist a drag-and-drop ordering: each listed task gets its index as order."""
    result = await TaskService(db).reorder_tasks(reorder.ids)

    return ResponseSchema(
        status="success" if not result.errors else "partial",
        message="Tasks reordered successfully"
        if not result.errors
        else "Some tasks could not be reordered",
        data=result.model_dump(),
    )


@router.get("/{task_id}", response_model=ResponseSchema)
async def get_task(
    task_id: UUID = Path(..., description="Task ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific task by ID."""
    task = await TaskService(db).get_task(task_id)

    return ResponseSchema(
        status="success",
        message="Task retrieved successfully",
        data=task.model_dump(),
    )


@router.patch("/{task_id}", response_model=ResponseSchema)
async def update_task(
    task_id: UUID = Path(..., description="Task ID"),
    task_data: TaskUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific task; only supplied fields change."""
    task = await TaskService(db).update_task(task_id, task_data)

    return ResponseSchema(
        status="success",
        message="Task updated successfully",
        data=task.model_dump(),
    )


@router.patch("/{task_id}/toggle", response_model=ResponseSchema)
async def toggle_task(
    task_id: UUID = Path(..., description="Task ID"),
    db: AsyncSession = Depends(get_db),
):
    """Toggle task completion."""
    task = await TaskService(db).toggle_task(task_id)

    return ResponseSchema(
        status="success",
        message="Task toggled successfully",
        data=task.model_dump(),
    )


@router.delete("/{task_id}", response_model=ResponseSchema)
async def delete_task(
    task_id: UUID = Path(..., description="Task ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task and everything it owns."""
    success = await TaskService(db).delete_task(task_id)

    return ResponseSchema(
        status="success" if success else "error",
        message="Task deleted successfully" if success else "Failed to delete task",
        data=None,
    )


@router.get("/{task_id}/subtasks", response_model=ResponseSchema)
async def get_task_subtasks(
    task_id: UUID = Path(..., description="Task ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get the subtasks of a task in display order."""
    subtasks = await SubtaskService(db).get_subtasks_list(task_id)

    return ResponseSchema(
        status="success",
        message="Subtasks retrieved successfully",
        data=[SubtaskResponse.model_validate(subtask).model_dump() for subtask in subtasks],
    )


@router.post("/{task_id}/subtasks", response_model=ResponseSchema, status_code=201)
async def create_task_subtask(
    task_id: UUID = Path(..., description="Task ID"),
    subtask_data: SubtaskCreate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Append a subtask to a task."""
    subtask = await SubtaskService(db).create_subtask(task_id, subtask_data)

    return ResponseSchema(
        status="success",
        message="Subtask created successfully",
        data=SubtaskResponse.model_validate(subtask).model_dump(),
    )


@router.post("/{task_id}/subtasks/reorder", response_model=ResponseSchema)
async def reorder_task_subtasks(
    task_id: UUID = Path(..., description="Task ID"),
    reorder: ReorderRequest = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Persist a new subtask order for a task."""
    result = await SubtaskService(db).reorder_subtasks(task_id, reorder.ids)

    return ResponseSchema(
        status="success" if not result.errors else "partial",
        message="Subtasks reordered successfully"
        if not result.errors
        else "Some subtasks could not be reordered",
        data=result.model_dump(),
    )


@router.get("/{task_id}/comments", response_model=ResponseSchema)
async def get_task_comments(
    task_id: UUID = Path(..., description="Task ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get the comments of a task, newest first."""
    comments = await CommentService(db).get_comments_list(task_id)

    return ResponseSchema(
        status="success",
        message="Comments retrieved successfully",
        data=[CommentResponse.model_validate(comment).model_dump() for comment in comments],
    )


@router.post("/{task_id}/comments", response_model=ResponseSchema, status_code=201)
async def create_task_comment(
    task_id: UUID = Path(..., description="Task ID"),
    comment_data: CommentCreate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Add a comment to a task."""
    comment = await CommentService(db).create_comment(task_id, comment_data)

    return ResponseSchema(
        status="success",
        message="Comment created successfully",
        data=CommentResponse.model_validate(comment).model_dump(),
    )
