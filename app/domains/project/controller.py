"""Project API controller with FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.project.service import ProjectService
from app.domains.task.service import TaskService
from app.schemas.base import ResponseSchema
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
)


@router.get("/", response_model=ResponseSchema)
async def get_projects(db: AsyncSession = Depends(get_db)):
    """Get all projects with their task counts."""

    service = ProjectService(db)
    projects = await service.get_projects_list()

    return ResponseSchema(
        status="success",
        message="Projects retrieved successfully",
        data=[ProjectResponse.model_validate(project).model_dump() for project in projects],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new project."""

    service = ProjectService(db)
    project = await service.create_project(project_data)

    response = ProjectResponse.model_validate(project)
    response.task_count = 0
    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=response.model_dump(),
    )


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific project by ID."""

    service = ProjectService(db)
    project = await service.get_project_with_task_count(project_id)

    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )


@router.patch("/{project_id}", response_model=ResponseSchema)
async def update_project(
    project_id: UUID = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific project."""

    service = ProjectService(db)
    await service.update_project(project_id, project_data)
    project = await service.get_project_with_task_count(project_id)

    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )


@router.patch("/{project_id}/favorite", response_model=ResponseSchema)
async def toggle_project_favorite(
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Toggle the favorite flag of a project."""

    service = ProjectService(db)
    project = await service.toggle_favorite(project_id)

    return ResponseSchema(
        status="success",
        message="Project favorite toggled successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project and everything it owns."""

    service = ProjectService(db)
    success = await service.delete_project(project_id)

    return ResponseSchema(
        status="success" if success else "error",
        message="Project deleted successfully" if success else "Failed to delete project",
        data=None,
    )


@router.get("/{project_id}/tasks", response_model=ResponseSchema)
async def get_project_tasks(
    project_id: UUID = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get all tasks of a project in display order."""

    await ProjectService(db).get_project(project_id)
    tasks = await TaskService(db).get_tasks_list(project_id=project_id)

    return ResponseSchema(
        status="success",
        message="Project tasks retrieved successfully",
        data=[task.model_dump() for task in tasks],
    )
