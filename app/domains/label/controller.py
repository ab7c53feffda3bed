"""Label API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.label.service import LabelService
from app.schemas.base import ResponseSchema
from app.schemas.label import LabelCreate, LabelResponse, LabelUpdate

router = APIRouter(
    prefix="/api/labels",
    tags=["labels"],
)


@router.get("/", response_model=ResponseSchema)
async def get_labels(
    project_id: UUID | None = Query(None, description="Only labels usable in this project"),
    db: AsyncSession = Depends(get_db),
):
    """Get labels sorted by name."""
    labels = await LabelService(db).get_labels_list(project_id=project_id)

    return ResponseSchema(
        status="success",
        message="Labels retrieved successfully",
        data=[LabelResponse.model_validate(label).model_dump() for label in labels],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_label(
    label_data: LabelCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new label."""
    label = await LabelService(db).create_label(label_data)

    return ResponseSchema(
        status="success",
        message="Label created successfully",
        data=LabelResponse.model_validate(label).model_dump(),
    )


@router.patch("/{label_id}", response_model=ResponseSchema)
async def update_label(
    label_id: UUID = Path(..., description="Label ID"),
    label_data: LabelUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update a label's name or color."""
    label = await LabelService(db).update_label(label_id, label_data)

    return ResponseSchema(
        status="success",
        message="Label updated successfully",
        data=LabelResponse.model_validate(label).model_dump(),
    )


@router.delete("/{label_id}", response_model=ResponseSchema)
async def delete_label(
    label_id: UUID = Path(..., description="Label ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a label."""
    success = await LabelService(db).delete_label(label_id)

    return ResponseSchema(
        status="success" if success else "error",
        message="Label deleted successfully" if success else "Failed to delete label",
        data=None,
    )
