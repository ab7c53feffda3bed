"""Import/export API controller."""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.transfer.service import TransferService
from app.exceptions.base import BadRequestError, BaseAppException
from app.exceptions.transfer import MissingFileError, UnsupportedFormatError
from app.schemas.transfer import (
    DuplicatePolicy,
    ExportFilter,
    ExportFormat,
    ImportSummary,
    ValidationReport,
)
from app.shared.dates import parse_datetime
from app.store.repository import coerce_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["transfer"],
)


@router.get("/export")
async def export_data(
    export_format: str = Query("json", alias="format"),
    project_id: str | None = Query(None, alias="projectId"),
    completed: str | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
):
    """Download tasks as JSON, CSV or Markdown."""
    try:
        export_as = ExportFormat(export_format)
    except ValueError:
        raise UnsupportedFormatError("Invalid format") from None

    try:
        filters = ExportFilter(
            project_id=coerce_id(project_id) if project_id else None,
            completed_only=completed == "true",
            start_date=parse_datetime(start_date),
            end_date=parse_datetime(end_date),
        )
    except ValueError as e:
        raise BadRequestError(str(e), error_code="INVALID_FILTER") from e
    if project_id and filters.project_id is None:
        raise BadRequestError("Invalid projectId", error_code="INVALID_FILTER")

    try:
        result = await TransferService(db).export(export_as, filters)
    except BaseAppException:
        raise
    except Exception as e:
        logger.exception("Failed to export data")
        raise BaseAppException("Failed to export data", error_code="EXPORT_FAILED") from e

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post("/import", response_model=ImportSummary)
async def import_data(
    file: UploadFile | None = File(None),
    duplicate_handling: DuplicatePolicy = Form(DuplicatePolicy.skip, alias="duplicateHandling"),
    db: AsyncSession = Depends(get_db),
):
    """Import a JSON export or a CSV task list."""
    if file is None:
        raise MissingFileError()

    try:
        content = await file.read()
        return await TransferService(db).import_file(file.filename, content, duplicate_handling)
    except BaseAppException:
        raise
    except Exception as e:
        logger.exception("Failed to import data")
        raise BaseAppException("Failed to import data", error_code="IMPORT_FAILED") from e


@router.post(
    "/import/validate",
    response_model=ValidationReport,
    response_model_exclude_none=True,
)
async def validate_import(
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
):
    """Check an import file without importing it."""
    if file is None:
        raise MissingFileError()

    try:
        content = await file.read()
        return TransferService(db).validate_file(file.filename, content)
    except Exception as e:
        logger.exception("Failed to validate file")
        raise BaseAppException("Failed to validate file", error_code="VALIDATION_FAILED") from e
