"""Transfer service: export, import and import validation."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.domains.ordering.service import OrderingService
from app.exceptions.base import BadRequestError
from app.exceptions.transfer import InvalidImportFileError, UnsupportedFormatError
from app.schemas.transfer import (
    DuplicatePolicy,
    ExportFilter,
    ExportFormat,
    ImportSummary,
    ValidationReport,
)
from app.store import EntityStore

from .exporter import ExportResult, TaskExporter
from .importer import TaskImporter
from .validator import ImportValidator, detect_format

logger = logging.getLogger(__name__)


def decode_upload(content: bytes) -> str:
    """Decode an uploaded file as UTF-8, tolerating a byte-order mark."""
    if len(content) > settings.max_import_file_size:
        raise BadRequestError(
            f"File exceeds the maximum import size of {settings.max_import_file_size} bytes",
            error_code="FILE_TOO_LARGE",
        )
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise InvalidImportFileError("File is not valid UTF-8 text") from e


class TransferService:
    """Service class for moving the task graph in and out of files."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = EntityStore(db)
        self.ordering = OrderingService(self.store)

    async def export(self, export_format: ExportFormat, filters: ExportFilter) -> ExportResult:
        return await TaskExporter(self.store).export(export_format, filters)

    async def import_file(
        self,
        filename: str | None,
        content: bytes,
        policy: DuplicatePolicy = DuplicatePolicy.skip,
    ) -> ImportSummary:
        """Import a JSON or CSV upload, chosen by the file extension."""
        file_format = detect_format(filename)
        if file_format is None:
            raise UnsupportedFormatError()

        text = decode_upload(content)
        importer = TaskImporter(self.store, policy=policy, ordering=self.ordering)
        logger.info("Importing %s as %s with duplicate handling %s", filename, file_format, policy.value)
        if file_format == "json":
            return await importer.import_json(text)
        return await importer.import_csv(text)

    def validate_file(self, filename: str | None, content: bytes) -> ValidationReport:
        """Dry run: report what an import of this file would see."""
        if detect_format(filename) is None:
            return ImportValidator().validate(filename, "")
        try:
            text = decode_upload(content)
        except BadRequestError as e:
            return ValidationReport(
                valid=False, format=detect_format(filename), errors=[e.message]
            )
        return ImportValidator().validate(filename, text)
