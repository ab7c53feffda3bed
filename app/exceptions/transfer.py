"""Import/export exceptions."""

from .base import BadRequestError


class UnsupportedFormatError(BadRequestError):
    """Raised when an export format or import file type is not supported."""

    def __init__(self, message: str = "Unsupported file format. Use JSON or CSV."):
        super().__init__(message=message, error_code="UNSUPPORTED_FORMAT")


class MissingFileError(BadRequestError):
    """Raised when an upload request carries no file."""

    def __init__(self, message: str = "No file provided"):
        super().__init__(message=message, error_code="MISSING_FILE")


class InvalidImportFileError(BadRequestError):
    """Raised when an import file is structurally invalid; nothing is imported."""

    def __init__(self, message: str = "Invalid import file"):
        super().__init__(message=message, error_code="INVALID_IMPORT_FILE")
