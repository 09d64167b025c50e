"""Use cases for the bulk catalog upload (images, validation and commit)."""

from .commit_upload import process_bulk_upload
from .errors import (
    BulkUploadInputError,
    ProductStoreUnavailableError,
    SpreadsheetParseError,
)
from .upload_images import IncomingImage, upload_bulk_images
from .validate_upload import validate_bulk_upload
from .workbooks import (
    ERROR_REPORT_FILENAME,
    TEMPLATE_FILENAME,
    build_error_report_workbook,
    build_template_workbook,
)

__all__ = [
    "BulkUploadInputError",
    "ERROR_REPORT_FILENAME",
    "IncomingImage",
    "ProductStoreUnavailableError",
    "SpreadsheetParseError",
    "TEMPLATE_FILENAME",
    "build_error_report_workbook",
    "build_template_workbook",
    "process_bulk_upload",
    "upload_bulk_images",
    "validate_bulk_upload",
]
