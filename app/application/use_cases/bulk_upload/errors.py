"""Exceptions raised by the bulk upload use cases."""


class BulkUploadInputError(ValueError):
    """The submitted file cannot be processed at all; no rows were examined."""


class SpreadsheetParseError(BulkUploadInputError):
    """The workbook could not be read or lacks the expected structure."""


class ProductStoreUnavailableError(RuntimeError):
    """Existing products could not be loaded to check for duplicates."""


__all__ = [
    "BulkUploadInputError",
    "ProductStoreUnavailableError",
    "SpreadsheetParseError",
]
