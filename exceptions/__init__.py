"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,

    # Backend
    BackendRequestError,

    # CSV import
    SupplyCSVParseError,
    UploadTooLargeError,

    # Supply batches
    EmptySupplyBatchError,
    MissingVendorError,
    LineItemIndexError,

    # Not found
    TemplateNotFoundError,
    SupplyRequestNotFoundError,
    InventoryItemNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",

    # Backend
    "BackendRequestError",

    # CSV import
    "SupplyCSVParseError",
    "UploadTooLargeError",

    # Supply batches
    "EmptySupplyBatchError",
    "MissingVendorError",
    "LineItemIndexError",

    # Not found
    "TemplateNotFoundError",
    "SupplyRequestNotFoundError",
    "InventoryItemNotFoundError",
]
