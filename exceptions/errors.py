"""
Custom exception classes for the application.

Every error renders as {"error": {code, message, details, timestamp}}.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "TEMPLATE_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# BACKEND ERRORS
# ===================

class BackendRequestError(ExternalServiceError):
    """Restaurant backend call failed or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        path: Optional[str] = None
    ):
        super().__init__(
            service="restaurant_backend",
            message=message,
            details={"backend_status": status, "path": path}
        )
        self.backend_status = status


# ===================
# CSV IMPORT ERRORS
# ===================

class SupplyCSVParseError(ValidationError):
    """Supply CSV could not be read or held no usable rows."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="SUPPLY_CSV_PARSE_ERROR",
            message=message,
            details=details
        )


class UploadTooLargeError(AppError):
    """Uploaded file exceeds the configured limit (413)."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"File is {size} bytes, limit is {limit} bytes",
            status_code=413,
            details={"size": size, "limit": limit}
        )


# ===================
# SUPPLY BATCH ERRORS
# ===================

class EmptySupplyBatchError(ValidationError):
    """No complete line item left to advance or submit."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="EMPTY_SUPPLY_BATCH",
            message=message,
            details=details
        )


class MissingVendorError(ValidationError):
    """Items were otherwise complete but have no vendor assigned."""

    def __init__(self, missing_count: int):
        plural = "s" if missing_count != 1 else ""
        super().__init__(
            code="SUPPLY_VENDOR_MISSING",
            message=f"Please add vendors for {missing_count} item{plural}",
            details={"missing_vendor_count": missing_count}
        )


class LineItemIndexError(ValidationError):
    """Edited line item index does not exist."""

    def __init__(self, index: int, size: int):
        super().__init__(
            code="LINE_ITEM_INDEX_OUT_OF_RANGE",
            message=f"No line item at position {index}",
            details={"index": index, "size": size}
        )


# ===================
# NOT FOUND ERRORS
# ===================

class TemplateNotFoundError(NotFoundError):
    """Supply request template not found."""

    def __init__(self, template_id: str):
        super().__init__(
            resource="Supply request template",
            identifier=template_id,
            code="TEMPLATE_NOT_FOUND"
        )


class SupplyRequestNotFoundError(NotFoundError):
    """Supply request not found."""

    def __init__(self, request_id: str):
        super().__init__(
            resource="Supply request",
            identifier=request_id,
            code="SUPPLY_REQUEST_NOT_FOUND"
        )


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item referenced by a resupply line not found."""

    def __init__(self, inventory_id: str):
        super().__init__(
            resource="Inventory item",
            identifier=inventory_id,
            code="INVENTORY_ITEM_NOT_FOUND"
        )
