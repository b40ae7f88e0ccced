"""Error hierarchy for the catalog service.

Only store faults and missing resources travel as exceptions. Validation
failures and blocked deletions are ordinary results returned by the
pipelines and never reach this module.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""

    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_context(self) -> dict:
        """View context for the error page."""
        return {
            "title": "Not found" if self.http_status == 404 else "Error",
            "message": self.message,
            "code": self.code,
            "status": self.http_status,
        }


class NotFoundError(CatalogError):
    """Requested identifier has no matching document."""

    def __init__(self, entity: str):
        super().__init__(
            f"{entity} not found", "NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.entity = entity


class StoreFailure(CatalogError):
    """Persistence failed (connectivity, constraint, malformed identifier)."""

    def __init__(self, message: str, operation: str):
        super().__init__(message, "STORE_FAILURE", ErrorCategory.DATABASE, 500)
        self.operation = operation
