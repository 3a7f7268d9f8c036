"""Custom exceptions for catalog service operations."""


class CatalogServiceError(Exception):
    """Base exception for catalog service errors."""

    pass


class ValidationError(CatalogServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(CatalogServiceError):
    """Raised when a catalog node or join record is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidMoveError(CatalogServiceError):
    """Raised when a cross-container move has no usable destination parent."""

    def __init__(self, message: str, node_type: str | None = None):
        super().__init__(message)
        self.node_type = node_type


class NonEmptyContainerError(CatalogServiceError):
    """Raised when deleting a section or category that still owns children."""

    def __init__(self, resource_type: str, resource_id: str, child_count: int):
        message = (
            f"Cannot delete non-empty {resource_type.lower()} '{resource_id}' "
            f"({child_count} child node(s) remaining)"
        )
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.child_count = child_count


class DuplicateError(CatalogServiceError):
    """Raised when attempting to create a duplicate resource."""

    def __init__(self, resource_type: str, field: str, value: str):
        message = f"{resource_type} with {field} '{value}' already exists"
        super().__init__(message)
        self.resource_type = resource_type
        self.field = field
        self.value = value


class DatabaseError(CatalogServiceError):
    """Raised when a database operation fails.

    The surrounding transaction has been rolled back; nothing was persisted.
    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error
