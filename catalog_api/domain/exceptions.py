"""Domain exceptions.

All domain-level errors that represent business rule violations or
failures of the storage collaborator.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(DomainError):
    """Raised when a required entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Category", "Shop").
            entity_id: ID of the missing entity.
        """
        super().__init__(
            f"{entity_type} {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id

    @property
    def error_code(self) -> str:
        """Machine-readable error code (e.g. CATEGORY_NOT_FOUND)."""
        return f"{self.entity_type.upper()}_NOT_FOUND"


# ============================================================================
# Category Integrity Errors
# ============================================================================


class CategoryIntegrityError(DomainError):
    """Base class for category deletion conflicts."""

    error_code = "CATEGORY_CONFLICT"


class CategoryInUseError(CategoryIntegrityError):
    """Raised when a product references the category being deleted."""

    error_code = "CATEGORY_IN_USE"

    def __init__(self, category_id: int) -> None:
        """Initialize category in use error.

        Args:
            category_id: ID of the category that was to be deleted.
        """
        super().__init__(
            f"Category {category_id} is in use by products",
            details={"category_id": category_id},
        )
        self.category_id = category_id


class DescendantCategoryInUseError(CategoryIntegrityError):
    """Raised when a product references a descendant of the category being deleted."""

    error_code = "DESCENDANT_CATEGORY_IN_USE"

    def __init__(self, category_id: int, descendant_id: int | None = None) -> None:
        """Initialize descendant category in use error.

        Args:
            category_id: ID of the category that was to be deleted.
            descendant_id: First referenced descendant found, if known.
        """
        super().__init__(
            f"A descendant of category {category_id} is in use by products",
            details={"category_id": category_id, "descendant_id": descendant_id},
        )
        self.category_id = category_id
        self.descendant_id = descendant_id


# ============================================================================
# Storage Errors
# ============================================================================


class RepositoryError(DomainError):
    """Raised when the storage collaborator fails."""

    error_code = "INTERNAL_ERROR"
