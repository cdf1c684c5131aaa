"""Pagination of ordered listings.

Windows an already filtered, already sorted sequence into pages.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
    """

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items in the requested window.
        page: Requested page.
        limit: Items per page.
        total_count: Size of the full sequence.
    """

    items: list[T]
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total_count + self.limit - 1) // self.limit

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1

    @classmethod
    def empty(cls, params: PaginationParams) -> "PaginatedResult[T]":
        """Create an empty result for the given parameters."""
        return cls(items=[], page=params.page, limit=params.limit, total_count=0)


def paginate(items: Sequence[T], params: PaginationParams) -> PaginatedResult[T]:
    """Cut one page out of an ordered sequence.

    The window bounds are clamped into ``[0, len(items)]``, so a page past
    the end yields an empty window rather than an error.

    Args:
        items: Full ordered sequence.
        params: Page and limit.

    Returns:
        The window plus page metadata.
    """
    total_count = len(items)
    start = min(params.offset, total_count)
    end = min(start + params.limit, total_count)

    return PaginatedResult(
        items=list(items[start:end]),
        page=params.page,
        limit=params.limit,
        total_count=total_count,
    )
