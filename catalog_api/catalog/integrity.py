"""Category deletion integrity guard.

A category may only be deleted together with its whole subtree, and only
when no product references the category or any of its descendants.

Collection deletion has no equivalent guard: collections can be removed
while shops or child collections still reference them.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

import structlog

from catalog_api.catalog.hierarchy import HierarchyIndex
from catalog_api.domain.entities import Category, Product
from catalog_api.domain.exceptions import (
    CategoryInUseError,
    DescendantCategoryInUseError,
    DomainError,
    NotFoundError,
)

logger = structlog.get_logger()


class BlockReason(str, Enum):
    """Why a category deletion was refused."""

    SELF = "self"
    DESCENDANT = "descendant"


@dataclass(frozen=True)
class DeletionDecision:
    """Outcome of a category deletion check.

    Exactly one of the following holds:

    - ``ok``: ``ids_to_delete`` holds the category and all its descendants,
      to be removed in one transaction.
    - ``blocked``: a product references the category (``SELF``) or one of
      its descendants (``DESCENDANT``). Nothing may be removed.
    - ``not_found``: the category does not exist.

    Attributes:
        category_id: Category the check was run for.
        ids_to_delete: IDs to remove atomically (empty unless ok).
        blocked: Block reason, if any.
        not_found: Whether the category is missing.
        blocking_category_id: Referenced category that caused the block.
        blocking_product_ids: Products holding the blocking references.
    """

    category_id: int
    ids_to_delete: frozenset[int] = field(default_factory=frozenset)
    blocked: BlockReason | None = None
    not_found: bool = False
    blocking_category_id: int | None = None
    blocking_product_ids: tuple[int, ...] = ()

    @property
    def ok(self) -> bool:
        """Check if the deletion is permitted."""
        return not self.not_found and self.blocked is None

    def to_error(self) -> DomainError | None:
        """Convert a refused decision into the matching domain error.

        Returns:
            The error to raise, or None when the deletion is permitted.
        """
        if self.not_found:
            return NotFoundError("Category", self.category_id)
        if self.blocked is BlockReason.SELF:
            return CategoryInUseError(self.category_id)
        if self.blocked is BlockReason.DESCENDANT:
            return DescendantCategoryInUseError(self.category_id, self.blocking_category_id)
        return None


def check_category_deletable(
    category_id: int,
    categories: Iterable[Category],
    products: Iterable[Product],
) -> DeletionDecision:
    """Decide whether a category subtree may be deleted.

    A direct reference to the category wins over a descendant reference,
    regardless of the order in which products are scanned.

    Args:
        category_id: Category to delete.
        categories: Snapshot of all categories.
        products: Snapshot of all products.

    Returns:
        The deletion decision.
    """
    index = HierarchyIndex(categories)
    if category_id not in index:
        return DeletionDecision(category_id=category_id, not_found=True)

    subtree = index.closure(category_id)

    direct_users: list[int] = []
    descendant_refs: dict[int, list[int]] = {}
    for product in products:
        referenced = product.category_ids & subtree
        if not referenced:
            continue
        if category_id in referenced:
            direct_users.append(product.id)
        for descendant_id in referenced - {category_id}:
            descendant_refs.setdefault(descendant_id, []).append(product.id)

    if direct_users:
        logger.debug(
            "Category deletion blocked by direct use",
            category_id=category_id,
            product_ids=sorted(direct_users),
        )
        return DeletionDecision(
            category_id=category_id,
            blocked=BlockReason.SELF,
            blocking_category_id=category_id,
            blocking_product_ids=tuple(sorted(direct_users)),
        )

    if descendant_refs:
        descendant_id = min(descendant_refs)
        logger.debug(
            "Category deletion blocked by descendant use",
            category_id=category_id,
            descendant_id=descendant_id,
        )
        return DeletionDecision(
            category_id=category_id,
            blocked=BlockReason.DESCENDANT,
            blocking_category_id=descendant_id,
            blocking_product_ids=tuple(sorted(descendant_refs[descendant_id])),
        )

    return DeletionDecision(category_id=category_id, ids_to_delete=frozenset(subtree))
