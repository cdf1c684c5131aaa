"""Catalog engine.

Hierarchy index, membership resolution for shop listings, category
deletion integrity guard, and pagination, plus the service and repository
that feed them.
"""

from catalog_api.catalog.hierarchy import HierarchyIndex, descendants_of
from catalog_api.catalog.integrity import (
    BlockReason,
    DeletionDecision,
    check_category_deletable,
)
from catalog_api.catalog.membership import CollectionScope, MembershipResolver
from catalog_api.catalog.pagination import PaginatedResult, PaginationParams, paginate
from catalog_api.catalog.repository import CatalogRepository, SqlCatalogRepository
from catalog_api.catalog.service import CatalogService, get_catalog_service
from catalog_api.catalog.snapshot import CatalogSnapshot

__all__ = [
    # Hierarchy
    "HierarchyIndex",
    "descendants_of",
    # Membership
    "CollectionScope",
    "MembershipResolver",
    # Integrity
    "BlockReason",
    "DeletionDecision",
    "check_category_deletable",
    # Pagination
    "PaginatedResult",
    "PaginationParams",
    "paginate",
    # Snapshot
    "CatalogSnapshot",
    # Repository
    "CatalogRepository",
    "SqlCatalogRepository",
    # Service
    "CatalogService",
    "get_catalog_service",
]
