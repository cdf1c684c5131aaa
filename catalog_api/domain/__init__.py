"""Domain layer: catalog snapshot entities and exceptions."""

from catalog_api.domain.entities import Category, Collection, Product, Shop
from catalog_api.domain.exceptions import (
    CategoryInUseError,
    CategoryIntegrityError,
    DescendantCategoryInUseError,
    DomainError,
    NotFoundError,
    RepositoryError,
)

__all__ = [
    # Entities
    "Category",
    "Collection",
    "Product",
    "Shop",
    # Exceptions
    "CategoryInUseError",
    "CategoryIntegrityError",
    "DescendantCategoryInUseError",
    "DomainError",
    "NotFoundError",
    "RepositoryError",
]
