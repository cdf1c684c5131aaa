"""Demo catalog used for local development.

Two root categories, three products, a small collection tree and one shop
that carries every collection.
"""

from typing import Any

import structlog

from catalog_api.catalog.service import CatalogService

logger = structlog.get_logger()


async def seed_demo_catalog(service: CatalogService) -> dict[str, Any]:
    """Seed the demo catalog into an empty store.

    Nothing is written when the store already holds products, categories,
    collections or shops.

    Args:
        service: Catalog service bound to an open session.

    Returns:
        Seeding result with counts.
    """
    existing = (
        await service.list_products()
        or await service.list_categories()
        or await service.list_collections()
        or await service.list_shops()
    )
    if existing:
        logger.info("Catalog not empty, skipping demo seed")
        return {"seeded": False, "categories": 0, "products": 0, "collections": 0, "shops": 0}

    category1 = await service.create_category("category1")
    category2 = await service.create_category("category2")

    product1 = await service.create_product("product1", "prod1", 20, [category1.id])
    product2 = await service.create_product("product2", "prod2", 25, [category1.id])
    product3 = await service.create_product("product3", "prod3", 30, [category2.id])

    collection1 = await service.create_collection(
        "collection1", product_ids=[product1.id, product3.id]
    )
    collection2 = await service.create_collection(
        "collection2", parent_id=collection1.id, product_ids=[product2.id]
    )
    collection3 = await service.create_collection(
        "collection3", product_ids=[product1.id, product2.id, product3.id]
    )

    await service.create_shop(
        "shop1", collection_ids=[collection1.id, collection2.id, collection3.id]
    )

    logger.info("Demo catalog seeded")
    return {"seeded": True, "categories": 2, "products": 3, "collections": 3, "shops": 1}
