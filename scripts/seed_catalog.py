#!/usr/bin/env python3
"""Seed demo catalog script.

Creates the database tables and seeds the demo catalog (categories,
products, a collection tree and one shop) into an empty store.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --reset
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_api.catalog.demo import seed_demo_catalog
from catalog_api.catalog.repository import SqlCatalogRepository
from catalog_api.catalog.service import CatalogService
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import (
    async_session_factory,
    create_tables,
    drop_tables,
    engine,
)


async def seed(reset: bool) -> dict:
    """Create tables and seed the demo catalog.

    Args:
        reset: Whether to drop existing tables first.

    Returns:
        Seeding result.
    """
    if reset:
        await drop_tables()
    await create_tables()

    async with async_session_factory() as session:
        result = await seed_demo_catalog(CatalogService(SqlCatalogRepository(session)))
        await session.commit()

    await engine.dispose()
    return result


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the demo product catalog",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all catalog tables before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Database: {settings.database_url}")
    print(f"Reset: {args.reset}")
    print()

    result = await seed(args.reset)

    if result["seeded"]:
        print(f"  ✓ Categories: {result['categories']}")
        print(f"  ✓ Products: {result['products']}")
        print(f"  ✓ Collections: {result['collections']}")
        print(f"  ✓ Shops: {result['shops']}")
    else:
        print("  - Catalog not empty, nothing seeded (use --reset to start over)")

    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
