#!/usr/bin/env python
"""Load demo products into the configured database.

This script:
1. Creates the product table if it is missing
2. Optionally removes every existing product
3. Inserts four fixed demo products plus N random ones

Usage:
    # Demo products only
    python scripts/seed_products.py

    # Start from an empty table and add 12 random products
    python scripts/seed_products.py --reset --random 12
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from product_api.infra.database import close_db_engine, create_schema, get_db_session
from product_api.infra.logging import get_logger, setup_logging
from product_api.services.catalog_seed import make_faker, seed_products
from product_api.services.product_service import ProductService


setup_logging()
logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with demo data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--random",
        type=int,
        default=0,
        metavar="N",
        help="Number of random products to add (default: 0)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all existing products first",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for repeatable data",
    )

    return parser.parse_args()


async def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.random < 0:
        print("Error: --random must be 0 or greater")
        return 1

    try:
        await create_schema()
        async with get_db_session() as session:
            products = await seed_products(
                ProductService(session),
                random_count=args.random,
                reset=args.reset,
                fake=make_faker(args.seed),
            )
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        return 1
    finally:
        await close_db_engine()

    print(f"\nSeeded {len(products)} products:")
    print("-" * 60)
    for product in products:
        state = "active" if product.is_active else "inactive"
        print(f"  #{product.id:<4} {product.name:<32} {product.price:>8.2f}  {product.category} ({state})")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
