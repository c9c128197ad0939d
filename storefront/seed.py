# storefront/seed.py
"""
Replace the catalog with the demo products.

Usage:

    python -m storefront.seed

Each product gets a random stock between 10 and 100.
"""
import logging
import random
from collections import Counter

from storefront.core.config import Settings, get_settings
from storefront.database import Database
from storefront.demo_products import DEMO_PRODUCTS
from storefront.models.product import CATEGORIES, Product
from storefront.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)

MIN_STOCK = 10
MAX_STOCK = 100


def seed_products(
    database: Database,
    rows: list[dict] = DEMO_PRODUCTS,
    rng: random.Random | None = None,
) -> list[Product]:
    """
    Delete every product, insert `rows` with random stock, and
    return the inserted products.
    """
    rng = rng or random.Random()
    repo = ProductRepository()

    with database.session() as session:
        removed = repo.delete_all(session)
        logger.info("Cleared %d existing product(s)", removed)

        products = [
            Product(**row, stock=rng.randint(MIN_STOCK, MAX_STOCK)) for row in rows
        ]
        products = repo.create_many(session, products)
        logger.info("Seeded %d product(s)", len(products))

        counts = Counter(p.category for p in products)
        for category in CATEGORIES:
            logger.info("  %s: %d", category, counts.get(category, 0))

    return products


def main(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    database = Database(settings)
    try:
        database.create_db_and_tables()
        seed_products(database)
    except Exception:
        logger.exception("Seeding failed")
        raise
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
