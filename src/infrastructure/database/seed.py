"""Deterministic demo catalog for local development."""
import random
import uuid
from decimal import Decimal

import structlog
from sqlalchemy import func, insert, select

from src.infrastructure.database.connection import Database
from src.infrastructure.database.models import ProductModel

logger = structlog.get_logger(__name__)

DEFAULT_PRODUCT_COUNT = 500
BATCH_SIZE = 100

_ADJECTIVES = [
    "Classic", "Compact", "Deluxe", "Ergonomic", "Handcrafted", "Lightweight",
    "Modern", "Portable", "Premium", "Rugged", "Sleek", "Vintage",
]
_NOUNS = [
    "Backpack", "Desk Lamp", "Headphones", "Kettle", "Keyboard", "Mug",
    "Notebook", "Sneakers", "Speaker", "Sunglasses", "Watch", "Water Bottle",
]
_CATEGORIES = ["Accessories", "Audio", "Home", "Office", "Outdoor", "Apparel"]


def build_demo_rows(count: int = DEFAULT_PRODUCT_COUNT, seed: int = 42) -> list[dict]:  # type: ignore[type-arg]
    rng = random.Random(seed)
    rows = []
    for index in range(count):
        adjective = rng.choice(_ADJECTIVES)
        noun = rng.choice(_NOUNS)
        product_id = str(uuid.UUID(int=rng.getrandbits(128), version=4))
        rows.append(
            {
                "id": product_id,
                "name": f"{adjective} {noun} {index + 1:03d}",
                "description": f"A {adjective.lower()} {noun.lower()} for everyday use.",
                "price": Decimal(rng.randint(199, 99999)) / 100,
                "image_url": f"https://picsum.photos/seed/{product_id[:8]}/400/300",
                "category": rng.choice(_CATEGORIES),
                "stock_quantity": rng.randint(0, 250),
            }
        )
    return rows


async def seed_products(database: Database, count: int = DEFAULT_PRODUCT_COUNT) -> int:
    """Insert demo products unless the table already has rows. Returns rows inserted."""
    async with database.session() as session:
        existing = (await session.execute(select(func.count()).select_from(ProductModel))).scalar_one()
        if existing:
            logger.info("seed_skipped", existing=existing)
            return 0

        rows = build_demo_rows(count)
        for start in range(0, len(rows), BATCH_SIZE):
            await session.execute(insert(ProductModel), rows[start : start + BATCH_SIZE])

    logger.info("seed_completed", inserted=len(rows))
    return len(rows)
