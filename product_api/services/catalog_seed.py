"""Demo catalog data for local development."""

from faker import Faker
from sqlalchemy import delete

from product_api.infra.logging import get_logger
from product_api.models.product import Product
from product_api.schemas.product import ProductWrite
from product_api.services.product_service import ProductService

logger = get_logger(__name__)

DEMO_PRODUCTS: list[ProductWrite] = [
    ProductWrite(name="USB-C Cable 1m", description="Flexible USB-C cable", price=7.99, category="cables"),
    ProductWrite(name="Bluetooth Speaker", description="Compact speaker", price=29.90, category="audio"),
    ProductWrite(name="Gaming Mouse", description="Ergonomic mouse", price=39.00, category="accessories"),
    ProductWrite(name="Gaming Chair", description="Ergonomic gaming chair", price=249.00, category="furniture"),
]

RANDOM_CATEGORIES = ("audio", "cables", "accessories", "household")


def make_faker(seed: int | None = None) -> Faker:
    """Faker instance, seeded for repeatable data when ``seed`` is given."""
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)
    return fake


def random_product(fake: Faker) -> ProductWrite:
    """Build a plausible product; roughly 80% come out active."""
    return ProductWrite(
        name=" ".join(fake.words(nb=3)).capitalize(),
        description=fake.sentence(nb_words=12),
        price=round(fake.random.uniform(4, 199), 2),
        category=fake.random_element(RANDOM_CATEGORIES),
        is_active=fake.boolean(chance_of_getting_true=80),
    )


async def seed_products(
    service: ProductService,
    random_count: int = 0,
    reset: bool = False,
    fake: Faker | None = None,
) -> list[Product]:
    """Insert the demo products plus ``random_count`` generated ones.

    Args:
        service: Product service bound to an open session
        random_count: Number of extra random products
        reset: Delete every existing product first
        fake: Faker instance (seed it for repeatable data)

    Returns:
        The created products
    """
    fake = fake or make_faker()

    if reset:
        result = await service.session.execute(delete(Product))
        await service.session.commit()
        logger.info("Existing products removed", deleted=result.rowcount)

    payloads = DEMO_PRODUCTS + [random_product(fake) for _ in range(random_count)]
    created = [await service.create(payload) for payload in payloads]

    logger.info("Catalog seeded", created=len(created), random=random_count)
    return created
