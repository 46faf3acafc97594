import logging

from database import SessionLocal, init_db
from schemas.product import ProductCreate
from storage import DatabaseStorage, ProductStorage

logger = logging.getLogger(__name__)

# Demo catalogue inserted into an empty database. Prices are in cents.
SEED_PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "sku": "WH-001",
        "quantity": 45,
        "price": 12999,
        "category": "Electronics",
        "status": "in_stock",
        "description": "Premium noise-cancelling wireless headphones with 30h battery life.",
    },
    {
        "name": "Ergonomic Office Chair",
        "sku": "FUR-023",
        "quantity": 8,
        "price": 24900,
        "category": "Furniture",
        "status": "low_stock",
        "description": "Mesh back ergonomic chair with lumbar support.",
    },
    {
        "name": "Mechanical Keyboard",
        "sku": "TECH-105",
        "quantity": 120,
        "price": 8950,
        "category": "Electronics",
        "status": "in_stock",
        "description": "RGB mechanical keyboard with blue switches.",
    },
    {
        "name": "USB-C Hub",
        "sku": "ACC-004",
        "quantity": 0,
        "price": 4500,
        "category": "Accessories",
        "status": "out_of_stock",
        "description": "7-in-1 USB-C hub with HDMI and PD charging.",
    },
    {
        "name": "Monitor Stand",
        "sku": "ACC-012",
        "quantity": 25,
        "price": 3500,
        "category": "Accessories",
        "status": "in_stock",
        "description": "Adjustable aluminum monitor stand.",
    },
]


def seed_database(storage: ProductStorage) -> int:
    """Insert the demo products if the catalogue is empty. Returns the number inserted."""
    if storage.get_products():
        return 0

    for item in SEED_PRODUCTS:
        storage.create_product(ProductCreate(**item))

    logger.info(f"Database seeded with {len(SEED_PRODUCTS)} initial products")
    return len(SEED_PRODUCTS)


def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    inserted = seed_database(DatabaseStorage(SessionLocal))
    if not inserted:
        logger.info("Products table is not empty, nothing to seed")


if __name__ == "__main__":
    main()
