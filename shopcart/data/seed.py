# shopcart/data/seed.py
from decimal import Decimal

from shopcart.data.database import SessionLocal, init_db
from shopcart.data.models import ProductModel
from shopcart.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "description": "Mechanical keyboard", "price": Decimal("199.99"), "number_of_stock": 25},
    {"name": "Mouse", "description": "Wireless mouse", "price": Decimal("49.50"), "number_of_stock": 40},
    {"name": "Monitor", "description": "27 inch IPS monitor", "price": Decimal("899.00"), "number_of_stock": 5},
]


def seed(session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        # nie nadpisujemy, seed tylko do pustej bazy
        if db.query(ProductModel).first():
            return 0
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.commit()
        return len(PRODUCTS)
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    init_db()
    logger.info(f"Seeded {seed()} products")
