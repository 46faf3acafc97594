# backend/models/product.py
from datetime import datetime, timezone
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum, CheckConstraint
from database import Base


# Advisory stock state stored with the product
class StockStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


# Products with fewer units than this count as low stock
LOW_STOCK_THRESHOLD = 10

# Upper bound of the Integer columns on PostgreSQL (int4)
MAX_DB_INT = 2_147_483_647


def stock_status_for(quantity: int) -> StockStatus:
    """Derive the stock status from quantity; the stored status is advisory only."""
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if quantity < LOW_STOCK_THRESHOLD:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Model Product
# A single inventory record. Price is kept in cents so sums stay exact.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    sku = Column(String, unique=True, nullable=False, index=True)

    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)
    price = Column(Integer, CheckConstraint("price >= 0"), nullable=False)
    category = Column(String, nullable=False, index=True)
    status = Column(
        Enum(StockStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=StockStatus.IN_STOCK,
    )

    description = Column(String, nullable=True)
    image_url = Column(String, nullable=True)

    last_updated = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @property
    def stock_status(self) -> StockStatus:
        return stock_status_for(self.quantity or 0)
