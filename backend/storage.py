# backend/storage.py
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from models.log import Log
from models.product import Product, stock_status_for, utcnow, LOW_STOCK_THRESHOLD
from schemas.log import LogResponse
from schemas.product import ProductCreate, ProductFilters, ProductResponse, ProductUpdate
from schemas.stats import StatsSummary
from utils.audit import write_log

logger = logging.getLogger(__name__)


class DuplicateSkuError(Exception):
    """Raised when a product would share its SKU with another product."""

    def __init__(self, sku: str):
        super().__init__(f"Product with SKU '{sku}' already exists")
        self.sku = sku


# ---- HELPERS ----
def filter_products(products: Iterable[ProductResponse], filters: Optional[ProductFilters]) -> List[ProductResponse]:
    """Apply category, computed stock status and name/SKU search; all given filters must match.

    The stock status filter compares against the status derived from quantity,
    not the stored advisory ``status`` field.
    """
    if filters is None or filters.is_empty():
        return list(products)

    search = filters.search.lower() if filters.search else None
    out = []
    for p in products:
        if filters.category and p.category != filters.category:
            continue
        if filters.status and stock_status_for(p.quantity).value != filters.status:
            continue
        if search and search not in p.name.lower() and search not in p.sku.lower():
            continue
        out.append(p)
    return out


def compute_stats(products: Iterable[ProductResponse]) -> StatsSummary:
    total_products = 0
    total_value = 0
    low_stock_count = 0
    categories = set()
    for p in products:
        total_products += 1
        total_value += p.price * p.quantity
        if p.quantity < LOW_STOCK_THRESHOLD:
            low_stock_count += 1
        categories.add(p.category)

    return StatsSummary(
        total_products=total_products,
        total_value=total_value,
        low_stock_count=low_stock_count,
        categories_count=len(categories),
    )


class ProductStorage(ABC):
    """Persistence boundary for products. Routes only talk to this interface."""

    @abstractmethod
    def get_products(self, filters: Optional[ProductFilters] = None) -> List[ProductResponse]:
        ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[ProductResponse]:
        ...

    @abstractmethod
    def create_product(self, data: ProductCreate) -> ProductResponse:
        ...

    @abstractmethod
    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[ProductResponse]:
        ...

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        ...

    @abstractmethod
    def get_stats(self) -> StatsSummary:
        ...

    @abstractmethod
    def get_categories(self) -> List[str]:
        ...

    @abstractmethod
    def get_logs(self, action: Optional[str] = None, limit: int = 50) -> List[LogResponse]:
        ...


class DatabaseStorage(ProductStorage):
    """SQLAlchemy implementation; opens one session per operation."""

    def __init__(self, session_factory: sessionmaker, log_retention: Optional[int] = None):
        self.session_factory = session_factory
        # Newest audit rows to keep; None keeps everything
        self.log_retention = log_retention

    def _all(self, db) -> List[ProductResponse]:
        rows = db.query(Product).order_by(Product.id.desc()).all()
        return [ProductResponse.model_validate(p) for p in rows]

    def get_products(self, filters: Optional[ProductFilters] = None) -> List[ProductResponse]:
        with self.session_factory() as db:
            products = self._all(db)
        return filter_products(products, filters)

    def get_product(self, product_id: int) -> Optional[ProductResponse]:
        with self.session_factory() as db:
            product = db.query(Product).filter(Product.id == product_id).first()
            if not product:
                return None
            return ProductResponse.model_validate(product)

    def create_product(self, data: ProductCreate) -> ProductResponse:
        with self.session_factory() as db:
            product = Product(**data.model_dump(), last_updated=utcnow())
            db.add(product)
            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                if db.query(Product).filter(Product.sku == data.sku).first():
                    raise DuplicateSkuError(data.sku)
                raise

            write_log(
                db, action="PRODUCT_CREATE", resource="products",
                meta={"id": product.id, "sku": product.sku}, commit=False, keep=self.log_retention,
            )
            db.commit()
            db.refresh(product)
            logger.info(f"Created product {product.id} ({product.sku})")
            return ProductResponse.model_validate(product)

    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[ProductResponse]:
        changes = data.changes()
        with self.session_factory() as db:
            product = db.query(Product).filter(Product.id == product_id).first()
            if not product:
                return None

            for key, value in changes.items():
                setattr(product, key, value)
            product.last_updated = utcnow()

            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                sku = changes.get("sku")
                if sku and db.query(Product).filter(Product.sku == sku, Product.id != product_id).first():
                    raise DuplicateSkuError(sku)
                raise

            write_log(
                db, action="PRODUCT_UPDATE", resource="products",
                meta={"id": product_id, "fields": sorted(changes)}, commit=False, keep=self.log_retention,
            )
            db.commit()
            db.refresh(product)
            logger.info(f"Updated product {product_id}: {sorted(changes)}")
            return ProductResponse.model_validate(product)

    def delete_product(self, product_id: int) -> None:
        with self.session_factory() as db:
            deleted = db.query(Product).filter(Product.id == product_id).delete()
            if deleted:
                write_log(db, action="PRODUCT_DELETE", resource="products", meta={"id": product_id}, commit=False,
                          keep=self.log_retention)
                logger.info(f"Deleted product {product_id}")
            db.commit()

    def get_stats(self) -> StatsSummary:
        with self.session_factory() as db:
            products = self._all(db)
        return compute_stats(products)

    def get_categories(self) -> List[str]:
        with self.session_factory() as db:
            values = db.query(Product.category).distinct().filter(Product.category != None, Product.category != "").all()
        return sorted(v[0] for v in values)

    def get_logs(self, action: Optional[str] = None, limit: int = 50) -> List[LogResponse]:
        with self.session_factory() as db:
            query = db.query(Log)
            if action:
                query = query.filter(Log.action == action)
            rows = query.order_by(Log.id.desc()).limit(limit).all()
            return [LogResponse.model_validate(r) for r in rows]
