# backend/schemas/product.py
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.product import MAX_DB_INT, StockStatus


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored in UTC; SQLite hands them back without tzinfo."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Wire format is camelCase; snake_case names are accepted on input as well
class CamelBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Schema for creating a new product
class ProductCreate(CamelBase):
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    quantity: int = Field(default=0, ge=0, le=MAX_DB_INT)
    price: int = Field(ge=0, le=MAX_DB_INT, description="Price in cents")
    category: str = Field(min_length=1)
    status: StockStatus = StockStatus.IN_STOCK
    description: Optional[str] = None
    image_url: Optional[str] = None


# Schema for partial product updates
class ProductUpdate(CamelBase):
    """Schema for PUT requests - all fields optional, only the ones sent are applied."""
    name: Optional[str] = Field(None, min_length=1)
    sku: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, ge=0, le=MAX_DB_INT)
    price: Optional[int] = Field(None, ge=0, le=MAX_DB_INT)
    category: Optional[str] = Field(None, min_length=1)
    status: Optional[StockStatus] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name", "sku", "quantity", "price", "category", "status", mode="before")
    @classmethod
    def _not_null(cls, value):
        # Omitting a field leaves it untouched; an explicit null is an error
        if value is None:
            raise ValueError("Field may not be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Full product representation including ID
class ProductResponse(CamelBase):
    id: int
    name: str
    sku: str
    quantity: int
    price: int
    category: str
    status: StockStatus
    description: Optional[str] = None
    image_url: Optional[str] = None
    last_updated: Optional[datetime] = None

    @field_validator("last_updated")
    @classmethod
    def _utc(cls, value):
        return as_utc(value)


# Query filters for the product list; None means "no filter"
class ProductFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None

    @field_validator("search", "category", "status", mode="before")
    @classmethod
    def _drop_all(cls, value):
        if value is None:
            return None
        value = str(value)
        if value == "" or value == "all":
            return None
        return value

    def is_empty(self) -> bool:
        return self.search is None and self.category is None and self.status is None
