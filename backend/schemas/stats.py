# backend/schemas/stats.py
from schemas.product import CamelBase


class StatsSummary(CamelBase):
    total_products: int
    total_value: int
    low_stock_count: int
    categories_count: int
