# backend/routes/stats.py

from fastapi import APIRouter, Depends

from routes.deps import get_storage
from schemas.stats import StatsSummary
from storage import ProductStorage

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)


# === Dashboard Summary ===

@router.get("", response_model=StatsSummary)
def get_stats_summary(storage: ProductStorage = Depends(get_storage)):
    # Product count, stock value in cents, low stock count and distinct categories
    return storage.get_stats()
