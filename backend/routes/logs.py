# backend/routes/logs.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from routes.deps import get_storage
from schemas.log import LogResponse
from storage import ProductStorage

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get("", response_model=List[LogResponse])
def get_logs(
    action: Optional[str] = Query(None, description="Filter by action, e.g. PRODUCT_CREATE"),
    limit: int = Query(50, ge=1, le=500),
    storage: ProductStorage = Depends(get_storage),
):
    """Most recent audit entries first."""
    return storage.get_logs(action=action, limit=limit)
