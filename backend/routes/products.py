# backend/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from routes.deps import get_storage
from schemas.product import ProductCreate, ProductFilters, ProductResponse, ProductUpdate
from storage import DuplicateSkuError, ProductStorage

router = APIRouter(prefix="/products", tags=["Products"])


def _conflict(err: DuplicateSkuError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"message": str(err), "field": "sku"})


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=List[ProductResponse])
def list_products(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="in_stock / low_stock / out_of_stock, computed from quantity"),
    storage: ProductStorage = Depends(get_storage),
):
    filters = ProductFilters(search=search, category=category, status=status)
    return storage.get_products(filters)


@router.get("/categories", response_model=List[str])
def list_categories(storage: ProductStorage = Depends(get_storage)):
    return storage.get_categories()


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, storage: ProductStorage = Depends(get_storage)):
    product = storage.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(payload: ProductCreate, storage: ProductStorage = Depends(get_storage)):
    try:
        return storage.create_product(payload)
    except DuplicateSkuError as err:
        return _conflict(err)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(product_id: int, payload: ProductUpdate, storage: ProductStorage = Depends(get_storage)):
    try:
        product = storage.update_product(product_id, payload)
    except DuplicateSkuError as err:
        return _conflict(err)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, storage: ProductStorage = Depends(get_storage)):
    storage.delete_product(product_id)
    return Response(status_code=204)
