# backend/utils/inventory_client.py
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from config import settings
from schemas.product import ProductCreate, ProductFilters, ProductResponse, ProductUpdate
from schemas.stats import StatsSummary
from utils.errors import first_error

logger = logging.getLogger(__name__)

LIST_PATH = "/products"
ITEM_PATH = "/products/{id}"
CATEGORIES_PATH = "/products/categories"
STATS_PATH = "/stats"

_product_list = TypeAdapter(List[ProductResponse])
_category_list = TypeAdapter(List[str])

CacheKey = Tuple[str, Tuple[Tuple[str, Any], ...]]


class ApiError(Exception):
    """Single failure type surfaced to views: a readable message plus the HTTP status, if any."""

    def __init__(self, message: str, status_code: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.field = field


def error_message(response: httpx.Response) -> str:
    if response.status_code == 404:
        return "Resource not found"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"API Error: {response.status_code}"


class InventoryClient:
    """Typed access to the inventory API for dashboard views.

    Reads are cached by (path, params) until a write invalidates them. Writes are
    sent once and never retried.
    """

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url or settings.API_BASE_URL, timeout=timeout)
        self._cache: Dict[CacheKey, Any] = {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.http.close()

    # ---- cache ----
    @staticmethod
    def cache_key(path: str, params: Optional[dict] = None) -> CacheKey:
        return path, tuple(sorted((params or {}).items()))

    def is_cached(self, path: str, params: Optional[dict] = None) -> bool:
        return self.cache_key(path, params) in self._cache

    def invalidate(self, path: str, params: Optional[dict] = None):
        """Drop one cached entry, or every entry under ``path`` when params is None."""
        if params is not None:
            self._cache.pop(self.cache_key(path, params), None)
            return
        for key in [k for k in self._cache if k[0] == path]:
            del self._cache[key]

    def _invalidate_collection(self):
        self.invalidate(LIST_PATH)
        self.invalidate(CATEGORIES_PATH)
        self.invalidate(STATS_PATH)

    # ---- transport ----
    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return self.http.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Inventory API request failed: {method} {url}: {e}")
            raise ApiError(f"Could not reach the inventory API: {e}") from e

    def _parse(self, response: httpx.Response, parse: Callable[[Any], Any]):
        if response.status_code >= 400:
            message = error_message(response)
            logger.error(f"Inventory API error {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)
        try:
            return parse(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected response from {response.request.url}: {e}")
            raise ApiError("Invalid response from the inventory API", status_code=response.status_code) from e

    def _read(self, key: CacheKey, url: str, params: dict, parse: Callable[[Any], Any]):
        if key in self._cache:
            return self._cache[key]
        response = self._send("GET", url, params=params or None)
        data = self._parse(response, parse)
        self._cache[key] = data
        return data

    @staticmethod
    def _payload(schema, data: Union[dict, Any]) -> dict:
        try:
            model = data if isinstance(data, schema) else schema.model_validate(data)
        except ValidationError as e:
            err = first_error(e.errors())
            raise ApiError(err["message"], field=err["field"]) from e
        return model.model_dump(mode="json", by_alias=True, exclude_unset=True)

    # ---- reads ----
    def list_products(self, search: Optional[str] = None, category: Optional[str] = None,
                      status: Optional[str] = None) -> List[ProductResponse]:
        filters = ProductFilters(search=search, category=category, status=status)
        params = filters.model_dump(exclude_none=True)
        return self._read(self.cache_key(LIST_PATH, params), LIST_PATH, params, _product_list.validate_python)

    def get_product(self, product_id: int) -> ProductResponse:
        key = self.cache_key(ITEM_PATH, {"id": product_id})
        url = ITEM_PATH.format(id=product_id)
        return self._read(key, url, {}, ProductResponse.model_validate)

    def get_stats(self) -> StatsSummary:
        return self._read(self.cache_key(STATS_PATH), STATS_PATH, {}, StatsSummary.model_validate)

    def get_categories(self) -> List[str]:
        return self._read(self.cache_key(CATEGORIES_PATH), CATEGORIES_PATH, {}, _category_list.validate_python)

    # ---- writes ----
    def create_product(self, data: Union[ProductCreate, dict]) -> ProductResponse:
        payload = self._payload(ProductCreate, data)
        response = self._send("POST", LIST_PATH, json=payload)
        product = self._parse(response, ProductResponse.model_validate)
        self._invalidate_collection()
        return product

    def update_product(self, product_id: int, data: Union[ProductUpdate, dict]) -> ProductResponse:
        payload = self._payload(ProductUpdate, data)
        response = self._send("PUT", ITEM_PATH.format(id=product_id), json=payload)
        product = self._parse(response, ProductResponse.model_validate)
        self._invalidate_collection()
        self.invalidate(ITEM_PATH, {"id": product_id})
        return product

    def delete_product(self, product_id: int) -> None:
        response = self._send("DELETE", ITEM_PATH.format(id=product_id))
        # Already gone counts as deleted
        if response.status_code >= 400 and response.status_code != 404:
            logger.error(f"Failed to delete product {product_id}: {response.status_code}")
            raise ApiError("Failed to delete product", status_code=response.status_code)
        self._invalidate_collection()
        self.invalidate(ITEM_PATH, {"id": product_id})
