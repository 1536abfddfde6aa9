from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ..interface import CatalogAccess, CatalogFetchError, CatalogFormatError
from ..models import ProductList, parse_product_list
from storefront.config import get_config
from storefront.logging import get_logger

CATALOG_PATH = "/shop/products.json"
SEARCH_PATH = "/shop/products/search.json"
MEDIA_PARAMS = {"media_file": "true"}


class HttpCatalogAccess(CatalogAccess):
    """
    Shop API implementation over httpx.
    - One GET per call, no retries and no caching.
    - ``request_timeout=None`` leaves requests without a timeout.
    - Pass ``http_client`` to share a client (or a mocked transport in tests);
      otherwise a short-lived AsyncClient is opened per request.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        request_timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        config = get_config()
        self.base_url = (base_url or config.api_base_url).rstrip("/")
        self.request_timeout = request_timeout if request_timeout is not None else config.request_timeout
        self._client = http_client
        self.logger = get_logger(__name__)

    # ---------- interface implementation ----------

    async def fetch_catalog(self) -> ProductList:
        return await self._get_products(CATALOG_PATH, dict(MEDIA_PARAMS))

    async def fetch_search(self, term: str) -> ProductList:
        if term == "":
            return await self.fetch_catalog()
        return await self._get_products(SEARCH_PATH, {"q": term, **MEDIA_PARAMS})

    # ---------- request helpers ----------

    async def _get_products(self, path: str, params: Dict[str, str]) -> ProductList:
        url = f"{self.base_url}{path}"
        t0 = time.perf_counter()
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.request_timeout)) as client:
                    response = await client.get(url, params=params)
        except httpx.RequestError as e:
            self.logger.warning(f"GET {url} failed: {e!r}")
            raise CatalogFetchError(str(e) or e.__class__.__name__) from e

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        self.logger.info(f"GET {response.request.url} -> {response.status_code} in {elapsed_ms:.1f} ms")

        if not response.is_success:
            raise CatalogFetchError(response.reason_phrase, status_code=response.status_code)

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> ProductList:
        try:
            payload: Any = response.json()
        except ValueError as e:
            raise CatalogFormatError(f"Response body is not valid JSON: {e}") from e
        try:
            products, skipped = parse_product_list(payload)
        except ValidationError as e:
            raise CatalogFormatError(
                f"Unexpected products document ({e.error_count()} validation errors)"
            ) from e
        if skipped:
            self.logger.warning(f"Skipped invalid product entries at {skipped} from {response.request.url}")
        return products
