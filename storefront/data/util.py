from __future__ import annotations

from typing import Literal, Optional

import httpx

from .backends.file_backend import FileCatalogAccess
from .backends.http_backend import HttpCatalogAccess
from .interface import CatalogAccess
from storefront.config import get_config


def get_catalog_access(
    kind: Optional[Literal["http", "file"]] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> CatalogAccess:
    config = get_config()
    kind = kind or config.catalog_backend
    if kind == "http":
        return HttpCatalogAccess(
            base_url=config.api_base_url,
            request_timeout=config.request_timeout,
            http_client=http_client,
        )
    if kind == "file":
        # Reads the configured JSON fixture
        return FileCatalogAccess(path=config.fixture_path)
    raise ValueError(f"Unknown catalog access kind: {kind}")
