from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..interface import CatalogAccess, CatalogFormatError
from ..models import ProductList, parse_product_list
from storefront.config import get_config
from storefront.logging import get_logger


def find_repo_root(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start`` (default: cwd) to the folder holding pyproject.toml."""
    current = start or Path.cwd()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return None


class FileCatalogAccess(CatalogAccess):
    """
    Local JSON-backed implementation for development without the shop API.
    - Reads the products document (same shape as the API) on every call.
    - Search is a case-insensitive substring match on the product name.
    """

    def __init__(self, path: str | Path = None) -> None:
        if path is None:
            path = get_config().fixture_path

        self.path = Path(path)

        # If the path is relative, make it relative to the repository root
        if not self.path.is_absolute():
            repo_root = find_repo_root()
            if repo_root:
                self.path = repo_root / self.path
            else:
                # Fallback to current directory
                self.path = Path.cwd() / self.path

        if not self.path.exists():
            raise FileNotFoundError(
                f"Products fixture not found: {self.path}\n"
                f"Please either:\n"
                f"  1. Set FIXTURE_PATH to a JSON file shaped like the shop API response\n"
                f"  2. Set CATALOG_BACKEND=http to use the remote shop API"
            )
        self.logger = get_logger(__name__)

    def _load(self) -> ProductList:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            products, skipped = parse_product_list(payload)
        except (ValueError, ValidationError) as e:
            raise CatalogFormatError(f"Invalid products fixture {self.path.name}: {e}") from e
        if skipped:
            self.logger.warning(f"Skipped invalid product entries at {skipped} in {self.path.name}")
        return products

    # ---------- interface implementation ----------

    async def fetch_catalog(self) -> ProductList:
        products = self._load()
        self.logger.debug(f"Loaded {len(products)} products from {self.path}")
        return products

    async def fetch_search(self, term: str) -> ProductList:
        if term == "":
            return await self.fetch_catalog()
        s = term.strip().lower()
        matches = [p for p in self._load().products if s in p.name.lower()]
        self.logger.debug(f"Search {term!r} matched {len(matches)} products")
        return ProductList(products=matches)
