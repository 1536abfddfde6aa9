from __future__ import annotations

from typing import Optional, Protocol

from .models import ProductList


# ---- Errors surfaced to the UI ----

class CatalogFetchError(Exception):
    """A catalog or search query could not produce a product list.

    Covers transport failures and non-2xx responses. ``str(error)`` is the text
    shown to the shopper: the transport's message or the response status text.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogFormatError(CatalogFetchError):
    """The response arrived but its body is not a products document."""


# ---- Catalog access protocol ----

class CatalogAccess(Protocol):
    """
    Backend-agnostic contract for the storefront controller.

    - Implementations MUST NOT cache results: every call issues a fresh query.
    - Failures are raised as CatalogFetchError (or a subclass), never returned.
    """

    async def fetch_catalog(self) -> ProductList:
        """Return the unfiltered product catalog."""
        ...

    async def fetch_search(self, term: str) -> ProductList:
        """Return products matching ``term``; an empty term means the full catalog."""
        ...
