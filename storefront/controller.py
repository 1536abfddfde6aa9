from __future__ import annotations

import time
from typing import Awaitable, Callable, Optional

from storefront.config import get_config
from storefront.data.interface import CatalogAccess, CatalogFetchError
from storefront.data.models import Product, ProductList
from storefront.logging import get_logger
from storefront.ui.page import Element, StorefrontPage

ERROR_PREFIX = "There was a problem fetching the products from our database, please try again soon!"


def navbar_alpha(scroll_y: float, hero_height: float, fade_distance: float = 300) -> float:
    """Navbar background opacity for a scroll offset. Not clamped."""
    return (scroll_y - hero_height / 2) / fade_distance


def format_alpha(alpha: float) -> str:
    return f"{alpha:.10g}"


class StorefrontController:
    """Fetches products for the page and keeps the products region in sync.

    Element handles are passed in; nothing is looked up from a global page.
    Every fetch takes a sequence number and only the latest one may touch the
    view, so a slow response can never overwrite a newer one.
    """

    def __init__(
        self,
        container: Element,
        search_box: Element,
        navbar: Element,
        hero: Element,
        catalog: CatalogAccess,
        max_visible_products: Optional[int] = None,
        fade_distance: Optional[float] = None,
        error_timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        handles = {"container": container, "search_box": search_box, "navbar": navbar, "hero": hero}
        missing = [name for name, handle in handles.items() if handle is None]
        if missing:
            raise ValueError(f"Missing page elements: {', '.join(missing)}")

        config = get_config()
        self.container = container
        self.search_box = search_box
        self.navbar = navbar
        self.hero = hero
        self.catalog = catalog
        self.max_visible_products = max_visible_products if max_visible_products is not None else config.max_visible_products
        self.fade_distance = fade_distance if fade_distance is not None else config.navbar_fade_distance
        self.error_timeout_seconds = (
            error_timeout_seconds if error_timeout_seconds is not None else config.error_timeout_seconds
        )
        self.clock = clock
        self.logger = get_logger(__name__)

        self._latest_seq = 0
        self._error_banner: Optional[Element] = None
        self._error_shown_at: Optional[float] = None

    @classmethod
    def from_page(cls, page: StorefrontPage, catalog: CatalogAccess, **kwargs) -> "StorefrontController":
        return cls(
            container=page.container,
            search_box=page.search_box,
            navbar=page.navbar,
            hero=page.hero,
            catalog=catalog,
            **kwargs,
        )

    # ---------- triggers ----------

    async def load(self) -> bool:
        """Page load: show the full catalog."""
        return await self._fetch_and_apply("catalog", self.catalog.fetch_catalog)

    async def search(self, term: str) -> bool:
        """Single entry point for search; an empty term shows the full catalog."""
        return await self._fetch_and_apply(f"search {term!r}", lambda: self.catalog.fetch_search(term))

    async def on_search_commit(self, text: str) -> bool:
        self.search_box.attrs["value"] = text
        return await self.search(text)

    async def on_search_input(self, text: str) -> Optional[bool]:
        self.search_box.attrs["value"] = text
        if text == "":
            return await self.search("")
        return None

    def on_scroll(self, scroll_y: float) -> float:
        alpha = navbar_alpha(scroll_y, self.hero.client_height, self.fade_distance)
        self.navbar.style["background-color"] = f"rgba(0,0,0,{format_alpha(alpha)})"
        return alpha

    # ---------- fetch pipeline ----------

    async def _fetch_and_apply(self, label: str, fetch: Callable[[], Awaitable[ProductList]]) -> bool:
        self._latest_seq += 1
        seq = self._latest_seq
        try:
            products = await fetch()
        except CatalogFetchError as error:
            if seq != self._latest_seq:
                self.logger.debug(f"Dropping stale failure of {label} (#{seq}, latest #{self._latest_seq})")
                return False
            self.logger.warning(f"{label} failed: {error}")
            self.report_error(error)
            return False

        if seq != self._latest_seq:
            self.logger.debug(f"Dropping stale response of {label} (#{seq}, latest #{self._latest_seq})")
            return False
        self.render_products(products)
        return True

    # ---------- rendering ----------

    def render_products(self, product_list: ProductList) -> None:
        visible_count = min(self.max_visible_products, len(product_list))

        row = self.card_holder
        if row is None:
            row = Element("div", classes=["row"])
            self.container.append(row)
        else:
            row.clear()

        for product in product_list.products[:visible_count]:
            row.append(self._build_card(product))
        self.logger.debug(f"Rendered {visible_count} of {len(product_list)} products")

    @property
    def card_holder(self) -> Optional[Element]:
        return next((c for c in self.container.children if c.matches(".row")), None)

    @staticmethod
    def _build_card(product: Product) -> Element:
        title = Element("p", classes=["card-title-shoe"], text=product.name)
        body = Element("div", classes=["card-body"], children=[title])
        img = Element("img", classes=["card-img-top"], attrs={"src": product.image_url, "alt": product.name})
        card = Element("div", classes=["card", "mb-3"], children=[img, body])
        return Element("div", classes=["col-md-6", "col-lg-4"], children=[card])

    # ---------- error slot ----------

    @property
    def error_banner(self) -> Optional[Element]:
        return self._error_banner

    def report_error(self, error: BaseException) -> None:
        """Show ``error`` in the error slot, replacing any banner already shown."""
        banner = Element(
            "div",
            classes=["alert", "alert-danger"],
            attrs={"role": "alert"},
            text=ERROR_PREFIX,
            children=[Element("br"), Element("span", classes=["alert-detail"], text=f" {error}")],
        )
        if self._error_banner is not None:
            self.container.remove(self._error_banner)
        self.container.append(banner)
        self._error_banner = banner
        self._error_shown_at = self.clock()

    def dismiss_error(self) -> None:
        if self._error_banner is not None:
            self.container.remove(self._error_banner)
        self._error_banner = None
        self._error_shown_at = None

    def expire_error(self, now: Optional[float] = None) -> bool:
        """Dismiss the banner once it has been visible for error_timeout_seconds."""
        if self._error_banner is None:
            return False
        now = self.clock() if now is None else now
        if now - self._error_shown_at < self.error_timeout_seconds:
            return False
        self.dismiss_error()
        return True

    # ---------- styling ----------

    def navbar_css(self, selector: str = ".navbar") -> str:
        """The on_scroll mapping as a CSS scroll-driven animation, for the browser to run."""
        height = self.hero.client_height
        start = height / 2
        end = start + self.fade_distance
        return (
            "@keyframes navbar-fade {"
            f" from {{ background-color: rgba(0,0,0,{format_alpha(navbar_alpha(start, height, self.fade_distance))}); }}"
            f" to {{ background-color: rgba(0,0,0,{format_alpha(navbar_alpha(end, height, self.fade_distance))}); }}"
            " }\n"
            f"{selector} {{ animation: navbar-fade linear both; animation-timeline: scroll(nearest);"
            f" animation-range: {format_alpha(start)}px {format_alpha(end)}px; }}"
        )
