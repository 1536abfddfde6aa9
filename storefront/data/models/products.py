from __future__ import annotations

from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class Product(BaseModel):
    """Read-only projection of a product as served by the shop API."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(description="Product name, shown as plain text on the card")
    image_url: str = Field(description="Source of the card image")

    @model_validator(mode="before")
    @classmethod
    def _flatten_product_image(cls, data: Any) -> Any:
        # API shape: {"name": ..., "product_image": {"url": ...}, ...}
        if isinstance(data, dict) and "product_image" in data and "image_url" not in data:
            image = data.get("product_image")
            url = image.get("url") if isinstance(image, dict) else None
            return {**data, "image_url": url}
        return data


class ProductList(BaseModel):
    """Ordered products of a single catalog or search response."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    products: List[Product] = Field(description="Products in response order")

    def __len__(self) -> int:
        return len(self.products)


class ProductsDocument(BaseModel):
    """Envelope of a products response; entries are checked one by one."""
    model_config = ConfigDict(extra="ignore")

    products: List[Any] = Field(description="Raw product entries in response order")


def parse_product_list(payload: Any) -> Tuple[ProductList, List[int]]:
    """Build a ProductList from a products document.

    Entries that are not valid products are left out and their indices
    returned, so one broken entry does not hide the rest of the response.
    Raises ValidationError when the document itself has no products list.
    """
    document = ProductsDocument.model_validate(payload)
    products: List[Product] = []
    skipped: List[int] = []
    for index, entry in enumerate(document.products):
        try:
            products.append(Product.model_validate(entry))
        except ValidationError:
            skipped.append(index)
    return ProductList(products=products), skipped
