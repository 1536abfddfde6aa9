import pytest
from pydantic import ValidationError

from storefront.data.models import Product, ProductList, parse_product_list


def test_product_reads_nested_image_url_and_ignores_extras():
    product = Product.model_validate(
        {"name": "A", "product_image": {"url": "u1", "thumb": "t1"}, "price": 100, "id": 7}
    )
    assert product.name == "A"
    assert product.image_url == "u1"


def test_product_is_read_only():
    product = Product(name="A", image_url="u1")
    with pytest.raises(ValidationError):
        product.name = "B"


def test_product_without_image_is_rejected():
    with pytest.raises(ValidationError):
        Product.model_validate({"name": "A", "product_image": None})


def test_product_list_preserves_order_and_length():
    products = ProductList.model_validate({
        "products": [{"name": n, "product_image": {"url": n.lower()}} for n in "CAB"]
    })
    assert len(products) == 3
    assert [p.name for p in products.products] == ["C", "A", "B"]


def test_empty_product_list_is_valid():
    assert len(ProductList.model_validate({"products": []})) == 0


def test_parse_product_list_skips_invalid_entries():
    products, skipped = parse_product_list({
        "products": [
            {"name": "A", "product_image": {"url": "u1"}},
            {"name": "B", "product_image": None},
            {"product_image": {"url": "u3"}},
            {"name": "D", "product_image": {"url": "u4"}},
        ]
    })
    assert [p.name for p in products.products] == ["A", "D"]
    assert skipped == [1, 2]


def test_parse_product_list_requires_products_key():
    with pytest.raises(ValidationError):
        parse_product_list({"items": []})
