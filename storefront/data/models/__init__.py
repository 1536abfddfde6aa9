from .products import Product, ProductList, ProductsDocument, parse_product_list

__all__ = [
    "Product",
    "ProductList",
    "ProductsDocument",
    "parse_product_list",
]
