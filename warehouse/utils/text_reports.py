"""
Plain text renderings of the inventory.
Pure functions: they only build strings, the caller decides where they go.
"""
from typing import Iterable

from warehouse.models import AnalysisResult, CategoryNode, Product

PRODUCTS_REPORT_HEADER = "Product ID, Product Name, Product Quantity, Product Category"


def format_product_line(product: Product) -> str:
    return f"  Product ID: {product.product_id}, Name: {product.name}, Quantity: {product.quantity}"


def format_categories(categories: Iterable[CategoryNode]) -> str:
    """
    Every category in the order given (the index yields ascending names),
    each followed by its products in collection order.
    """
    lines = []
    for node in categories:
        lines.append(f"Category: {node.name}")
        lines.extend(format_product_line(product) for product in node.products)
    return "\n".join(lines)


def format_products_by_id(products: Iterable[Product]) -> str:
    """Header row, then one row per product in ascending ID order."""
    lines = [PRODUCTS_REPORT_HEADER]
    for product in sorted(products, key=lambda p: p.product_id):
        lines.append(f"{product.product_id}, {product.name}, {product.quantity}, {product.category}")
    return "\n".join(lines)


def format_analysis(result: AnalysisResult) -> str:
    lines = [
        f"Total quantity: {result.total_quantity}",
        f"Average quantity: {result.average_quantity:.2f}",
        f"Max stock product ID: {result.max_stock_product.product_id}, "
        f"Quantity: {result.max_stock_product.quantity}",
        f"Min stock product ID: {result.min_stock_product.product_id}, "
        f"Quantity: {result.min_stock_product.quantity}",
        "Low stock products:",
    ]
    lines.extend(
        f"Product ID: {p.product_id}, Quantity: {p.quantity}" for p in result.low_stock_products
    )
    lines.append("High stock products:")
    lines.extend(
        f"Product ID: {p.product_id}, Quantity: {p.quantity}" for p in result.high_stock_products
    )
    return "\n".join(lines)
