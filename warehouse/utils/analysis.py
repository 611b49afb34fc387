"""
Stock level analysis for one category's products.

Two passes over the collection: the first accumulates the total and
tracks the extremes, the second classifies each product against the
mean. Products exactly at the mean are neither low nor high.
The low and high lists come out in insertion order (oldest first).
"""
from typing import Iterable, Optional

from warehouse.exceptions import EmptyInventoryError
from warehouse.models import AnalysisResult, Product


def analyze_products(products: Iterable[Product], category: Optional[str] = None) -> AnalysisResult:
    """
    Summarize stock levels.

    Args:
        products: Collection (or any iterable) of products, traversed twice
        category: Name used in the error message when there is nothing to analyze

    Returns:
        AnalysisResult whose product entries are copies, independent of
        the analyzed collection

    Raises:
        EmptyInventoryError: the collection has no products
    """
    products = list(products)

    total_quantity = 0
    count = 0
    max_product = None
    min_product = None

    for product in products:
        total_quantity += product.quantity
        count += 1
        # Strict comparisons keep the first product seen on ties
        if max_product is None or product.quantity > max_product.quantity:
            max_product = product
        if min_product is None or product.quantity < min_product.quantity:
            min_product = product

    if count == 0:
        raise EmptyInventoryError(category)

    average_quantity = total_quantity / count

    low_stock = []
    high_stock = []
    for product in products:
        if product.quantity < average_quantity:
            low_stock.append(product.copy())
        elif product.quantity > average_quantity:
            high_stock.append(product.copy())

    # Reported oldest insertion first, the reverse of traversal order
    low_stock.reverse()
    high_stock.reverse()

    return AnalysisResult(
        total_quantity=total_quantity,
        average_quantity=average_quantity,
        product_count=count,
        max_stock_product=max_product.copy(),
        min_stock_product=min_product.copy(),
        low_stock_products=low_stock,
        high_stock_products=high_stock,
    )
