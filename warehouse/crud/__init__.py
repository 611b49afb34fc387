"""
Inventory data structures: category index and product collections.
"""
from .categories import CategoryIndex
from .products import ProductCollection, StockChange

__all__ = ["CategoryIndex", "ProductCollection", "StockChange"]
