"""
In-memory inventory model.
- Product: one stock record, owned by exactly one category collection
- CategoryNode: node of the category search tree
- AnalysisResult: derived statistics, computed fresh per analysis
"""
from dataclasses import dataclass, field, replace
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from warehouse.crud.products import ProductCollection


@dataclass
class Product:
    product_id: int
    name: str
    quantity: int
    # Denormalized label of the owning category, kept for reports
    category: str = ""

    def copy(self) -> "Product":
        return replace(self)


@dataclass
class CategoryNode:
    """Category entry in the name-ordered search tree."""
    name: str
    products: "ProductCollection"
    left: Optional["CategoryNode"] = None
    right: Optional["CategoryNode"] = None


@dataclass
class AnalysisResult:
    total_quantity: int
    average_quantity: float
    product_count: int
    max_stock_product: Product
    min_stock_product: Product
    low_stock_products: List[Product] = field(default_factory=list)
    high_stock_products: List[Product] = field(default_factory=list)
