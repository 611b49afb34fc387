"""
Per-category product collection.
- Insertion prepends; lookups scan most recent first
- Quantities never go negative through decrease()
- Sorted listings never reorder the collection itself
"""
from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional
import logging

from warehouse.exceptions import InvalidQuantityError
from warehouse.models import Product
from warehouse.schemas.inventory import StockChangeStatus

logger = logging.getLogger(__name__)


@dataclass
class StockChange:
    """Result of a quantity update or decrease."""
    status: StockChangeStatus
    product_id: int
    quantity: Optional[int] = None
    category: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == StockChangeStatus.UPDATED

    @property
    def message(self) -> str:
        if self.status == StockChangeStatus.NOT_FOUND:
            return f"Product {self.product_id} not found"
        if self.status == StockChangeStatus.INSUFFICIENT_STOCK:
            return f"Not enough stock for product {self.product_id}. Current stock: {self.quantity}"
        return f"Product {self.product_id} quantity is now {self.quantity}"


def _check_non_negative(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidQuantityError(value, field)


class ProductCollection:
    """Unordered products of one category, keyed by integer ID."""

    def __init__(self, category: str = ""):
        self.category = category
        self._products = deque()

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: int) -> bool:
        return self.find(product_id) is not None

    def __repr__(self) -> str:
        return f"ProductCollection(category={self.category!r}, size={len(self)})"

    def insert(self, product_id: int, name: str, quantity: int) -> Product:
        """
        Prepend a new product.

        Existing IDs are not checked here; find() returns the most
        recently inserted match.
        """
        _check_non_negative(quantity, "quantity")
        product = Product(
            product_id=product_id,
            name=name,
            quantity=quantity,
            category=self.category,
        )
        self._products.appendleft(product)
        return product

    def find(self, product_id: int) -> Optional[Product]:
        for product in self._products:
            if product.product_id == product_id:
                return product
        return None

    def set_quantity(self, product_id: int, new_quantity: int) -> StockChange:
        """Overwrite the stock count of an existing product."""
        _check_non_negative(new_quantity, "quantity")
        product = self.find(product_id)
        if product is None:
            return StockChange(StockChangeStatus.NOT_FOUND, product_id, category=self.category)

        product.quantity = new_quantity
        logger.info(f"Product {product_id} quantity set to {new_quantity} in '{self.category}'")
        return StockChange(StockChangeStatus.UPDATED, product_id, new_quantity, self.category)

    def decrease(self, product_id: int, amount: int) -> StockChange:
        """Subtract stock, refusing to go below zero."""
        _check_non_negative(amount, "amount")
        product = self.find(product_id)
        if product is None:
            return StockChange(StockChangeStatus.NOT_FOUND, product_id, category=self.category)

        if product.quantity < amount:
            logger.warning(
                f"Not enough stock to decrease product {product_id} by {amount}. "
                f"Current stock: {product.quantity}"
            )
            return StockChange(
                StockChangeStatus.INSUFFICIENT_STOCK, product_id, product.quantity, self.category
            )

        product.quantity -= amount
        logger.info(f"Decreased product {product_id} by {amount}. New quantity: {product.quantity}")
        return StockChange(StockChangeStatus.UPDATED, product_id, product.quantity, self.category)

    def list_sorted_by_id(self) -> List[Product]:
        return sorted(self._products, key=lambda p: p.product_id)

