"""
Warehouse facade used by the CLI and HTTP drivers.
- One re-entrant lock serializes category index changes and traversals
- A per-category lock serializes product changes inside that category
- Index lock is never requested while a category lock is held
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union
import logging
import threading

from warehouse.crud.categories import CategoryIndex
from warehouse.crud.products import StockChange
from warehouse.exceptions import CategoryNotFoundError
from warehouse.models import AnalysisResult, Product
from warehouse.schemas.inventory import (
    CategoryInsertOutcome, CategoryDeleteOutcome, ProductAddOutcome,
    ProductRecord, StockChangeStatus
)
from warehouse.utils import storage
from warehouse.utils.analysis import analyze_products
from warehouse.utils.text_reports import format_categories, format_products_by_id

logger = logging.getLogger(__name__)


class Warehouse:
    def __init__(self):
        self.index = CategoryIndex()
        self._lock = threading.RLock()
        self._category_locks: Dict[str, threading.RLock] = {}

    def _category_lock(self, name: str) -> threading.RLock:
        with self._lock:
            lock = self._category_locks.get(name)
            if lock is None:
                lock = self._category_locks[name] = threading.RLock()
            return lock

    @contextmanager
    def _locked_collection(self, category: str):
        """Yield the category's products with its lock held."""
        with self._lock:
            node = self.index.find(category)
            if node is None:
                raise CategoryNotFoundError(category)
            collection = node.products
            lock = self._category_lock(category)
        with lock:
            yield collection

    # ====================
    # CATEGORIES
    # ====================

    def add_category(self, name: str) -> CategoryInsertOutcome:
        with self._lock:
            return self.index.insert(name)

    def delete_category(self, name: str) -> CategoryDeleteOutcome:
        with self._lock:
            outcome = self.index.delete(name)
            if outcome == CategoryDeleteOutcome.DELETED:
                self._category_locks.pop(name, None)
            return outcome

    def has_category(self, name: str) -> bool:
        with self._lock:
            return name in self.index

    def category_names(self) -> List[str]:
        with self._lock:
            return self.index.names()

    def category_products(self, name: str) -> List[Product]:
        """Copies of a category's products in collection order."""
        with self._locked_collection(name) as collection:
            return [product.copy() for product in collection]

    # ====================
    # PRODUCTS
    # ====================

    def add_product(self, category: str, product_id: int, name: str, quantity: int) -> ProductAddOutcome:
        try:
            with self._locked_collection(category) as collection:
                if product_id in collection:
                    logger.warning(f"Product ID {product_id} already exists in '{category}'")
                    return ProductAddOutcome.DUPLICATE_ID
                collection.insert(product_id, name, quantity)
        except CategoryNotFoundError:
            logger.warning(f"Category '{category}' does not exist. Create the category first.")
            return ProductAddOutcome.CATEGORY_MISSING

        logger.info(f"Product {product_id} ({name}) added to '{category}' with quantity {quantity}")
        return ProductAddOutcome.ADDED

    def _locate(self, product_id: int, category: Optional[str]) -> Optional[str]:
        """Name of the category to act on, or None when the product is nowhere."""
        with self._lock:
            if category is not None:
                node = self.index.find(category)
                if node is None:
                    raise CategoryNotFoundError(category)
                return node.name
            found = self.index.find_product(product_id)
            return found[0].name if found else None

    def _change_stock(self, product_id: int, category: Optional[str], change) -> StockChange:
        target = self._locate(product_id, category)
        if target is None:
            logger.warning(f"Product {product_id} not found in any category")
            return StockChange(StockChangeStatus.NOT_FOUND, product_id)
        try:
            with self._locked_collection(target) as collection:
                return change(collection)
        except CategoryNotFoundError:
            # Category deleted between lookup and update
            return StockChange(StockChangeStatus.NOT_FOUND, product_id, category=category)

    def set_quantity(self, product_id: int, quantity: int, category: Optional[str] = None) -> StockChange:
        """
        Overwrite a product's quantity.
        Without a category, the first category in name order holding the ID is used.
        """
        return self._change_stock(
            product_id, category, lambda c: c.set_quantity(product_id, quantity)
        )

    def decrease_stock(self, product_id: int, amount: int, category: Optional[str] = None) -> StockChange:
        return self._change_stock(
            product_id, category, lambda c: c.decrease(product_id, amount)
        )

    def find_product(self, product_id: int, category: Optional[str] = None) -> Optional[Product]:
        target = self._locate(product_id, category)
        if target is None:
            return None
        with self._locked_collection(target) as collection:
            product = collection.find(product_id)
            return product.copy() if product else None

    # ====================
    # REPORTING
    # ====================

    def snapshot(self) -> List[Tuple[str, List[Product]]]:
        """(category, product copies in collection order) for every category, by name."""
        with self._lock:
            result = []
            for node in self.index:
                with self._category_lock(node.name):
                    result.append((node.name, [p.copy() for p in node.products]))
            return result

    def display_all(self) -> str:
        with self._lock:
            nodes = list(self.index)
            for node in nodes:
                self._category_lock(node.name).acquire()
            try:
                return format_categories(nodes)
            finally:
                for node in nodes:
                    self._category_lock(node.name).release()

    def analyze_category(self, category: str) -> AnalysisResult:
        """
        Raises:
            CategoryNotFoundError: no such category
            EmptyInventoryError: the category has no products
        """
        with self._locked_collection(category) as collection:
            return analyze_products(collection, category)

    def list_products_by_id(self, category: Optional[str] = None) -> List[Product]:
        """Products ascending by ID, for one category or all of them."""
        if category is not None:
            with self._locked_collection(category) as collection:
                return [p.copy() for p in collection.list_sorted_by_id()]

        products = [p for _, items in self.snapshot() for p in items]
        # snapshot() is in category order, so equal IDs stay grouped by category name
        return sorted(products, key=lambda p: p.product_id)

    def products_report(self, category: Optional[str] = None) -> str:
        return format_products_by_id(self.list_products_by_id(category))

    def total_products(self) -> int:
        return sum(len(items) for _, items in self.snapshot())

    # ====================
    # PERSISTENCE
    # ====================

    def load(self, records: Iterable[ProductRecord]) -> int:
        """
        Insert loaded records, creating categories as needed.
        Duplicate IDs within a category are skipped.
        """
        loaded = 0
        for record in records:
            self.add_category(record.category)
            outcome = self.add_product(record.category, record.product_id, record.name, record.quantity)
            if outcome == ProductAddOutcome.ADDED:
                loaded += 1
            else:
                logger.warning(f"Skipped record {record.product_id} for '{record.category}': {outcome.value}")
        return loaded

    def load_file(self, path: Union[str, Path]) -> int:
        loaded = self.load(storage.load_products(path))
        logger.info(f"Warehouse loaded with {loaded} product(s) in {len(self.index)} categories")
        return loaded

    def save_file(self, path: Union[str, Path]) -> int:
        # Oldest first, so reloading (which prepends) restores collection order
        products = [p for _, items in self.snapshot() for p in reversed(items)]
        return storage.save_products(products, path)
