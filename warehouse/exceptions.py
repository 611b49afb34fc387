"""
Warehouse error taxonomy.
Only conditions that must fail fast are exceptions; routine misses
(unknown product, insufficient stock, duplicate category) are reported
through outcome enums in warehouse.schemas.inventory.
"""


class WarehouseError(Exception):
    """Base class for warehouse errors."""


class EmptyInventoryError(WarehouseError, ValueError):
    """Analysis requested on a collection with no products."""

    def __init__(self, category: str = None):
        self.category = category
        if category:
            message = f"Category '{category}' has no products to analyze"
        else:
            message = "Cannot analyze an empty product collection"
        super().__init__(message)


class CategoryNotFoundError(WarehouseError, KeyError):
    """Operation needs a category that is not in the index."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(category)

    def __str__(self) -> str:
        return f"Category '{self.category}' does not exist"


class InvalidQuantityError(WarehouseError, ValueError):
    """Negative quantity or amount."""

    def __init__(self, value: int, field: str = "quantity"):
        self.value = value
        self.field = field
        super().__init__(f"{field} must be a non-negative integer, got {value}")


class AuthenticationError(WarehouseError):
    """Login gate rejected the credentials."""


class StorageError(WarehouseError):
    """Products file could not be read or written."""
