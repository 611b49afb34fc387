"""
Inventory schemas.
- Outcome enums for insert-if-absent / delete-if-present / stock changes
- ProductRecord: one row exchanged with the products file
- Request and response bodies for the HTTP driver
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from enum import Enum


class CategoryInsertOutcome(str, Enum):
    INSERTED = "INSERTED"
    ALREADY_EXISTS = "ALREADY_EXISTS"


class CategoryDeleteOutcome(str, Enum):
    DELETED = "DELETED"
    NOT_FOUND = "NOT_FOUND"


class ProductAddOutcome(str, Enum):
    ADDED = "ADDED"
    CATEGORY_MISSING = "CATEGORY_MISSING"
    DUPLICATE_ID = "DUPLICATE_ID"


class StockChangeStatus(str, Enum):
    UPDATED = "UPDATED"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


def _strip_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# Products file record
class ProductRecord(BaseModel):
    product_id: int
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    category: str = Field(..., min_length=1)

    @field_validator("name", "category")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_name(v)


# Category Schemas
class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_name(v)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int
    name: str
    quantity: int
    category: str


class CategoryResponse(BaseModel):
    name: str
    product_count: int
    products: List[ProductResponse] = []


class CategoryOutcomeResponse(BaseModel):
    name: str
    outcome: str
    message: str


# Product Schemas
class ProductCreate(BaseModel):
    product_id: int
    name: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(0, ge=0)

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_name(v)


class QuantityUpdate(BaseModel):
    quantity: int = Field(..., ge=0)
    category: Optional[str] = None


class StockDecrease(BaseModel):
    amount: int = Field(..., ge=0)
    category: Optional[str] = None


class StockChangeResponse(BaseModel):
    status: StockChangeStatus
    product_id: int
    quantity: Optional[int] = None
    category: Optional[str] = None
    message: str


# Analysis
class AnalysisResponse(BaseModel):
    category: str
    product_count: int
    total_quantity: int
    average_quantity: float
    max_stock_product: ProductResponse
    min_stock_product: ProductResponse
    low_stock_products: List[ProductResponse]
    high_stock_products: List[ProductResponse]


class SaveResponse(BaseModel):
    path: str
    products_saved: int
