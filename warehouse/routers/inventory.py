"""
Inventory router: categories, products, stock changes and analysis.
Not-found, duplicate and insufficient-stock outcomes map to 4xx responses;
the warehouse state is unchanged whenever one is returned.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional
import logging

from warehouse.config import settings
from warehouse.crud.products import StockChange
from warehouse.dependencies import get_warehouse
from warehouse.exceptions import CategoryNotFoundError, EmptyInventoryError
from warehouse.schemas.auth import CurrentUser
from warehouse.schemas.dashboard import AlertListResponse, AlertResponse
from warehouse.schemas.inventory import (
    CategoryCreate, CategoryResponse, CategoryOutcomeResponse,
    CategoryInsertOutcome, CategoryDeleteOutcome,
    ProductCreate, ProductResponse, ProductAddOutcome,
    QuantityUpdate, StockDecrease, StockChangeResponse, StockChangeStatus,
    AnalysisResponse, SaveResponse
)
from warehouse.security import get_current_user, require_admin
from warehouse.service import Warehouse
from warehouse.utils.alerts import check_stock_alerts

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inventory"])


def _category_not_found(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Category '{name}' does not exist"
    )


def _stock_change_response(change: StockChange) -> StockChangeResponse:
    if change.status == StockChangeStatus.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=change.message)
    if change.status == StockChangeStatus.INSUFFICIENT_STOCK:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=change.message)
    return StockChangeResponse(
        status=change.status,
        product_id=change.product_id,
        quantity=change.quantity,
        category=change.category,
        message=change.message,
    )


# ====================
# CATEGORIES
# ====================

@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    """All categories in ascending name order, products in collection order"""
    return [
        CategoryResponse(
            name=name,
            product_count=len(products),
            products=[ProductResponse.model_validate(p) for p in products],
        )
        for name, products in warehouse.snapshot()
    ]


@router.post("/categories", response_model=CategoryOutcomeResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category: CategoryCreate,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    outcome = warehouse.add_category(category.name)
    if outcome == CategoryInsertOutcome.ALREADY_EXISTS:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category '{category.name}' already exists"
        )

    logger.info(f"User {current_user.username} added category '{category.name}'")
    return CategoryOutcomeResponse(
        name=category.name,
        outcome=outcome.value,
        message=f"Category '{category.name}' added successfully."
    )


@router.get("/categories/{name}", response_model=CategoryResponse)
def get_category(
    name: str,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    try:
        products = warehouse.category_products(name)
    except CategoryNotFoundError:
        raise _category_not_found(name)

    return CategoryResponse(
        name=name,
        product_count=len(products),
        products=[ProductResponse.model_validate(p) for p in products],
    )


@router.delete("/categories/{name}", response_model=CategoryOutcomeResponse)
def delete_category(
    name: str,
    current_user: CurrentUser = Depends(require_admin),
    warehouse: Warehouse = Depends(get_warehouse)
):
    """Delete a category and every product in it (admin only)"""
    outcome = warehouse.delete_category(name)
    if outcome == CategoryDeleteOutcome.NOT_FOUND:
        raise _category_not_found(name)

    logger.info(f"Admin {current_user.username} deleted category '{name}'")
    return CategoryOutcomeResponse(
        name=name,
        outcome=outcome.value,
        message=f"Category '{name}' deleted successfully."
    )


# ====================
# PRODUCTS
# ====================

@router.post("/categories/{name}/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def add_product(
    name: str,
    product: ProductCreate,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    outcome = warehouse.add_product(name, product.product_id, product.name, product.quantity)
    if outcome == ProductAddOutcome.CATEGORY_MISSING:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category '{name}' does not exist. Please create the category first."
        )
    if outcome == ProductAddOutcome.DUPLICATE_ID:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Product ID {product.product_id} already exists in '{name}'"
        )

    return ProductResponse(
        product_id=product.product_id,
        name=product.name,
        quantity=product.quantity,
        category=name,
    )


@router.get("/products", response_model=List[ProductResponse])
def list_products(
    category: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    """Products sorted ascending by ID, for one category or all"""
    try:
        products = warehouse.list_products_by_id(category)
    except CategoryNotFoundError:
        raise _category_not_found(category)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    category: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    try:
        product = warehouse.find_product(product_id, category)
    except CategoryNotFoundError:
        raise _category_not_found(category)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Product {product_id} not found")
    return ProductResponse.model_validate(product)


@router.put("/products/{product_id}/quantity", response_model=StockChangeResponse)
def update_product_quantity(
    product_id: int,
    update: QuantityUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    """Overwrite the stock count (restock or correction)"""
    try:
        change = warehouse.set_quantity(product_id, update.quantity, update.category)
    except CategoryNotFoundError:
        raise _category_not_found(update.category)
    return _stock_change_response(change)


@router.post("/products/{product_id}/decrease", response_model=StockChangeResponse)
def decrease_product_stock(
    product_id: int,
    decrease: StockDecrease,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    try:
        change = warehouse.decrease_stock(product_id, decrease.amount, decrease.category)
    except CategoryNotFoundError:
        raise _category_not_found(decrease.category)
    return _stock_change_response(change)


# ====================
# ANALYSIS
# ====================

@router.get("/categories/{name}/analysis", response_model=AnalysisResponse)
def analyze_category(
    name: str,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    try:
        result = warehouse.analyze_category(name)
    except CategoryNotFoundError:
        raise _category_not_found(name)
    except EmptyInventoryError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return AnalysisResponse(
        category=name,
        product_count=result.product_count,
        total_quantity=result.total_quantity,
        average_quantity=result.average_quantity,
        max_stock_product=ProductResponse.model_validate(result.max_stock_product),
        min_stock_product=ProductResponse.model_validate(result.min_stock_product),
        low_stock_products=[ProductResponse.model_validate(p) for p in result.low_stock_products],
        high_stock_products=[ProductResponse.model_validate(p) for p in result.high_stock_products],
    )


@router.get("/alerts", response_model=AlertListResponse)
def list_stock_alerts(
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    alerts = [AlertResponse(**alert) for alert in check_stock_alerts(warehouse)]
    return AlertListResponse(alerts=alerts, total=len(alerts))


# ====================
# PERSISTENCE
# ====================

@router.post("/inventory/save", response_model=SaveResponse)
def save_inventory(
    current_user: CurrentUser = Depends(require_admin),
    warehouse: Warehouse = Depends(get_warehouse)
):
    """Write every product to the products file (admin only)"""
    count = warehouse.save_file(settings.PRODUCTS_FILE)
    return SaveResponse(path=settings.PRODUCTS_FILE, products_saved=count)
