"""
Report downloads: plain text listings and PDF documents.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse, Response
from typing import Optional

from warehouse.dependencies import get_warehouse
from warehouse.exceptions import CategoryNotFoundError, EmptyInventoryError
from warehouse.schemas.auth import CurrentUser
from warehouse.security import get_current_user
from warehouse.service import Warehouse
from warehouse.utils.pdf_reports import PDFReportGenerator
from warehouse.utils.text_reports import format_analysis

router = APIRouter(prefix="/reports", tags=["reports"])


def _analysis_or_error(warehouse: Warehouse, category: str):
    try:
        return warehouse.analyze_category(category)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EmptyInventoryError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/inventory.txt", response_class=PlainTextResponse)
def inventory_text(
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    """All categories and products"""
    return warehouse.display_all()


@router.get("/products.txt", response_class=PlainTextResponse)
def products_text(
    category: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    try:
        return warehouse.products_report(category)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/products.pdf")
def products_pdf(
    category: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    try:
        products = warehouse.list_products_by_id(category)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    title = f"Inventory List: {category}" if category else "Inventory List"
    pdf = PDFReportGenerator().generate_products_report(products, report_title=title)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="products.pdf"'}
    )


@router.get("/{category}/analysis.txt", response_class=PlainTextResponse)
def analysis_text(
    category: str,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    return format_analysis(_analysis_or_error(warehouse, category))


@router.get("/{category}/analysis.pdf")
def analysis_pdf(
    category: str,
    current_user: CurrentUser = Depends(get_current_user),
    warehouse: Warehouse = Depends(get_warehouse)
):
    result = _analysis_or_error(warehouse, category)
    pdf = PDFReportGenerator().generate_analysis_report(category, result)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="analysis.pdf"'}
    )
