"""
Alert generation.
- Climate advisory from the warehouse temperature
- Stock alerts: out of stock, and below the category average
"""
import logging
from typing import List, Optional, TYPE_CHECKING

from warehouse.config import settings
from warehouse.exceptions import EmptyInventoryError
from warehouse.schemas.dashboard import AlertType, AlertLevel
from warehouse.utils.analysis import analyze_products

if TYPE_CHECKING:
    from warehouse.service import Warehouse

logger = logging.getLogger(__name__)


def climate_advisory(
    temperature: Optional[float],
    hot_threshold: Optional[float] = None,
    cold_threshold: Optional[float] = None,
) -> Optional[dict]:
    """Advisory for a temperature reading; None when there is no reading."""
    if temperature is None:
        return None

    hot = settings.HOT_THRESHOLD if hot_threshold is None else hot_threshold
    cold = settings.COLD_THRESHOLD if cold_threshold is None else cold_threshold

    if temperature > hot:
        return {
            "alert_type": AlertType.CLIMATE_HOT,
            "level": AlertLevel.WARNING,
            "message": "Alert: Excessive heat detected! Activating air conditioning "
                       "to maintain optimal product storage conditions.",
        }
    if temperature < cold:
        return {
            "alert_type": AlertType.CLIMATE_COLD,
            "level": AlertLevel.WARNING,
            "message": "Alert: Cold temperatures detected! Activating heating "
                       "to prevent product damage from freezing.",
        }
    return {
        "alert_type": AlertType.CLIMATE_OK,
        "level": AlertLevel.INFO,
        "message": "Warehouse temperature is within the optimal range. "
                   "No climate control adjustments needed.",
    }


def check_stock_alerts(warehouse: "Warehouse") -> List[dict]:
    """
    Stock alerts for every category, in category name order.
    Empty categories produce no alerts.
    """
    alerts = []

    for category, products in warehouse.snapshot():
        try:
            result = analyze_products(products, category)
        except EmptyInventoryError:
            continue

        low_ids = {p.product_id for p in result.low_stock_products}
        for product in products:
            if product.quantity == 0:
                alerts.append({
                    "alert_type": AlertType.STOCK_OUT,
                    "level": AlertLevel.CRITICAL,
                    "message": f"{product.name} (ID {product.product_id}) is OUT OF STOCK in {category}",
                    "category": category,
                    "product_id": product.product_id,
                })
            elif product.product_id in low_ids:
                alerts.append({
                    "alert_type": AlertType.STOCK_LOW,
                    "level": AlertLevel.WARNING,
                    "message": f"{product.name} (ID {product.product_id}) stock is LOW: "
                               f"{product.quantity} (category average {result.average_quantity:.2f})",
                    "category": category,
                    "product_id": product.product_id,
                })

    logger.debug(f"Generated {len(alerts)} stock alert(s)")
    return alerts
