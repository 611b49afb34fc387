"""
Alert and climate schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from enum import Enum


class AlertLevel(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class AlertType(str, Enum):
    STOCK_LOW = "STOCK_LOW"
    STOCK_OUT = "STOCK_OUT"
    CLIMATE_HOT = "CLIMATE_HOT"
    CLIMATE_COLD = "CLIMATE_COLD"
    CLIMATE_OK = "CLIMATE_OK"


class AlertResponse(BaseModel):
    alert_type: AlertType
    level: AlertLevel
    message: str
    category: Optional[str] = None
    product_id: Optional[int] = None


class AlertListResponse(BaseModel):
    alerts: List[AlertResponse]
    total: int


class ClimateResponse(BaseModel):
    city: str
    units: str
    temperature: Optional[float] = None
    advisory: Optional[AlertResponse] = None
