"""
Routers for the warehouse HTTP driver
"""

from .auth import router as auth_router
from .inventory import router as inventory_router
from .reports import router as reports_router

__all__ = ["auth_router", "inventory_router", "reports_router"]
