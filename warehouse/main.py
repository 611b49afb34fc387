"""
HTTP driver for the warehouse engine.
- Products file loaded at startup, saved at shutdown when AUTOSAVE is on
- Every inventory route requires a bearer token from /api/auth/login
"""
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from warehouse import __version__
from warehouse.config import settings
from warehouse.dependencies import get_warehouse, get_weather_client
from warehouse.exceptions import InvalidQuantityError, StorageError
from warehouse.routers import auth_router, inventory_router, reports_router
from warehouse.schemas.dashboard import AlertResponse, ClimateResponse
from warehouse.service import Warehouse
from warehouse.utils.alerts import climate_advisory
from warehouse.utils.weather import WeatherClient

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🚀 Starting {settings.APP_NAME}")

    warehouse = Warehouse()
    try:
        warehouse.load_file(settings.PRODUCTS_FILE)
    except StorageError as e:
        logger.error(f"Startup load failed, continuing with an empty warehouse: {e}")
    app.state.warehouse = warehouse
    app.state.weather_client = WeatherClient()

    yield

    # Shutdown
    if settings.AUTOSAVE:
        try:
            warehouse.save_file(settings.PRODUCTS_FILE)
        except StorageError as e:
            logger.error(f"Shutdown save failed: {e}")
    logger.info(f"👋 Shutting down {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    description="Warehouse categories, product stock and stock level analysis",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(inventory_router, prefix="/api")
app.include_router(reports_router, prefix="/api")


@app.exception_handler(InvalidQuantityError)
async def invalid_quantity_handler(request: Request, exc: InvalidQuantityError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Unable to write the products file"})


@app.get("/health")
def health_check(warehouse: Warehouse = Depends(get_warehouse)):
    return {
        "status": "healthy",
        "service": "warehouse",
        "version": __version__,
        "categories": len(warehouse.category_names()),
        "products": warehouse.total_products(),
    }


@app.get("/api/climate", response_model=ClimateResponse)
def climate(weather: WeatherClient = Depends(get_weather_client)):
    """Warehouse location temperature with a climate control advisory"""
    temperature = weather.get_temperature()
    advisory = climate_advisory(temperature)
    return ClimateResponse(
        city=weather.city,
        units=weather.units,
        temperature=temperature,
        advisory=AlertResponse(**advisory) if advisory else None,
    )


@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": __version__,
        "endpoints": {
            "docs": "/api/docs",
            "health": "/health",
            "auth": "/api/auth/login",
            "api": "/api"
        }
    }
