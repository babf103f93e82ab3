import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from app.core.db import init_db, close_db
from app.api.v1.items import router as items_router
from app.api.v1.suppliers import router as suppliers_router
from app.api.v1.sales import router as sales_router
from app.api.v1.waste import router as waste_router
from app.api.v1.redistribution import router as redistribution_router
from app.api.v1.analytics import router as analytics_router
from app.core.config import LOG_LEVEL, PROJECT_NAME, VERSION
from app.core.exception_handlers import setup_exception_handlers
from app.services.reservation_service import ReservationEngine

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas
    app.state.reservation_engine = ReservationEngine()
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# Include routers for modular API structure
app.include_router(items_router, prefix="/api/v1/items", tags=["Inventory"])
app.include_router(suppliers_router, prefix="/api/v1/suppliers", tags=["Suppliers"])
app.include_router(sales_router, prefix="/api/v1/sales", tags=["Sales"])
app.include_router(waste_router, prefix="/api/v1/waste", tags=["Waste"])
app.include_router(redistribution_router, prefix="/api/v1/redistribution", tags=["Redistribution"])
app.include_router(analytics_router, prefix="/api/v1/analytics", tags=["Analytics"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
