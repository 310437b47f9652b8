"""
Villa Admin API - Main Application

- Admin analytics aggregation and settings endpoints
- get-analytics edge function
- Structured logging with request IDs, credentials never logged
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.api.admin.router import admin_router
from app.api.functions.router import functions_router
from app.api import ui
from app.config import settings
from app.exceptions import AppException, create_exception_handlers
from app.middleware import CacheHeadersMiddleware, CorrelationIdMiddleware, CorrelationLogFilter
from app.services.data_service import DataService, MockDataService
from app.services.settings_store import SettingsStore

APP_VERSION = "1.0.0"

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
)
for _handler in logging.getLogger().handlers:
    _handler.addFilter(CorrelationLogFilter())
logger = logging.getLogger(__name__)


def create_data_service() -> DataService:
    """Real Supabase client when configured, otherwise the in-memory mock."""
    service = DataService()
    if service.is_configured:
        return service
    logger.warning("Supabase not configured - using in-memory mock data service")
    return MockDataService()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Villa Admin API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Tests install their own services before startup
    if not hasattr(app.state, "data_service"):
        app.state.data_service = create_data_service()
    if not hasattr(app.state, "settings_store"):
        app.state.settings_store = SettingsStore(app.state.data_service)

    logger.info(f"Data service: {app.state.data_service.get_status()['provider']}")
    yield
    logger.info("Shutting down Villa Admin API...")


app = FastAPI(
    title="Villa Admin API",
    description="Admin backend for the villa booking site - analytics and settings",
    version=APP_VERSION,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    lifespan=lifespan,
)

allowed_origins = [
    settings.FRONTEND_URL,
    "http://localhost:5173",  # Vite dev server
    "http://localhost:3000",  # Alternative dev port
]

handlers = create_exception_handlers(allowed_origins)
app.add_exception_handler(AppException, handlers["app"])
app.add_exception_handler(StarletteHTTPException, handlers["http"])
app.add_exception_handler(RequestValidationError, handlers["validation"])
app.add_exception_handler(Exception, handlers["generic"])

app.add_middleware(CacheHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(admin_router, prefix="/api/admin")
app.include_router(functions_router, prefix="/functions/v1")
app.include_router(ui.router, prefix="/ui", tags=["ui"])


@app.get("/")
async def root():
    """Root endpoint - API info."""
    response = {
        "name": "Villa Admin API",
        "version": APP_VERSION,
        "health": "/health",
    }
    if settings.docs_enabled:
        response["docs"] = "/docs"
    return response


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "data_service": app.state.data_service.get_status(),
    }


# For running with uvicorn directly (development only)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=5001,
        reload=settings.DEBUG,
    )
