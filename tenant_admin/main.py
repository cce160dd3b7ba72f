"""Main FastAPI application."""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenant_admin.core.config import settings
from tenant_admin.core.logging import setup_logging, get_logger
from tenant_admin.core.database import engine, Base
from tenant_admin.core.exceptions import register_exception_handlers
from tenant_admin.api import router as api_router
from tenant_admin import models  # noqa: F401  Force models to register with Base


# Setup logging
setup_logging(settings.DEBUG)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME}")
    logger.info(f"Debug mode: {settings.DEBUG}, environment: {settings.ENVIRONMENT}")

    if settings.DB_AUTO_CREATE:
        logger.info("Creating database tables (DB_AUTO_CREATE enabled)")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    yield
    logger.info(f"Shutting down {settings.APP_NAME}")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Administration API for multi-tenant organization records",
    version=settings.APP_VERSION,
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
async def root():
    """API index."""
    prefix = settings.API_PREFIX
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": f"{prefix}/docs",
        "endpoints": {
            "tenants": f"{prefix}/tenants",
            "status": f"{prefix}/tenants/{{id}}/status",
            "statusHistory": f"{prefix}/tenants/{{id}}/status/history",
            "settings": f"{prefix}/tenants/{{id}}/settings",
            "metadata": f"{prefix}/tenants/{{id}}/metadata",
            "bulkStatus": f"{prefix}/tenants/bulk/status",
            "bulkDelete": f"{prefix}/tenants/bulk/delete",
            "health": f"{prefix}/health",
        },
    }
