"""
AgriDirect Marketplace API Service

FastAPI application for the product authenticity and verification
subsystem: farmer and consumer identity, admin verification, product
listings with quality attestation, QR certificates and orders.

Endpoints:
- GET / - Root health check
- /farmer/* - Farmer registration, login, products and received orders
- /admin/* - Farmer verification (X-API-Key when ADMIN_API_KEY is set)
- /consumer/* - Consumer registration and login
- /products, /product/{id}/qr, /product/{id}/view - Public catalog and certificates
- /orders - Checkout and order history
- /uploads, /qrcodes - Stored files
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.errors import MarketplaceError, ValidationError
from common.settings import Settings
from service.responses import error, error_from
from service.routers import admin, consumer, farmer, orders, product
from service.state import Services

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its components.

    Args:
        settings: Configuration; read from the environment when omitted

    Returns:
        Configured FastAPI app with components on app.state.services
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    services = Services.build(settings)
    services.database.create_all()
    services.files.ensure_root()
    settings.qr_code_dir.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        services.database.dispose()

    app = FastAPI(
        title="AgriDirect Marketplace API",
        description="Farmer verification, product attestation and orders",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Tighten in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc.message}")
        return error_from(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error(str(exc.detail), code="http_error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(part for part in first.get("loc", ())[1:] if isinstance(part, str))
        message = f"Invalid {field}" if field else "Invalid request"
        return error(message, code=ValidationError.code)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return error("Server error", code="server_error", status_code=500)

    @app.get("/", response_model=dict)
    async def root():
        return {"status": "ok", "service": "AgriDirect Marketplace API", "version": "1.0.0"}

    app.include_router(farmer.router)
    app.include_router(admin.router)
    app.include_router(consumer.router)
    app.include_router(product.router)
    app.include_router(orders.router)

    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")
    app.mount("/qrcodes", StaticFiles(directory=str(settings.qr_code_dir)), name="qrcodes")

    logger.info(f"AgriDirect API ready (database: {settings.database_url.split('://')[0]}, base URL: {settings.base_url})")
    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
