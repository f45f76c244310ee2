"""
Mock Backend Application

A simulated storefront REST backend for exercising the storefront client:
auth with refreshable bearer tokens, cart, wishlist, coupons and orders.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import BackendSettings, get_backend_settings
from .database import MockDatabase
from .routes import (
    auth_router,
    cart_router,
    orders_router,
    products_router,
    promotions_router,
    wishlist_router,
)
from .security import TokenService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings = app.state.settings
    logger.info("Mock Backend starting up...")
    logger.info(f"Bulk cart clear: {'enabled' if settings.bulk_cart_clear_enabled else 'disabled'}")
    yield
    logger.info("Mock Backend shutting down...")


def create_app(settings: Optional[BackendSettings] = None) -> FastAPI:
    """Build an app with its own fresh in-memory database"""
    settings = settings or get_backend_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Simulated storefront backend for client testing",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = MockDatabase()
    app.state.tokens = TokenService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) for err in exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": f"Invalid request: {fields}"},
        )

    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(wishlist_router)
    app.include_router(promotions_router)
    app.include_router(orders_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "mock-backend"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_backend_settings()
    uvicorn.run(
        "mock_backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
