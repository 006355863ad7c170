"""
FastAPI application for Truck POS.

Run locally:
    uvicorn truck_pos.main:app --reload
or:
    truck-pos
"""

# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
import os

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import CORS_ORIGINS
from .logging_config import setup_logging
from .routes import (
    admin_balance_router,
    admin_inventory_router,
    admin_menu_router,
    admin_sales_router,
    pos_router,
)
from .routes.pos import limiter

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)

ROUTERS = [
    pos_router,
    admin_menu_router,
    admin_inventory_router,
    admin_sales_router,
    admin_balance_router,
]


def create_app() -> FastAPI:
    """Build the application with middleware, rate limiting and all routers."""
    app = FastAPI(
        title="Truck POS API",
        description="Point of sale and back office for a food truck",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Include routers with API version prefix
    api_v1 = APIRouter(prefix="/api/v1")
    for router in ROUTERS:
        api_v1.include_router(router)
    app.include_router(api_v1)

    # Also mount at root
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("Application created with %d routers", len(ROUTERS))
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting Truck POS on %s:%d", host, port)
    uvicorn.run("truck_pos.main:app", host=host, port=port)
