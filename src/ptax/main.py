"""
PTAX Bimonthly Rate Service - Application Entry Point
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ptax import __version__
from ptax.api import router
from ptax.bimonth import BimonthlyRateService
from ptax.config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    settings = get_settings()

    logger.info(f"🚀 Starting PTAX service v.{__version__}")

    # Tests may install their own service before startup
    if getattr(app.state, "rate_service", None) is None:
        app.state.rate_service = BimonthlyRateService.from_settings(settings)

    logger.info(
        f"Provider: {settings.bcb_base_url} "
        f"(lookahead {settings.max_lookahead_days} days, "
        f"{settings.max_network_retries} attempts, "
        f"calendar {settings.calendar_timezone})"
    )

    yield

    logger.info("🛑 Shutting down PTAX service")


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        title="PTAX Bimonthly Rate",
        description="Reference BRL/USD PTAX rate for the current fiscal bimonth",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/api/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "PTAX Bimonthly Rate",
            "version": __version__,
            "docs": "/docs",
            "api": {
                "rate": "/api/rate",
                "rate_info": "/api/rate/info",
                "health": "/api/health"
            }
        }

    return app


# Create application instance
app = create_app()


def main():
    """Main entry point for running the server."""
    settings = get_settings()

    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(f"Starting PTAX server on {settings.api_host}:{settings.api_port}")

    uvicorn.run(
        "ptax.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
