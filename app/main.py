import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.routes import grid, health
from app.config import settings

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting Grid Splitter API")
    logger.info(f"Output format: {settings.splitting.output_format}")
    logger.info(f"Max upload size: {settings.max_upload_mb}MB")

    yield

    logger.info("Shutting down Grid Splitter API")


app = FastAPI(
    title="Grid Splitter API",
    description="Detects contact sheet grids and splits them into component images",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(grid.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Grid Splitter API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
