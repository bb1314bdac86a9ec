from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging
import os
import sys
from contextlib import asynccontextmanager

from src.models.config import settings
from src.services.chart_tool_service import get_chart_tool_service

from routers import charts


def setup_logging():

    os.makedirs(settings.logs_dir, exist_ok=True)

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            # Console handler for Docker logs
            logging.StreamHandler(sys.stdout),
            # File handler for persistent logs
            logging.FileHandler(
                os.path.join(settings.logs_dir, 'application.log'),
                encoding='utf-8'
            )
        ]
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)  # Reduce noise

    logger = logging.getLogger(__name__)
    logger.info("Logging configuration complete")
    return logger


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = setup_logging()
    logger.info("Starting up QuickChart Server...")

    app.state.chart_tool_service = get_chart_tool_service()
    logger.info("Chart services initialized successfully!")

    yield

    logger.info("Shutting down QuickChart Server...")


# Create FastAPI instance with lifespan
app = FastAPI(
    title=settings.app_name,
    description="API for generating and downloading QuickChart charts",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# Configure CORS with settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_credentials,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)

app.include_router(charts.router)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"message": "QuickChart Server is running"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(
        "server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload
    )
