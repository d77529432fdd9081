#!/usr/bin/env python3
"""
Startup script for the Blood Donation API
"""
import uvicorn
from app.core.config import settings
from app.core.logging import logger


def main():
    """Start the FastAPI application."""
    logger.info(f"Starting {settings.APP_NAME} on {settings.HOST}:{settings.PORT} (debug={settings.DEBUG})")

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=None if settings.DEBUG else settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
