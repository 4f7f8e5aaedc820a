"""
Logging configuration for the application.

Module code logs through ``logging.getLogger(__name__)``; this module only
wires the handlers and levels once at startup.
"""

import logging
import sys

from fastapi import FastAPI


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi", "resume_builder"):
        logging.getLogger(logger_name).setLevel(numeric_level)

    # Quiet chatty libraries unless debugging
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("reportlab").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured with level: %s", level)


def setup_app_logging(app: FastAPI, level: str = "INFO") -> None:
    """Configure logging and install a request-logging middleware.

    Args:
        app: FastAPI application
        level: Logging level name
    """
    configure_logging(level)

    @app.middleware("http")
    async def log_requests(request, call_next):
        logger = logging.getLogger("resume_builder.api")
        logger.debug("Request: %s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.debug("Response: %s", response.status_code)
        return response
