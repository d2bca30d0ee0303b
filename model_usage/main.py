# =============================================================================
# File: main.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import signal
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from model_usage.app_init import APP_SETTINGS
from model_usage.exceptions import UsageBaseException
from model_usage.logger import get_logger
from model_usage.routers import health, usage
from model_usage.utils.error_handler import ErrorHandler
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("main")

app = FastAPI(
    title=APP_SETTINGS.app.name,
    description=APP_SETTINGS.app.description,
    version=APP_SETTINGS.app.version,
    openapi_url="/api/v1/openapi.json",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
)


# Global exception handlers
@app.exception_handler(UsageBaseException)
async def usage_exception_handler(request: Request, exc: UsageBaseException):
    """Handle application exceptions."""
    status_code = ErrorHandler.get_http_status(exc)
    logger.warning(
        "Application exception in %s: %s",
        sanitize_for_log(str(request.url)),
        sanitize_for_log(exc.message),
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": exc.message,
            "error_code": exc.error_code,
            "detail": exc.message,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    ErrorHandler.handle_exception(
        exc, f"request to {request.url}", include_traceback=True
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error_code": "INTERNAL_ERROR",
            "detail": "An unexpected error occurred",
        },
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=APP_SETTINGS.app.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(usage.router, prefix="/api/v1", tags=["Model Usage"])
app.include_router(health.router, prefix="/api/v1", tags=["Health & Monitoring"])


@app.get("/")
def root() -> dict:
    """Root endpoint for health check."""
    return {
        "message": f"{APP_SETTINGS.app.name} API is running",
        "version": "v1",
        "docs": "/api/v1/docs",
    }


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info(f"Received signal {signum}, shutting down gracefully...")
    sys.exit(0)


def run_server():
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    logger.info(
        f"Starting uvicorn server on {APP_SETTINGS.server.host}:{APP_SETTINGS.server.port}"
    )

    import uvicorn

    uvicorn.run(
        "model_usage.main:app",
        host=APP_SETTINGS.server.host,
        port=APP_SETTINGS.server.port,
        reload=not APP_SETTINGS.app.is_production,
        log_level=APP_SETTINGS.logging.level.lower(),
        access_log=True,
        timeout_keep_alive=APP_SETTINGS.server.keepalive_timeout,
        timeout_graceful_shutdown=APP_SETTINGS.server.graceful_timeout,
    )

    logger.info("Model usage server stopped")


if __name__ == "__main__":
    try:
        run_server()
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error("Fatal error:", exc_info=e)
        sys.exit(1)

# Run Instruction
# Set Env: $env:MODEL_USAGE_ENV="Development"
# Unit Test : python -m pytest
# Run for terminal: python -m model_usage.main
