# =============================================================================
# File: error_handler.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Centralized error handling utilities."""

import traceback
from typing import Any, Dict

from model_usage.exceptions import (
    ConfigurationException,
    DaemonException,
    UsageBaseException,
    ValidationException,
)
from model_usage.logger import get_logger
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("error_handler")


class ErrorHandler:
    """Centralized error handling and response formatting."""

    ERROR_MAPPINGS = {
        FileNotFoundError: ("Model storage not accessible", "FILE_NOT_FOUND"),
        PermissionError: ("Model storage permission denied", "PERMISSION_DENIED"),
        OSError: ("System resource error", "SYSTEM_ERROR"),
        ValueError: ("Invalid parameter value", "INVALID_VALUE"),
        KeyError: ("Missing required parameter", "MISSING_PARAMETER"),
        TypeError: ("Invalid parameter type", "INVALID_TYPE"),
        TimeoutError: ("Operation timed out", "TIMEOUT"),
        RuntimeError: ("Runtime error occurred", "RUNTIME_ERROR"),
    }

    @staticmethod
    def handle_exception(
        exc: Exception, context: str = "operation", include_traceback: bool = False
    ) -> Dict[str, Any]:
        """Handle exception and return standardized error response."""

        if isinstance(exc, UsageBaseException):
            error_code = exc.error_code
            message = exc.message
            log_level = "warning"
        else:
            message, error_code = ErrorHandler.ERROR_MAPPINGS.get(
                type(exc), (str(exc), "UNKNOWN_ERROR")
            )
            log_level = "error"

        log_message = f"{context} failed: {sanitize_for_log(message)}"
        if log_level == "error":
            logger.error(log_message)
            if include_traceback:
                logger.error("Traceback: %s", sanitize_for_log(traceback.format_exc()))
        else:
            logger.warning(log_message)

        return {
            "success": False,
            "message": message,
            "error_code": error_code,
            "context": context,
        }

    @staticmethod
    def get_http_status(exc: Exception) -> int:
        """Get appropriate HTTP status code for exception."""

        if isinstance(exc, ValidationException):
            return 400
        elif isinstance(exc, DaemonException):
            return 502
        elif isinstance(exc, ConfigurationException):
            return 503
        else:
            return 500
