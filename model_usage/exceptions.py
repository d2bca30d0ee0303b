# =============================================================================
# File: exceptions.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Custom exceptions for the model usage analytics application."""
from typing import List, Optional


class UsageBaseException(Exception):
    """Base exception for all model usage errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        super().__init__(self.message)


class ScanException(UsageBaseException):
    """Fatal I/O while reading model storage or server logs."""

    def __init__(
        self, message: str, path: Optional[str] = None, error_code: Optional[str] = None
    ):
        self.path = path
        super().__init__(message, error_code)


class ManifestScanError(ScanException):
    """Manifest tree or a manifest file could not be read."""

    pass


class LogScanError(ScanException):
    """A server log file could not be opened or read."""

    pass


class DaemonException(UsageBaseException):
    """Errors talking to the model-serving daemon."""

    pass


class DaemonConnectionError(DaemonException):
    """Daemon could not be reached."""

    pass


class DaemonResponseError(DaemonException):
    """Daemon answered with an unexpected status or payload."""

    pass


class ModelDeletionError(DaemonException):
    """One or more model deletions failed."""

    def __init__(
        self,
        message: str,
        failures: Optional[List[str]] = None,
        error_code: Optional[str] = None,
    ):
        self.failures = list(failures or [])
        super().__init__(message, error_code)


class ConfigurationException(UsageBaseException):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationException):
    """Invalid configuration parameters."""

    pass


class MissingConfigError(ConfigurationException):
    """Required configuration missing."""

    pass


class ValidationException(UsageBaseException):
    """Input validation errors."""

    pass


class InvalidInputError(ValidationException):
    """Invalid input parameters."""

    pass
