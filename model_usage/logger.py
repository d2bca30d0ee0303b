# =============================================================================
# File: logger.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER = "model_usage"

# Set once settings are loaded; loggers created earlier fall back to the env
_configured_level = None


def _level_from_name(level_name: str) -> int:
    level = getattr(logging, level_name.upper(), None)
    return level if isinstance(level, int) else logging.INFO


def _resolve_level() -> int:
    if _configured_level is not None:
        return _configured_level
    return _level_from_name(os.getenv("MODEL_USAGE_LOG_LEVEL", "INFO"))


def configure_logging(level: str) -> int:
    """Apply the configured level to every package logger, existing and future."""
    global _configured_level
    _configured_level = _level_from_name(level)
    for name, item in list(logging.root.manager.loggerDict.items()):
        if isinstance(item, logging.Logger) and (
            name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + ".")
        ):
            item.setLevel(_configured_level)
    return _configured_level


def get_logger(
    name: str = ROOT_LOGGER,
    log_file: str = "model_usage.log",
    log_dir: str = None,
) -> logging.Logger:
    if log_dir is None:
        log_dir = os.getenv("MODEL_USAGE_LOG_PATH", "logs")
    if not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)
    if log_file is None:
        log_file = f"{name}.log"
    log_path = os.path.join(log_dir, log_file)

    logger = logging.getLogger(f"{ROOT_LOGGER}.{name}" if name != ROOT_LOGGER else name)
    logger.setLevel(_resolve_level())
    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    ):
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    # File handler
    if not any(
        isinstance(h, logging.FileHandler)
        and h.baseFilename == os.path.abspath(log_path)
        for h in logger.handlers
    ):
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger
