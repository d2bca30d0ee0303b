# =============================================================================
# File: app_init.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from model_usage.config.config_loader import ConfigLoader
from model_usage.logger import configure_logging

APP_SETTINGS = ConfigLoader.get_app_settings()
configure_logging(APP_SETTINGS.logging.level)
