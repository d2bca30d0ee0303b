# =============================================================================
# File: health_service.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import os
import time
from datetime import datetime
from typing import Any, Dict, Optional

import psutil

from model_usage.config.appsettings import AppSettings
from model_usage.config.platform_paths import resolve_log_paths, resolve_models_root
from model_usage.exceptions import DaemonException
from model_usage.logger import get_logger
from model_usage.services.daemon_client import DaemonClient
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("health_service")

# Track service start time
SERVICE_START_TIME = time.time()


class HealthService:
    """Service for health check operations."""

    @classmethod
    async def get_health_status(
        cls, settings: AppSettings, client: Optional[DaemonClient] = None
    ) -> Dict[str, Any]:
        """Reports storage, daemon and process health."""
        components: Dict[str, str] = {}
        details: Dict[str, Any] = {}

        components["storage"], details["storage"] = cls._check_storage(settings)
        components["daemon"] = await cls._check_daemon(client or DaemonClient(settings.daemon))
        details["memory"] = cls._memory_info()

        overall_status = "healthy"
        if components["storage"] == "unhealthy":
            overall_status = "unhealthy"
        elif any(status != "healthy" for status in components.values()):
            overall_status = "degraded"

        return {
            "status": overall_status,
            "timestamp": datetime.now().astimezone().isoformat(),
            "uptime_seconds": round(time.time() - SERVICE_START_TIME, 3),
            "components": components,
            "details": details,
        }

    @staticmethod
    def _check_storage(settings: AppSettings):
        models_root = resolve_models_root(settings)
        manifest_root = os.path.join(models_root, settings.storage.manifests_dir)
        try:
            manifests_exist = os.path.isdir(manifest_root)
            log_files = [p for p in resolve_log_paths(settings) if os.path.isfile(p)]
        except OSError as e:
            logger.warning("Storage check failed: %s", sanitize_for_log(str(e)))
            return "unhealthy", {"models_root": models_root}

        info = {
            "models_root": models_root,
            "manifests_available": manifests_exist,
            "log_files": len(log_files),
        }
        # Missing logs only degrade the report (every model shows as unused)
        if not manifests_exist:
            return "unhealthy", info
        if not log_files:
            return "degraded", info
        return "healthy", info

    @staticmethod
    async def _check_daemon(client: DaemonClient) -> str:
        try:
            await client.list_models()
            return "healthy"
        except DaemonException as e:
            logger.warning("Daemon health check failed: %s", sanitize_for_log(e.message))
            return "unhealthy"

    @staticmethod
    def _memory_info() -> Dict[str, float]:
        process = psutil.Process()
        memory = process.memory_info()
        return {
            "rss_mb": round(memory.rss / 1024 / 1024, 2),
            "system_percent": psutil.virtual_memory().percent,
        }
