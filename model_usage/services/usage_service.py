# =============================================================================
# File: usage_service.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import asyncio
import time
from typing import Iterable, List, Optional, Union

from model_usage.config.appsettings import AppSettings
from model_usage.config.platform_paths import resolve_log_paths, resolve_models_root
from model_usage.logger import get_logger
from model_usage.models.usage_record import UsageRecord
from model_usage.services.daemon_client import DaemonClient
from model_usage.services.digest_index import DigestIndexBuilder
from model_usage.services.log_scanner import LogEventScanner, UsageMap
from model_usage.services.usage_reconciler import find_unused, reconcile
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("usage_service")


class UsageService:
    """
    One analytics invocation: index manifests, scan logs, ask the daemon.

    Nothing is kept between calls; every method recomputes from disk.
    """

    def __init__(self, settings: AppSettings, client: Optional[DaemonClient] = None):
        self.settings = settings
        self.client = client or DaemonClient(settings.daemon)

    def build_usage(self) -> UsageMap:
        """Index the manifest tree and scan the server logs."""
        started = time.time()
        models_root = resolve_models_root(self.settings)
        log_paths = resolve_log_paths(self.settings)

        index = DigestIndexBuilder(models_root, self.settings.storage.manifests_dir).build()
        usage = LogEventScanner(index).scan(log_paths)

        logger.info(
            "Scanned %d log file(s) from %s: %d model(s) used (%.3fs)",
            len(log_paths),
            sanitize_for_log(models_root),
            len(usage),
            time.time() - started,
        )
        return usage

    async def _build_usage_async(self) -> UsageMap:
        # Manifest walking and log reading are blocking file I/O
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.build_usage)

    async def get_model_usage(self) -> List[UsageRecord]:
        usage = await self._build_usage_async()
        installed = await self.client.list_models()
        return reconcile(usage, installed)

    async def list_unused_models(self) -> List[str]:
        installed = await self.client.list_models()
        usage = await self._build_usage_async()
        return find_unused(usage, installed)

    async def delete_models(self, names: Union[str, Iterable[str]]) -> List[str]:
        return await self.client.delete_models(names)
