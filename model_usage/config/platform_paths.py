# =============================================================================
# File: platform_paths.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Per-platform default locations for model storage and server logs.

Detection runs once when settings are resolved; the scanning services only
ever see the concrete paths chosen here.
"""

import glob
import os
import platform
from typing import List, Optional

from model_usage.config.appsettings import AppSettings
from model_usage.logger import get_logger

logger = get_logger("platform_paths")

MACOS = "Darwin"
WINDOWS = "Windows"
LINUX = "Linux"


def _home() -> str:
    return os.path.expanduser("~")


def default_models_root(system: Optional[str] = None) -> str:
    """Return the daemon's default model storage root for ``system``."""
    system = system or platform.system()
    if system == MACOS:
        return os.path.join(_home(), ".ollama", "models")
    if system == WINDOWS:
        return os.path.join(_home(), ".ollama")
    return os.path.join(os.sep, "usr", "share", "ollama")


def _glob_newest_first(directory: str, pattern: str) -> List[str]:
    paths = [p for p in glob.glob(os.path.join(directory, pattern)) if os.path.isfile(p)]
    # Rotated logs sort newest-first by file name (server.log > server-1.log ...)
    return sorted(paths, key=os.path.basename, reverse=True)


def default_log_paths(
    pattern: str = "server*.log", system: Optional[str] = None
) -> List[str]:
    """Return the daemon's server log files for ``system``, newest first.

    Linux installs log to journald, so there is nothing to read there.
    """
    system = system or platform.system()
    if system == MACOS:
        return _glob_newest_first(os.path.join(_home(), ".ollama", "logs"), pattern)
    if system == WINDOWS:
        local_app_data = os.getenv("LOCALAPPDATA")
        if not local_app_data:
            return []
        return _glob_newest_first(os.path.join(local_app_data, "Ollama"), pattern)
    return []


def resolve_models_root(settings: AppSettings) -> str:
    return settings.storage.models_root or default_models_root()


def resolve_log_paths(settings: AppSettings) -> List[str]:
    if settings.storage.log_paths is not None:
        return list(settings.storage.log_paths)
    paths = default_log_paths(settings.storage.log_glob)
    logger.debug("Discovered %d server log file(s)", len(paths))
    return paths
