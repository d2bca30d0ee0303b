# =============================================================================
# File: config_loader.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import json
import os

from pydantic import ValidationError

from model_usage.config.appsettings import AppSettings
from model_usage.exceptions import InvalidConfigError, MissingConfigError
from model_usage.logger import get_logger
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("config_loader")


class ConfigLoader:
    """Builds AppSettings from the packaged JSON files and the environment."""

    @staticmethod
    def get_app_settings() -> AppSettings:
        """
        Loads AppSettings from appsettings.json and environment-specific override in the same folder.
        Performs a deep merge for nested config sections, then applies environment variables.
        """
        data = ConfigLoader._load_config_data("appsettings.json", True)
        try:
            settings = AppSettings(**data)
        except ValidationError as e:
            raise InvalidConfigError(f"appsettings.json does not match schema: {e}")

        settings.app.is_production = os.getenv(
            "MODEL_USAGE_ENV", "Production"
        ).lower() in ["production", "enterprise"]

        # Same variable the daemon itself honours for a relocated model store
        settings.storage.models_root = os.getenv(
            "OLLAMA_MODELS", settings.storage.models_root
        )

        log_paths = os.getenv("MODEL_USAGE_LOG_PATHS")
        if log_paths is not None:
            settings.storage.log_paths = [
                p.strip() for p in log_paths.split(os.pathsep) if p.strip()
            ]

        settings.daemon.base_url = ConfigLoader._resolve_daemon_url(
            settings.daemon.base_url
        )
        try:
            settings.daemon.timeout = float(
                os.getenv("MODEL_USAGE_DAEMON_TIMEOUT", settings.daemon.timeout)
            )
            settings.server.port = int(os.getenv("SERVER_PORT", settings.server.port))
        except ValueError as e:
            raise InvalidConfigError(f"Invalid numeric environment override: {e}")
        settings.server.host = os.getenv("SERVER_HOST", settings.server.host)
        settings.logging.level = os.getenv(
            "MODEL_USAGE_LOG_LEVEL", settings.logging.level
        ).upper()

        logger.debug(
            "Loaded settings: models_root=%s daemon=%s",
            sanitize_for_log(settings.storage.models_root),
            sanitize_for_log(settings.daemon.base_url),
        )
        return settings

    @staticmethod
    def _resolve_daemon_url(default: str) -> str:
        explicit = os.getenv("MODEL_USAGE_DAEMON_URL")
        if explicit:
            return explicit.rstrip("/")
        host = os.getenv("OLLAMA_HOST")
        if not host:
            return default.rstrip("/")
        # OLLAMA_HOST is commonly given as bare host:port
        if "://" not in host:
            host = f"http://{host}"
        return host.rstrip("/")

    @staticmethod
    def _load_config_data(config_file_name: str, check_env_file: bool = False) -> dict:
        """
        Loads a config file and merges with environment-specific override if present.
        Performs a deep merge for nested config sections.
        """
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, config_file_name)

        logger.debug(f"Loading config from {config_file_name}")

        def deep_update(d, u):
            for k, v in u.items():
                if isinstance(v, dict) and isinstance(d.get(k), dict):
                    deep_update(d[k], v)
                else:
                    d[k] = v

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, FileNotFoundError) as e:
            raise MissingConfigError(f"Cannot access config file {config_file_name}: {e}")
        except (json.JSONDecodeError, ValueError) as e:
            raise InvalidConfigError(f"Config file format error in {config_file_name}: {e}")

        # Merge environment-specific config if requested and it exists (deep merge)
        if check_env_file:
            env = os.getenv("MODEL_USAGE_ENV", "Production")
            name, ext = os.path.splitext(config_file_name)
            env_file = f"{name}.{env.lower()}{ext}"
            env_path = os.path.join(base_dir, env_file)
            logger.debug(f"Loading config from {env_file}")
            try:
                with open(env_path, "r", encoding="utf-8") as f:
                    env_data = json.load(f)
                deep_update(data, env_data)
            except (OSError, FileNotFoundError):
                logger.debug(
                    f"Environment-specific config file not found: {env_file}. Using base config."
                )
            except (json.JSONDecodeError, ValueError) as e:
                logger.error(
                    "Invalid environment config format in %s: %s",
                    sanitize_for_log(env_file),
                    sanitize_for_log(str(e)),
                )
                raise InvalidConfigError(f"Environment config format error: {e}")

        return data
