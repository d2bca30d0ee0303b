# =============================================================================
# File: appsettings.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Optional

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    name: str = Field(default="Model Usage Analytics")
    description: str = Field(
        default="Usage analytics for locally installed model artifacts"
    )
    version: str = Field(default="0.1.0")
    is_production: bool = Field(default=True)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class ServerConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5011)
    keepalive_timeout: int = Field(default=5)
    graceful_timeout: int = Field(default=10)


class StorageConfig(BaseModel):
    # None means "let platform detection decide"
    models_root: Optional[str] = Field(default=None)
    manifests_dir: str = Field(default="manifests")
    log_paths: Optional[List[str]] = Field(default=None)
    log_glob: str = Field(default="server*.log")


class DaemonConfig(BaseModel):
    base_url: str = Field(default="http://localhost:11434")
    timeout: float = Field(default=30.0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")


class AppSettings(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    daemon: DaemonConfig = Field(default_factory=DaemonConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
