"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel


class StorageConfig(BaseModel):
    base_directory: str
    directory_prefix: str
    max_file_size: int  # bytes; a single JSON payload larger than this is refused


class LoggingConfig(BaseModel):
    level: str
    file: str | None = None


class AppConfig(BaseModel):
    protocol_version: str
    storage: StorageConfig
    logging: LoggingConfig
