"""
Configuration settings for the multi-version tool installer.
"""

from typing import Optional, Tuple
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )
    file_path: Optional[Path] = Field(default=None, description="Optional log file")
    max_file_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, description="Number of log backups to keep")

    class Config:
        frozen = True

    @validator('level')
    def validate_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level: {v}")
        return level


class Settings(BaseSettings):
    """Installer settings. Immutable once built; override by building a new one."""
    tool_directories: Tuple[Path, ...] = Field(
        default=(),
        description="Tool directories to process, in order"
    )
    debug: bool = Field(default=False, description="Verbose logging, including hook output")

    # Tool directory conventions
    manifest_name: str = Field(default="versions", description="Manifest file name inside a tool directory")
    hook_name: str = Field(default="install", description="Installer hook name inside a tool directory")
    placeholder: str = Field(default="${VERSION}", description="Token replaced by the version in artifact locations")
    latest_alias: str = Field(default="latest", description="Name of the alias pointing at the newest version")

    # Operational settings
    hook_timeout: Optional[float] = Field(default=None, description="Seconds before a hook is considered failed")
    strict: bool = Field(default=False, description="Exit non-zero if any tool failed or was skipped")
    dry_run: bool = Field(default=False, description="Resolve and log the plan without installing")
    report_path: Optional[Path] = Field(default=None, description="Write the run summary as JSON here")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_prefix = "INSTALL_TOOL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"
        frozen = True

    @validator('manifest_name', 'hook_name', 'latest_alias')
    def validate_plain_name(cls, v):
        if not v or "/" in v or v in (".", ".."):
            raise ValueError(f"Expected a plain file name, got {v!r}")
        return v

    @validator('hook_timeout')
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("hook_timeout must be positive")
        return v

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else self.logging.level
