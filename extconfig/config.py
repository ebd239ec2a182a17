"""Centralized settings for extconfig.

This module provides typed, validated settings loaded from
environment variables and .env files.
"""

import os
import re
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

from extconfig.core.errors import ConfigError

# Load .env file if it exists
load_dotenv()

TEST_ENVIRONMENT = re.compile(r"test|cucumber")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _split_list(value: Optional[str]) -> Optional[list[str]]:
    """Parse a comma separated list; None when the variable is unset."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


@dataclass
class PathSettings:
    """Application and installation roots.

    The application root holds site-specific material; the installation
    root is where the CMS itself lives. They are often the same directory.
    """
    app_root: Optional[Path] = None
    install_root: Optional[Path] = None

    def __post_init__(self):
        if self.app_root is None:
            self.app_root = Path(os.getenv("EXTCONFIG_APP_ROOT") or Path.cwd())
        if self.install_root is None:
            root = os.getenv("EXTCONFIG_INSTALL_ROOT")
            self.install_root = Path(root) if root else self.app_root
        self.app_root = Path(self.app_root)
        self.install_root = Path(self.install_root)


@dataclass
class EnvironmentSettings:
    """Running environment name."""
    name: str = ""

    def __post_init__(self):
        if not self.name:
            self.name = os.getenv("EXTCONFIG_ENV") or os.getenv("APP_ENV") or "development"

    @property
    def is_test(self) -> bool:
        return bool(TEST_ENVIRONMENT.search(self.name))


@dataclass
class ExtensionSettings:
    """Requested and ignored extensions, and package matching."""
    requested: Optional[list[str]] = None
    ignored: Optional[list[str]] = None
    package_prefix: str = ""
    scan_packages: Optional[bool] = None

    def __post_init__(self):
        if self.requested is None:
            self.requested = _split_list(os.getenv("EXTCONFIG_EXTENSIONS"))
        if self.ignored is None:
            self.ignored = _split_list(os.getenv("EXTCONFIG_IGNORE_EXTENSIONS")) or []
        if not self.package_prefix:
            self.package_prefix = os.getenv("EXTCONFIG_PACKAGE_PREFIX", "radiant")
        if self.scan_packages is None:
            self.scan_packages = _flag("EXTCONFIG_SCAN_PACKAGES", True)


@dataclass
class LogSettings:
    """Logging configuration."""
    level: str = "WARNING"
    format: str = "text"  # "json" or "text"
    file_enabled: bool = False
    console_enabled: bool = True
    log_dir: Optional[Path] = None

    def __post_init__(self):
        self.level = os.getenv("EXTCONFIG_LOG_LEVEL", self.level).upper()
        self.format = os.getenv("EXTCONFIG_LOG_FORMAT", self.format).lower()
        self.file_enabled = _flag("EXTCONFIG_LOG_FILE", self.file_enabled)
        self.console_enabled = _flag("EXTCONFIG_LOG_CONSOLE", self.console_enabled)
        log_dir = os.getenv("EXTCONFIG_LOG_DIR")
        if log_dir:
            self.log_dir = Path(log_dir)


@dataclass
class Settings:
    """Main settings container."""
    paths: PathSettings = field(default_factory=PathSettings)
    environment: EnvironmentSettings = field(default_factory=EnvironmentSettings)
    extensions: ExtensionSettings = field(default_factory=ExtensionSettings)
    log: LogSettings = field(default_factory=LogSettings)

    def _issues(self) -> list[tuple[str, str]]:
        """(environment variable, problem) pairs for every invalid value."""
        issues = []

        if self.log.level not in LOG_LEVELS:
            issues.append((
                "EXTCONFIG_LOG_LEVEL",
                f"log level must be one of {', '.join(LOG_LEVELS)}, not {self.log.level!r}"
            ))

        if self.log.format not in ("json", "text"):
            issues.append(("EXTCONFIG_LOG_FORMAT", "log format must be 'json' or 'text'"))

        if self.log.file_enabled and self.log.log_dir is None:
            issues.append(("EXTCONFIG_LOG_DIR", "EXTCONFIG_LOG_DIR is required when file logging is enabled"))

        if not re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9._-]*", self.extensions.package_prefix):
            issues.append((
                "EXTCONFIG_PACKAGE_PREFIX",
                f"invalid package prefix: {self.extensions.package_prefix!r}"
            ))

        return issues

    def validate(self) -> list[str]:
        """Validate settings and return list of issues."""
        return [message for _, message in self._issues()]

    def is_valid(self) -> bool:
        """Check if settings are valid."""
        return len(self.validate()) == 0

    def check(self) -> None:
        """Raise ConfigError for the first invalid value, if any."""
        issues = self._issues()
        if issues:
            config_key, message = issues[0]
            details = "; ".join(m for _, m in issues[1:]) or None
            raise ConfigError(f"Invalid setting: {message}", config_key=config_key, details=details)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide default settings."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the default settings (useful for testing)."""
    global _settings
    _settings = None
