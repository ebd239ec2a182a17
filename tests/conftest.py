"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

# Add project root to Python path so 'extconfig' is findable
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import tempfile
from typing import Callable, Generator
import pytest

from extconfig.config import (
    EnvironmentSettings,
    ExtensionSettings,
    PathSettings,
    Settings,
    reset_settings,
)
from extconfig.core.logging import reset_logging
from extconfig.models.extension import PackageDescriptor


ENV_VARS = [
    "EXTCONFIG_APP_ROOT",
    "EXTCONFIG_INSTALL_ROOT",
    "EXTCONFIG_ENV",
    "APP_ENV",
    "EXTCONFIG_EXTENSIONS",
    "EXTCONFIG_IGNORE_EXTENSIONS",
    "EXTCONFIG_PACKAGE_PREFIX",
    "EXTCONFIG_SCAN_PACKAGES",
    "EXTCONFIG_LOG_LEVEL",
    "EXTCONFIG_LOG_FORMAT",
    "EXTCONFIG_LOG_FILE",
    "EXTCONFIG_LOG_CONSOLE",
    "EXTCONFIG_LOG_DIR",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's environment out of settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_extensions(temp_dir: Path) -> Callable[..., Path]:
    """Create extension directories under a search path.

    Returns the search path.
    """
    def _make(*names: str, root: str = "vendor/extensions") -> Path:
        search_path = temp_dir / root
        search_path.mkdir(parents=True, exist_ok=True)
        for name in names:
            (search_path / name).mkdir()
        return search_path
    return _make


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings rooted in the temporary directory, without package scanning."""
    return Settings(
        paths=PathSettings(app_root=temp_dir, install_root=temp_dir),
        environment=EnvironmentSettings(name="development"),
        extensions=ExtensionSettings(scan_packages=False),
    )


@pytest.fixture
def packages(temp_dir: Path) -> list[PackageDescriptor]:
    """Installed distributions, only some of which are extensions."""
    site = temp_dir / "site-packages"
    return [
        PackageDescriptor(name="radiant-comments-extension", path=site / "radiant_comments"),
        PackageDescriptor(name="requests", path=site / "requests"),
        PackageDescriptor(name="radiant_page_attachments_extension", path=site / "page_attachments"),
        PackageDescriptor(name="radiant-extension", path=site / "radiant_extension"),
    ]
