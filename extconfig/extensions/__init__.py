"""Extensions package - discovery, location and load-order resolution."""

from .locator import ExtensionLocator
from .resolver import ALL, apply_ignored, expand, expand_and_check
from .discovery import (
    canonical_name,
    discover_available,
    installed_packages,
)

__all__ = [
    "ALL",
    "ExtensionLocator",
    "apply_ignored",
    "canonical_name",
    "discover_available",
    "expand",
    "expand_and_check",
    "installed_packages",
]
