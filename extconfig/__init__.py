"""extconfig: extension discovery and load-order configuration."""

from .core.configuration import ExtensionConfiguration
from .core.errors import MissingExtensions
from .extensions.resolver import ALL
from .models.extension import ExtensionLocation, ResolvedExtensions, SourceKind

__version__ = "1.0.0"

__all__ = [
    "ALL",
    "ExtensionConfiguration",
    "ExtensionLocation",
    "MissingExtensions",
    "ResolvedExtensions",
    "SourceKind",
]
