"""Data models for extconfig."""

from .extension import (
    ExtensionLocation,
    PackageDescriptor,
    ResolvedExtensions,
    SourceKind,
)

__all__ = [
    "ExtensionLocation",
    "PackageDescriptor",
    "ResolvedExtensions",
    "SourceKind",
]
