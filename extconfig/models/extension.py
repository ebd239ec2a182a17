"""Extension data models."""

from enum import Enum
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field


class SourceKind(str, Enum):
    """Where an extension was discovered."""
    VENDORED = "vendored"
    PACKAGED = "packaged"


class PackageDescriptor(BaseModel):
    """An installed distribution as seen by package enumeration."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Distribution name as declared")
    path: Path = Field(..., description="Root directory of the installed package")


class ExtensionLocation(BaseModel):
    """Root directory of one discovered extension.

    Recorded during discovery and consulted later by whatever activates
    the enabled extensions.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical extension name")
    path: Path = Field(..., description="Extension root directory")
    source: SourceKind

    def to_display_string(self) -> str:
        return f"{self.name}: {self.path} ({self.source.value})"


class ResolvedExtensions(BaseModel):
    """Immutable result of resolving an extension configuration."""
    model_config = ConfigDict(frozen=True)

    available: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Every discovered extension, sorted"
    )
    expanded: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Requested list with the wildcard expanded, before ignoring"
    )
    enabled: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Extensions to activate, in load order"
    )
    ignored: tuple[str, ...] = Field(default_factory=tuple)
    locations: dict[str, ExtensionLocation] = Field(default_factory=dict)

    def location_for(self, name: str) -> ExtensionLocation | None:
        return self.locations.get(name)

    def enabled_locations(self) -> list[ExtensionLocation]:
        """Locations of the enabled extensions, in load order."""
        return [self.locations[name] for name in self.enabled if name in self.locations]
