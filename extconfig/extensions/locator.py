"""Extension locator - records where each discovered extension lives."""

from pathlib import Path
from typing import Optional

from extconfig.models.extension import ExtensionLocation, SourceKind


class ExtensionLocator:
    """Keeps the root location of every discovered extension.

    Discovery records a location for each candidate it finds. When the same
    name is recorded more than once, the latest recording wins on lookup;
    earlier ones remain available through ``history``.
    """

    def __init__(self):
        self._locations: dict[str, ExtensionLocation] = {}
        self._history: dict[str, list[ExtensionLocation]] = {}

    def record(self, name: str, path: str | Path, source: SourceKind) -> ExtensionLocation:
        """Record a location for ``name`` and return it."""
        location = ExtensionLocation(name=name, path=Path(path), source=source)
        self._locations[name] = location
        self._history.setdefault(name, []).append(location)
        return location

    def get(self, name: str) -> Optional[ExtensionLocation]:
        """Get the effective location for an extension name."""
        return self._locations.get(name)

    def history(self, name: str) -> list[ExtensionLocation]:
        """Every location recorded for ``name``, oldest first."""
        return list(self._history.get(name, []))

    def duplicates(self) -> dict[str, list[ExtensionLocation]]:
        """Names recorded more than once, with all their locations."""
        return {
            name: list(locations)
            for name, locations in self._history.items()
            if len(locations) > 1
        }

    def snapshot(self) -> dict[str, ExtensionLocation]:
        return dict(self._locations)
