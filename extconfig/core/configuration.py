"""Extension configuration - the object that owns extension load order.

The configuration has two phases. While building, callers set the
requested list, add ignored extensions and adjust search paths. The first
read of ``available_extensions``, ``expanded_extension_list`` or
``enabled_extensions`` computes that value once; ``resolve()`` computes
everything and freezes the result into an immutable ResolvedExtensions.
Changes made after a value has been computed do not affect it.

    config = ExtensionConfiguration.from_settings(get_settings())
    config.extensions = ["dashboard", ALL]
    config.ignore_extensions(["experimental"])
    resolved = config.resolve()
    resolved.enabled  # ('dashboard', 'blog', 'comments')
"""

import threading
from pathlib import Path
from typing import Iterable, Optional

from extconfig.config import Settings, get_settings
from extconfig.core.logging import get_logger
from extconfig.extensions import discovery
from extconfig.extensions.discovery import PackageSource
from extconfig.extensions.locator import ExtensionLocator
from extconfig.extensions.resolver import apply_ignored, expand
from extconfig.models.extension import ExtensionLocation, ResolvedExtensions

logger = get_logger("configuration")


def _no_packages() -> list:
    return []


class ExtensionConfiguration:
    """Requested, ignored and available extensions for one application.

    Each instance owns its own cached state and locator, so several
    configurations can coexist (in tests, for instance). First computation
    of cached values is serialized by a lock.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        extension_paths: Optional[Iterable[str | Path]] = None,
        package_source: Optional[PackageSource] = None,
        locator: Optional[ExtensionLocator] = None
    ):
        self.settings = settings or get_settings()
        self.locator = locator or ExtensionLocator()
        self.package_prefix = self.settings.extensions.package_prefix

        if package_source is not None:
            self._package_source = package_source
        elif self.settings.extensions.scan_packages:
            self._package_source = discovery.installed_packages
        else:
            self._package_source = _no_packages

        if extension_paths is None:
            self.extension_paths = self.default_extension_paths()
        else:
            self.extension_paths = [Path(p) for p in extension_paths]

        self._requested: Optional[list[str]] = None
        self._ignored: list[str] = []

        self._available: Optional[list[str]] = None
        self._expanded: Optional[list[str]] = None
        self._enabled: Optional[list[str]] = None
        self._resolved: Optional[ResolvedExtensions] = None

        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "ExtensionConfiguration":
        """Build a configuration with the requested and ignored lists from settings."""
        settings = settings or get_settings()
        config = cls(settings, **kwargs)

        if settings.extensions.requested is not None:
            config.extensions = settings.extensions.requested
        config.ignore_extensions(settings.extensions.ignored)

        return config

    def default_extension_paths(self) -> list[Path]:
        """Locations searched for vendored extensions, in scan order.

        Normally ``<app_root>/vendor/extensions``, preceded by
        ``<install_root>/vendor/extensions`` when the CMS is installed
        elsewhere. Test environments also search
        ``<install_root>/test/fixtures/extensions`` first.
        """
        app_root = self.settings.paths.app_root
        install_root = self.settings.paths.install_root

        paths = [app_root / "vendor" / "extensions"]
        if Path(app_root).resolve() != Path(install_root).resolve():
            paths.insert(0, install_root / "vendor" / "extensions")
        if self.settings.environment.is_test:
            paths.insert(0, install_root / "test" / "fixtures" / "extensions")
        return paths

    # Build phase

    @property
    def extensions(self) -> list[str]:
        """The requested list, or every available extension if none was set."""
        if self._requested is None:
            return self.available_extensions
        return list(self._requested)

    @extensions.setter
    def extensions(self, names: Optional[Iterable[str]]):
        """Set the extensions to load and their order.

        May include the ALL marker for "everything else", for example
        ``["dashboard", "blog", ALL, "comments"]``. ``None`` restores the
        default of loading everything available.
        """
        if self._expanded is not None:
            self._warn_late_change("extensions")
        self._requested = None if names is None else list(names)

    @property
    def ignored_extensions(self) -> list[str]:
        return list(self._ignored)

    @ignored_extensions.setter
    def ignored_extensions(self, names: Iterable[str]):
        if self._enabled is not None:
            self._warn_late_change("ignored_extensions")
        self._ignored = []
        self._add_ignored(names)

    def ignore_extensions(self, names: Iterable[str]) -> None:
        """Add extensions that must never be enabled.

        Ignoring applies regardless of how an extension entered the
        requested list, and ignoring an unknown name is allowed.
        """
        if self._enabled is not None:
            self._warn_late_change("ignored_extensions")
        self._add_ignored(names)

    def _add_ignored(self, names: Iterable[str]) -> None:
        for name in names:
            if name not in self._ignored:
                self._ignored.append(name)

    def _warn_late_change(self, attribute: str) -> None:
        logger.warning(
            f"{attribute} changed after extensions were resolved; the change has no effect",
            component="configuration"
        )

    # Discovery

    def vendored_extensions(self) -> list[str]:
        """Names of extension directories under the search paths."""
        return discovery.vendored_extensions(self.extension_paths, self.locator, self.package_prefix)

    def packaged_extensions(self) -> list[str]:
        """Names of installed distributions following the extension naming convention."""
        return discovery.packaged_extensions(self._package_source(), self.locator, self.package_prefix)

    @property
    def available_extensions(self) -> list[str]:
        """Alphabetical list of every extension found, computed once.

        Computing it records each extension's location in ``locator``.
        """
        with self._lock:
            if self._available is None:
                self._available = discovery.discover_available(
                    self.extension_paths,
                    self._package_source(),
                    self.locator,
                    self.package_prefix
                )
            return list(self._available)

    # Resolution

    @property
    def expanded_extension_list(self) -> list[str]:
        """Requested list with the wildcard expanded, before ignoring.

        Raises:
            MissingExtensions: if a requested extension is not available.
        """
        with self._lock:
            if self._expanded is None:
                self._expanded = expand(self._requested, self.available_extensions)
            return list(self._expanded)

    @property
    def enabled_extensions(self) -> list[str]:
        """The extensions to activate, in load order.

        Enabled means configured to load, not loaded or activated.
        """
        with self._lock:
            if self._enabled is None:
                self._enabled = apply_ignored(self.expanded_extension_list, self._ignored)
                logger.extensions_resolved(self._enabled, self._ignored)
            return list(self._enabled)

    def location_for(self, name: str) -> Optional[ExtensionLocation]:
        """Root location of an available extension."""
        if name not in self.available_extensions:
            return None
        return self.locator.get(name)

    @property
    def frozen(self) -> bool:
        return self._resolved is not None

    def resolve(self) -> ResolvedExtensions:
        """Compute everything once and return the frozen result.

        Raises:
            MissingExtensions: if a requested extension is not available.
        """
        with self._lock:
            if self._resolved is None:
                enabled = self.enabled_extensions
                self._resolved = ResolvedExtensions(
                    available=self.available_extensions,
                    expanded=self.expanded_extension_list,
                    enabled=enabled,
                    ignored=self._ignored,
                    locations=self.locator.snapshot()
                )
            return self._resolved
