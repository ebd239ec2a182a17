"""Extension discovery - finds vendored and packaged extensions.

Two kinds of candidates are recognized:

- vendored: every immediate subdirectory of a search path
- packaged: every installed distribution named ``<prefix>-<name>-extension``

Each candidate is recorded in an ExtensionLocator as it is found.
"""

import re
from pathlib import Path
from typing import Callable, Iterable, Optional

import importlib_metadata

from extconfig.core.logging import get_logger
from extconfig.extensions.locator import ExtensionLocator
from extconfig.models.extension import PackageDescriptor, SourceKind

logger = get_logger("discovery")

DEFAULT_PACKAGE_PREFIX = "radiant"

PackageSource = Callable[[], Iterable[PackageDescriptor]]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[-\s]+")


def canonical_name(text: str) -> str:
    """Convert a directory or package segment to an extension name.

    ``PageAttachments``, ``page-attachments`` and ``page_attachments`` all
    become ``page_attachments``.
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", text.strip())
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    name = _SEPARATORS.sub("_", name)
    return name.lower()


def package_pattern(prefix: str = DEFAULT_PACKAGE_PREFIX) -> re.Pattern:
    """Pattern matching distribution names that declare an extension.

    Separators may be ``-``, ``_`` or ``.``: installers normalize names
    differently and all three spellings refer to the same distribution.
    """
    return re.compile(
        rf"^{re.escape(prefix)}[-_.](?P<name>.+)[-_.]extension$",
        re.IGNORECASE,
    )


def vendored_pattern(prefix: str = DEFAULT_PACKAGE_PREFIX) -> re.Pattern:
    """Pattern for unpacked distributions dropped into a search path.

    Allows a trailing version, as in ``radiant-blog-extension-1.2.0``.
    """
    return re.compile(
        rf"^{re.escape(prefix)}[-_](?P<name>.+?)[-_]extension(?:-[\da-z.]+)*$",
        re.IGNORECASE,
    )


def extension_name_from_package(
    package_name: str,
    prefix: str = DEFAULT_PACKAGE_PREFIX
) -> Optional[str]:
    """Extension name for a distribution, or None if it is not an extension."""
    match = package_pattern(prefix).match(package_name)
    if not match:
        return None
    return canonical_name(match.group("name").replace(".", "_"))


def extension_name_from_path(
    path: str | Path,
    prefix: str = DEFAULT_PACKAGE_PREFIX
) -> str:
    """Extension name for a vendored directory."""
    basename = Path(path).name
    match = vendored_pattern(prefix).match(basename)
    if match:
        basename = match.group("name")
    return canonical_name(basename)


def _is_extension_dir(candidate: Path) -> bool:
    if candidate.name.startswith("."):
        return False
    return candidate.is_dir()


def _distribution_root(dist: importlib_metadata.Distribution) -> Path:
    """Best guess at the directory holding a distribution's code."""
    top_level = dist.read_text("top_level.txt")
    if top_level and top_level.split():
        return Path(dist.locate_file(top_level.split()[0]))

    for file in dist.files or []:
        head = file.parts[0] if file.parts else ""
        if head and head != ".." and not head.endswith((".dist-info", ".egg-info")):
            return Path(dist.locate_file(head))

    return Path(dist.locate_file(""))


def installed_packages() -> list[PackageDescriptor]:
    """Enumerate installed distributions.

    Distributions that appear more than once on the path are reported
    once, in path order.
    """
    packages = []
    seen = set()

    for dist in importlib_metadata.distributions():
        name = dist.metadata.get("Name")
        if not name or name in seen:
            continue
        seen.add(name)
        packages.append(PackageDescriptor(name=name, path=_distribution_root(dist)))

    return packages


def vendored_extensions(
    extension_paths: Iterable[str | Path],
    locator: ExtensionLocator,
    prefix: str = DEFAULT_PACKAGE_PREFIX
) -> list[str]:
    """Scan search paths for extension directories, in path order.

    Missing search paths are skipped.
    """
    found = []

    for load_path in extension_paths:
        load_path = Path(load_path)
        if not load_path.is_dir():
            logger.debug("Skipping missing extension path", path=str(load_path))
            continue

        for candidate in sorted(load_path.iterdir()):
            if not _is_extension_dir(candidate):
                continue

            name = extension_name_from_path(candidate, prefix)
            locator.record(name, candidate, SourceKind.VENDORED)
            logger.extension_discovered(name, candidate, SourceKind.VENDORED.value)
            found.append(name)

    return found


def packaged_extensions(
    packages: Iterable[PackageDescriptor],
    locator: ExtensionLocator,
    prefix: str = DEFAULT_PACKAGE_PREFIX
) -> list[str]:
    """Pick out installed distributions that follow the extension naming convention."""
    found = []

    for package in packages:
        name = extension_name_from_package(package.name, prefix)
        if name is None:
            continue

        locator.record(name, package.path, SourceKind.PACKAGED)
        logger.extension_discovered(name, package.path, SourceKind.PACKAGED.value)
        found.append(name)

    return found


def discover_available(
    extension_paths: Iterable[str | Path],
    packages: Iterable[PackageDescriptor],
    locator: ExtensionLocator,
    prefix: str = DEFAULT_PACKAGE_PREFIX
) -> list[str]:
    """Sorted, deduplicated names of every vendored and packaged extension."""
    found = vendored_extensions(extension_paths, locator, prefix)
    found += packaged_extensions(packages, locator, prefix)

    for name, locations in locator.duplicates().items():
        logger.debug(
            f"Extension {name} found {len(locations)} times, using the last",
            component="discovery",
            extension=name,
            path=str(locations[-1].path)
        )

    return sorted(set(found))
