"""Extension resolver - turns a requested list into the load order.

    >>> expand_and_check(["dashboard", ALL], ["blog", "comments", "dashboard"])
    ['dashboard', 'blog', 'comments']
"""

from typing import Iterable, Sequence

from extconfig.core.errors import MissingExtensions
from extconfig.core.logging import get_logger

logger = get_logger("resolver")

# Marker meaning "every available extension not listed explicitly"
ALL = "all"


def missing_extensions(requested: Iterable[str], available: Iterable[str]) -> list[str]:
    """Requested names that are not available, in request order, each once."""
    available = set(available)
    missing = []
    for name in requested:
        if name == ALL or name in available or name in missing:
            continue
        missing.append(name)
    return missing


def expand_and_check(requested: Sequence[str], available: Sequence[str]) -> list[str]:
    """Validate the requested list and expand its wildcard.

    The first ALL marker is replaced by every available name not listed
    elsewhere in ``requested``, in the order given by ``available``. Any
    further markers are dropped. Duplicate explicit names are kept.

    Raises:
        MissingExtensions: if any explicit name is not available. All
            missing names are reported together.
    """
    requested = list(requested)
    missing = missing_extensions(requested, available)
    if missing:
        raise MissingExtensions(missing)

    if requested.count(ALL) > 1:
        logger.warning(
            f"The {ALL!r} marker appears {requested.count(ALL)} times; only the first is expanded",
            component="resolver"
        )

    explicit = {name for name in requested if name != ALL}
    expanded = []
    wildcard_seen = False

    for name in requested:
        if name != ALL:
            expanded.append(name)
        elif not wildcard_seen:
            expanded.extend(n for n in available if n not in explicit)
            wildcard_seen = True

    return expanded


def apply_ignored(expanded: Iterable[str], ignored: Iterable[str]) -> list[str]:
    """Remove every ignored name, keeping the order of the rest."""
    ignored = set(ignored)
    return [name for name in expanded if name not in ignored]


def expand(requested: Sequence[str] | None, available: Sequence[str]) -> list[str]:
    """Expanded load order for a requested list.

    ``None`` means nothing was configured, which enables everything
    available. An empty list enables nothing.
    """
    if requested is None:
        return list(available)
    return expand_and_check(requested, available)
