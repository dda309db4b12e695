"""Redirect table built from published permalinks.

Runs the old-path deriver over every permalink (and its frontmatter
redirect_from paths) and maps each old path to the permalink's href.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from docshift.core.old_paths import derive_old_paths
from docshift.core.paths import get_path_with_language, get_path_without_language, join_path
from docshift.core.types import URLPath, VersionId
from docshift.core.versions import VersionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Permalink:
    """One language/version rendering of a page."""

    href: URLPath
    language_code: str
    version: VersionId
    redirect_from: tuple[str, ...] = ()


class RedirectTable:
    """Mapping of old paths to canonical hrefs.

    Canonical hrefs are reserved first so an old path never shadows a
    published page. When two permalinks derive the same old path, the first
    one registered keeps it.
    """

    def __init__(self, registry: VersionRegistry) -> None:
        self._registry = registry
        self._redirects: dict[str, URLPath] = {}
        self._canonical: set[str] = set()
        self._conflicts = 0

    def __len__(self) -> int:
        return len(self._redirects)

    def __contains__(self, path: object) -> bool:
        return path in self._redirects

    def __iter__(self) -> Iterator[str]:
        return iter(self._redirects)

    @property
    def conflicts(self) -> int:
        """Number of old paths claimed by more than one permalink."""
        return self._conflicts

    def reserve(self, href: str) -> None:
        """Mark href as a published page that must never redirect."""
        self._canonical.add(href)
        self._redirects.pop(href, None)

    def add_permalink(self, permalink: Permalink) -> int:
        """Register all old paths of a permalink.

        Args:
            permalink: Published permalink

        Returns:
            Number of old paths newly registered
        """
        old_paths = derive_old_paths(
            permalink.href,
            permalink.language_code,
            permalink.version,
            self._registry,
        )
        for frontmatter_path in permalink.redirect_from:
            source = self._frontmatter_source(frontmatter_path, permalink)
            old_paths.add(source)
            old_paths |= derive_old_paths(
                source,
                permalink.language_code,
                permalink.version,
                self._registry,
            )

        added = 0
        for old_path in sorted(old_paths):
            if old_path in self._canonical:
                continue
            existing = self._redirects.get(old_path)
            if existing is None:
                self._redirects[old_path] = permalink.href
                added += 1
            elif existing != permalink.href:
                self._conflicts += 1
                logger.debug(
                    f"Old path {old_path} already redirects to {existing}, "
                    f"ignoring {permalink.href}"
                )
        return added

    def lookup(self, path: str) -> URLPath | None:
        """Return the canonical href for an old path, or None."""
        return self._redirects.get(path)

    def to_dict(self) -> dict[str, URLPath]:
        """Convert to dictionary for JSON serialization, sorted by old path."""
        return dict(sorted(self._redirects.items()))

    def _frontmatter_source(self, path: str, permalink: Permalink) -> str:
        """Place a frontmatter redirect_from path under the permalink's language and version."""
        if permalink.version == self._registry.non_enterprise_default_version:
            return get_path_with_language(path, permalink.language_code, self._registry)
        return join_path(
            permalink.language_code,
            permalink.version,
            get_path_without_language(path, self._registry),
        )


def build_redirect_table(permalinks: Iterable[Permalink], registry: VersionRegistry) -> RedirectTable:
    """Build a redirect table for a set of published permalinks.

    Args:
        permalinks: All published permalinks
        registry: Version registry facts

    Returns:
        RedirectTable mapping old paths to canonical hrefs
    """
    permalinks = list(permalinks)
    table = RedirectTable(registry)
    for permalink in permalinks:
        table.reserve(permalink.href)

    for permalink in permalinks:
        table.add_permalink(permalink)

    logger.info(
        f"Built {len(table)} redirects for {len(permalinks)} permalinks "
        f"({table.conflicts} conflicts)"
    )
    return table
