"""Local link rewriting.

Content authors write links like `/some/article/path`; they are rewritten
on the fly to match the language and version of the page being rendered.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from docshift.core import patterns
from docshift.core.paths import (
    HOMEPAGE,
    get_new_versioned_path,
    get_path_with_language,
    get_path_without_language,
    get_version_string_from_path,
    join_path,
    remove_fpt_from_path,
    replace_version_in_path,
)
from docshift.core.types import VersionId
from docshift.core.versions import ENTERPRISE_SERVER_PLAN, VersionRegistry

EXCLUDED_PREFIXES = ("/assets", "/public")
LATEST_ALIAS = f"{ENTERPRISE_SERVER_PLAN}@latest"


@dataclass(frozen=True)
class LinkRewriteContext:
    """Rendering context for a link.

    Attributes:
        language_code: Language of the page being rendered
        version: Version of the page being rendered
        dotcom_only: The link element is marked as pointing to dotcom only
    """

    language_code: str
    version: VersionId
    dotcom_only: bool = False


class LinkRewriter:
    """Rewrites root-relative hrefs for a language and version.

    Holds the version registry and the external redirect keys; safe to share
    across threads and renders.
    """

    def __init__(
        self,
        registry: VersionRegistry,
        external_redirects: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize rewriter.

        Args:
            registry: Version registry facts
            external_redirects: Hrefs that redirect off-site and are left alone
        """
        self._registry = registry
        self._external = frozenset(external_redirects or ())
        self._pinned_segments = registry.supported_plans | set(registry.supported_versions) | {LATEST_ALIAS}

    @property
    def registry(self) -> VersionRegistry:
        return self._registry

    def rewrite(self, href: str, context: LinkRewriteContext) -> str:
        """Rewrite a root-relative href.

        Args:
            href: Href starting with "/"
            context: Language and version of the page being rendered

        Returns:
            Canonical href, identical to href when no rule applies

        Raises:
            ValueError: If context has no language code
        """
        if not context.language_code:
            raise ValueError("language_code is required")

        if href.startswith(EXCLUDED_PREFIXES) or href in self._external:
            return href

        href_without_language = get_path_without_language(href, self._registry)

        # Hardcoded plans and versions (including deprecated ones) are kept
        if self._is_pinned(href_without_language) or self._has_deprecated_version(href):
            new_href = get_path_with_language(href, context.language_code, self._registry)
        else:
            new_href = self._rewrite_version(href_without_language, context)

        return patterns.TRAILING_SLASH.sub(r"\1", new_href)

    def rewrite_all(self, hrefs: Iterable[str], context: LinkRewriteContext) -> dict[str, str]:
        """Rewrite many hrefs and return only the ones that changed.

        Hrefs that are not root-relative are skipped.
        """
        changed: dict[str, str] = {}
        for href in hrefs:
            if not href.startswith("/"):
                continue
            new_href = self.rewrite(href, context)
            if new_href != href:
                changed[href] = new_href
        return changed

    def _is_pinned(self, href_without_language: str) -> bool:
        first_segment = href_without_language.split("/")[1]
        return first_segment in self._pinned_segments

    def _has_deprecated_version(self, href: str) -> bool:
        for pattern in (patterns.ENTERPRISE_VERSION_NUMBER, patterns.ENTERPRISE_SERVER_NUMBER):
            match = pattern.match(href)
            if match and self._registry.is_deprecated(match.group(1)):
                return True
        return False

    def _effective_version(self, href_without_language: str, context: LinkRewriteContext) -> str:
        default = self._registry.non_enterprise_default_version
        version = context.version

        # dotcom-only and desktop links always point to dotcom
        if context.dotcom_only or patterns.DESKTOP_PRODUCT.search(href_without_language):
            version = default

        # admin and insights docs only exist on Enterprise
        if version == default and (
            patterns.ADMIN_PRODUCT.search(href_without_language)
            or patterns.INSIGHTS_PRODUCT.search(href_without_language)
        ):
            version = self._registry.latest_enterprise_version

        return version

    def _rewrite_version(self, href_without_language: str, context: LinkRewriteContext) -> str:
        new_href = join_path(
            context.language_code,
            get_new_versioned_path(href_without_language, self._registry),
        )
        version_from_href = get_version_string_from_path(new_href, self._registry)
        # A language root carries no version segment to swap
        if version_from_href == HOMEPAGE:
            return remove_fpt_from_path(new_href, self._registry)

        version = self._effective_version(href_without_language, context)

        new_href = replace_version_in_path(new_href, version_from_href, version, self._registry)
        return remove_fpt_from_path(new_href, self._registry)


def rewrite_link(
    href: str,
    context: LinkRewriteContext,
    registry: VersionRegistry,
    external_redirects: Mapping[str, str] | None = None,
) -> str:
    """Rewrite a single href with a throwaway LinkRewriter."""
    return LinkRewriter(registry, external_redirects).rewrite(href, context)
