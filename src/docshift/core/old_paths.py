"""Historical path derivation.

Applies what we know about historically supported URL schemes to a current
path and returns every old path that users might still try to hit.

Rules add to one shared set instead of chaining substitutions: several old
schemes can alias the same current path at once, and some rules must see the
original path rather than another rule's output.
"""

from docshift.core import patterns
from docshift.core.paths import (
    HOMEPAGE,
    get_path_with_language,
    get_path_without_language,
    get_version_string_from_path,
)
from docshift.core.versions import VersionRegistry

ENGLISH = "en"

# /user/github only exists from 2.16 on
LAST_RELEASE_WITHOUT_USER_GITHUB = "2.15"

ALL_RELEASES_SUFFIX = "/admin/all-releases"
ENTERPRISE_RELEASES_PATH = "/enterprise-server-releases"


def derive_old_paths(
    current_path: str,
    language_code: str,
    current_version: str,
    registry: VersionRegistry,
) -> set[str]:
    """Derive all old paths that must resolve to current_path.

    Args:
        current_path: Canonical path including language (e.g., "/en/github/foo")
        language_code: Language of the page (e.g., "en")
        current_version: Version of the page, supported or not
        registry: Version registry facts

    Returns:
        Set of old paths, including current_path under legacy conventions.
        Never contains "" or "/".
    """
    old_paths: set[str] = set()

    _add_default_version_paths(old_paths, current_path, language_code, registry)
    _add_legacy_format_paths(old_paths, current_path, language_code, current_version, registry)

    if registry.is_supported(current_version) or registry.satisfies(
        current_version, f">{registry.last_release_with_legacy_format}"
    ):
        _add_modern_format_paths(old_paths, current_path, registry)

    if registry.satisfies(current_version, f"={registry.latest}") and current_path.endswith(
        ALL_RELEASES_SUFFIX
    ):
        old_paths.add(ENTERPRISE_RELEASES_PATH)

    for old_path in set(old_paths):
        if language_code == ENGLISH:
            old_paths.add(get_path_without_language(old_path, registry))
        old_paths.add(get_path_with_language(old_path, language_code, registry))

    old_paths.discard("")
    old_paths.discard("/")
    return old_paths


def _add_default_version_paths(
    old_paths: set[str],
    current_path: str,
    language_code: str,
    registry: VersionRegistry,
) -> None:
    """Add /<lang>/<default version>/foo for a current path /<lang>/foo."""
    default = registry.non_enterprise_default_version
    version = get_version_string_from_path(current_path, registry)
    known = registry.is_supported(version) or registry.is_deprecated(version)

    if version == HOMEPAGE or not known or (version == default and default not in current_path):
        old_paths.add(current_path.replace(f"/{language_code}", f"/{language_code}/{default}", 1))


def _add_legacy_format_paths(
    old_paths: set[str],
    current_path: str,
    language_code: str,
    current_version: str,
    registry: VersionRegistry,
) -> None:
    """Add old paths from the /enterprise/<release>/ URL era.

    These remain relevant for legacy-formatted frontmatter redirects and
    archived version paths.
    """
    latest = registry.latest

    # /insights from /enterprise/<latest>/user/insights
    old_paths.add(current_path.replace(f"/{language_code}/enterprise/{latest}/user/insights", "/insights", 1))

    # /desktop/guides from /desktop
    if "/desktop" in current_path and "/guides" not in current_path:
        old_paths.add(current_path.replace("/desktop", "/desktop/guides", 1))

    # /admin/guides from /admin, before guides were restored and in deep links
    if "admin" in current_path and "/guides" not in current_path:
        if registry.satisfies(
            current_version, f"<{registry.first_restored_admin_guides}"
        ) or not current_path.endswith("/admin"):
            old_paths.add(current_path.replace("/admin", "/admin/guides", 1))

    # /user from /user/github
    if registry.is_supported(current_version) or registry.satisfies(
        current_version, f">{LAST_RELEASE_WITHOUT_USER_GITHUB}"
    ):
        old_paths.add(current_path.replace("/user/github", "/user", 1))

    # /enterprise from /enterprise/<latest>
    old_paths.add(current_path.replace(f"/enterprise/{latest}", "/enterprise", 1))

    # /enterprise/foo from /enterprise/user/foo (old developer paths had no /user)
    if "/enterprise/" in current_path:
        old_paths.add(current_path.replace("/user/", "/", 1))


def _add_modern_format_paths(
    old_paths: set[str],
    current_path: str,
    registry: VersionRegistry,
) -> None:
    """Add legacy aliases of /enterprise-server@<release>/ paths.

    Runs once over a snapshot of the set; aliases added here are not fed
    back through these rules.
    """
    latest_segment = f"/{registry.latest_enterprise_version}"

    for old_path in set(old_paths):
        # /enterprise/<release> from /enterprise-server@<release>
        old_paths.add(patterns.ENTERPRISE_SERVER_RELEASE.sub(r"/enterprise/\1", old_path, count=1))

        # /enterprise/<release>/user from /enterprise-server@<release>/github
        old_paths.add(patterns.ENTERPRISE_SERVER_GITHUB.sub(r"/enterprise/\1/user", old_path, count=1))

        old_paths.add(old_path.replace(f"{latest_segment}/insights", "/insights", 1))
        old_paths.add(old_path.replace(f"{latest_segment}/admin", "/admin", 1))
        old_paths.add(old_path.replace(latest_segment, "/enterprise", 1))
        old_paths.add(old_path.replace(latest_segment, "/enterprise-server", 1))
        old_paths.add(old_path.replace(latest_segment, "/enterprise-server@latest", 1))

        if not patterns.ADMIN_PRODUCT.search(old_path):
            # /enterprise/<release>/user/foo from /enterprise-server@<release>/foo
            old_paths.add(patterns.ENTERPRISE_SERVER_SEGMENT.sub(r"/enterprise/\1/user/", current_path, count=1))

            # /enterprise/user/foo from /enterprise-server@<latest>/foo
            old_paths.add(current_path.replace(f"{latest_segment}/", "/enterprise/user/", 1))
