"""Version registry.

Static facts about the versions a docs site knows about, loaded once at
start-up and passed by reference into the path deriver and link rewriter.
"""

import operator
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property

from packaging.version import Version

ENTERPRISE_SERVER_PLAN = "enterprise-server"
DEFAULT_VERSION = "free-pro-team@latest"

# Language codes the docs site is translated into
DEFAULT_LANGUAGES = ("en", "cn", "ja", "es", "pt", "de", "ru", "ko", "fr")

# Predates numeric ordering with the 2.x series; only ever "older than"
LEGACY_DOTTED_RELEASE = "11.10.340"

_RELEASE_PATTERN = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")
_RANGE_PATTERN = re.compile(r"^\s*([<>=])\s*(\S+)\s*$")

_RANGE_OPERATORS: dict[str, Callable[[Version, Version], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "=": operator.eq,
}


def coerce_release(version: str) -> Version | None:
    """Extract the first numeric release from a version identifier.

    "enterprise-server@3.11" -> 3.11.0, "2.20" -> 2.20.0,
    "free-pro-team@latest" -> None.
    """
    match = _RELEASE_PATTERN.search(version)
    if match is None:
        return None
    major, minor, patch = match.groups()
    return Version(f"{major}.{minor or 0}.{patch or 0}")


def version_satisfies_range(version: str, range_expr: str) -> bool:
    """Check a version identifier against a "<X", ">X" or "=X" range.

    Args:
        version: Version identifier, bare or composite
        range_expr: Comparison operator followed by a release

    Returns:
        True if the release found in version satisfies the range. Identifiers
        without a numeric release never satisfy any range.

    Raises:
        ValueError: If range_expr is not a supported range
    """
    match = _RANGE_PATTERN.match(range_expr)
    if match is None:
        raise ValueError(f"Unsupported version range: {range_expr!r}")
    op, bound = match.groups()

    bound_release = coerce_release(bound)
    if bound_release is None:
        raise ValueError(f"Version range has no release: {range_expr!r}")

    if version == LEGACY_DOTTED_RELEASE:
        return op == "<"

    release = coerce_release(version)
    if release is None:
        return False
    return _RANGE_OPERATORS[op](release, bound_release)


def _release_of(version: str) -> str:
    """Strip the enterprise-server plan prefix from a version identifier."""
    prefix = f"{ENTERPRISE_SERVER_PLAN}@"
    return version[len(prefix):] if version.startswith(prefix) else version


@dataclass(frozen=True)
class VersionRegistry:
    """Immutable facts about known versions.

    Attributes:
        latest: Latest enterprise release (e.g., "3.11")
        deprecated: Releases no longer served (e.g., "2.1", "11.10.340")
        last_release_with_legacy_format: Last release served under
            /enterprise/<release>/ instead of /enterprise-server@<release>/
        first_restored_admin_guides: Release at which /admin/guides came back
        supported_versions: Currently supported version identifiers
        non_enterprise_default_version: Version implied when a path has none
        languages: Language codes recognized as the first path segment
    """

    latest: str
    deprecated: frozenset[str] = field(default_factory=frozenset)
    last_release_with_legacy_format: str = "2.18"
    first_restored_admin_guides: str = "2.21"
    supported_versions: tuple[str, ...] = ()
    non_enterprise_default_version: str = DEFAULT_VERSION
    languages: frozenset[str] = frozenset(DEFAULT_LANGUAGES)

    @classmethod
    def create(
        cls,
        latest: str,
        *,
        deprecated: Iterable[str] = (),
        last_release_with_legacy_format: str = "2.18",
        first_restored_admin_guides: str = "2.21",
        supported_versions: Iterable[str] | None = None,
        non_enterprise_default_version: str = DEFAULT_VERSION,
        languages: Iterable[str] = DEFAULT_LANGUAGES,
    ) -> "VersionRegistry":
        """Build a registry from plain iterables.

        When supported_versions is omitted, the default version and the
        latest enterprise release are supported.
        """
        if supported_versions is None:
            supported_versions = (
                non_enterprise_default_version,
                f"{ENTERPRISE_SERVER_PLAN}@{latest}",
            )
        return cls(
            latest=latest,
            deprecated=frozenset(deprecated),
            last_release_with_legacy_format=last_release_with_legacy_format,
            first_restored_admin_guides=first_restored_admin_guides,
            supported_versions=tuple(supported_versions),
            non_enterprise_default_version=non_enterprise_default_version,
            languages=frozenset(languages),
        )

    @property
    def latest_enterprise_version(self) -> str:
        """Composite identifier of the latest enterprise release."""
        return f"{ENTERPRISE_SERVER_PLAN}@{self.latest}"

    @property
    def supported_plans(self) -> frozenset[str]:
        """Plans of all supported versions (e.g., "enterprise-server")."""
        return frozenset(version.split("@", 1)[0] for version in self.supported_versions)

    def is_supported(self, version: str) -> bool:
        return version in self.supported_versions

    def is_deprecated(self, version: str) -> bool:
        """Check a bare or enterprise-server composite version against deprecated releases."""
        return _release_of(version) in self.deprecated

    def satisfies(self, version: str, range_expr: str) -> bool:
        return version_satisfies_range(version, range_expr)

    @cached_property
    def language_prefix(self) -> re.Pattern[str]:
        """Pattern matching a known language as the first path segment."""
        codes = "|".join(re.escape(code) for code in sorted(self.languages))
        return re.compile(rf"^/(?:{codes})(?=/|$)")
