"""Path grammar.

Decomposes site paths into language, version and remainder segments and
recomposes them. All functions are pure string transformations.
"""

from docshift.core import patterns
from docshift.core.versions import ENTERPRISE_SERVER_PLAN, VersionRegistry

HOMEPAGE = "homepage"


def join_path(*segments: str) -> str:
    """Join path segments into a root-relative path.

    Empty segments are skipped and duplicate slashes collapsed, so
    join_path("en", "/foo/") == "/en/foo".
    """
    parts = [segment.strip("/") for segment in segments]
    joined = "/".join(part for part in parts if part)
    return patterns.MULTIPLE_SLASHES.sub("/", f"/{joined}")


def get_path_without_language(path: str, registry: VersionRegistry) -> str:
    """Remove the language segment.

    /en/articles/foo -> /articles/foo, /en -> /. Only codes in
    registry.languages count as a language, so /go/foo is left alone.
    """
    return registry.language_prefix.sub("", path, count=1) or "/"


def get_path_with_language(path: str, language_code: str, registry: VersionRegistry) -> str:
    """Replace or add the language segment.

    /articles/foo -> /en/articles/foo, /ja/articles/foo -> /en/articles/foo
    """
    joined = join_path(language_code, get_path_without_language(path, registry))
    return patterns.TRAILING_SLASH.sub(r"\1", joined)


def get_version_string_from_path(path: str, registry: VersionRegistry) -> str:
    """Return the version segment of a path.

    Returns "homepage" for a language root, the first segment when it is a
    supported or deprecated version, and the non-enterprise default version
    otherwise (paths without a version belong to the default version).
    """
    path = get_path_without_language(path, registry)
    if path == "/":
        return HOMEPAGE

    version = path.split("/")[1]
    if registry.is_supported(version):
        return version
    if version.startswith(f"{ENTERPRISE_SERVER_PLAN}@") and registry.is_deprecated(version):
        return version
    return registry.non_enterprise_default_version


def get_new_versioned_path(path: str, registry: VersionRegistry) -> str:
    """Convert a legacy versioned path to the modern versioned shape.

    /enterprise/2.20/user/github/foo -> /enterprise-server@2.20/github/foo
    /enterprise/admin/foo -> /enterprise-server@<latest>/admin/foo

    Paths that already carry a modern version, and paths that are not
    enterprise paths, are returned unchanged.
    """
    if f"/{ENTERPRISE_SERVER_PLAN}@" in path:
        return path
    if any(f"/{version}" in path for version in registry.supported_versions):
        return path

    language = registry.language_prefix.match(path)
    language_segment = language.group(0) if language else ""
    match = patterns.LEGACY_ENTERPRISE_PATH.match(path, len(language_segment))
    if match is None:
        return path

    release = match.group("release") or registry.latest
    rest = patterns.LEGACY_USER_SEGMENT.sub("", path[match.end():], count=1)
    return join_path(
        language_segment,
        f"{ENTERPRISE_SERVER_PLAN}@{release}",
        rest,
    )


def replace_version_in_path(
    path: str, old_version: str, new_version: str, registry: VersionRegistry
) -> str:
    """Swap the version segment of a path.

    When old_version is not a segment of the path (it was implied), the
    new version takes the slot right after the language segment: it replaces
    an unknown plan@release token there, or is inserted.
    """
    segments = path.split("/")
    if old_version in segments:
        segments[segments.index(old_version)] = new_version
        return "/".join(segments)

    slot = 2 if registry.language_prefix.match(path) else 1
    if len(segments) > slot and "@" in segments[slot]:
        segments[slot] = new_version
    else:
        segments.insert(slot, new_version)
    return "/".join(segments)


def remove_fpt_from_path(path: str, registry: VersionRegistry) -> str:
    """Drop the non-enterprise default version segment from a path.

    The default version stays valid in content and code, but never appears
    in user-facing URLs.
    """
    stripped = path.replace(f"/{registry.non_enterprise_default_version}", "", 1)
    return stripped or "/"
