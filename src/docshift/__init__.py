"""docshift - historical paths and local links for versioned docs sites."""

from docshift.core.links import LinkRewriteContext, LinkRewriter, rewrite_link
from docshift.core.old_paths import derive_old_paths
from docshift.core.redirects import Permalink, RedirectTable, build_redirect_table
from docshift.core.versions import VersionRegistry, version_satisfies_range

__all__ = [
    "LinkRewriteContext",
    "LinkRewriter",
    "Permalink",
    "RedirectTable",
    "VersionRegistry",
    "build_redirect_table",
    "derive_old_paths",
    "rewrite_link",
    "version_satisfies_range",
]
