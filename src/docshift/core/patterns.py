"""Compiled path patterns shared by the deriver and the link rewriter."""

import re

# Any number of trailing slashes on anything longer than root
TRAILING_SLASH = re.compile(r"^(.+?)/+$")

ADMIN_PRODUCT = re.compile(r"/admin(?:/|$|\?|#)")
INSIGHTS_PRODUCT = re.compile(r"/insights(?:/|$|\?|#)")
DESKTOP_PRODUCT = re.compile(r"^/desktop(?:/|$|\?|#)")

# /enterprise/2.20/admin -> 2.20, /enterprise/11.10.340/admin -> 11.10.340
ENTERPRISE_VERSION_NUMBER = re.compile(r"^.*?/enterprise/(\d+\.\d+(?:\.\d+)?)(?:/.*)?$")

# /enterprise-server@2.20/admin -> 2.20
ENTERPRISE_SERVER_NUMBER = re.compile(r"^.*?/enterprise-server@(\d+\.\d+)(?:/.*)?$")

# Legacy versioned shape: /enterprise and an optional release. Applied with
# match() after any language segment, so it carries no "^" anchor
LEGACY_ENTERPRISE_PATH = re.compile(
    r"/enterprise(?:/(?P<release>\d+\.\d+(?:\.\d+)?))?(?=/|$)"
)

LEGACY_USER_SEGMENT = re.compile(r"^/user(?=/|$)")

MULTIPLE_SLASHES = re.compile(r"/{2,}")

# Modern-format replacements
ENTERPRISE_SERVER_RELEASE = re.compile(r"/enterprise-server@(\d)")
ENTERPRISE_SERVER_GITHUB = re.compile(r"/enterprise-server@(\d.+?)/github")
ENTERPRISE_SERVER_SEGMENT = re.compile(r"/enterprise-server@(\d.+?)/")
