"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/en/enterprise-server@3.11/admin")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Version identifier (e.g., "free-pro-team@latest", "enterprise-server@3.11", "2.20")
VersionId = NewType("VersionId", str)
