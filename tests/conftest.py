"""Shared test fixtures."""

import pytest
from docshift.core.versions import VersionRegistry


@pytest.fixture
def registry() -> VersionRegistry:
    """Create a registry with 3.11 as the latest enterprise release."""
    return VersionRegistry.create(
        "3.11",
        deprecated=["2.1", "11.10.340"],
        last_release_with_legacy_format="2.12",
        first_restored_admin_guides="2.21",
        supported_versions=[
            "free-pro-team@latest",
            "enterprise-server@3.11",
            "enterprise-server@3.10",
            "github-ae@latest",
        ],
        non_enterprise_default_version="free-pro-team@latest",
    )
