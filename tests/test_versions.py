"""Tests for the version registry."""

import pytest
from docshift.core.versions import (
    VersionRegistry,
    coerce_release,
    version_satisfies_range,
)
from packaging.version import Version


class TestCoerceRelease:
    """Tests for coerce_release()."""

    def test__composite_version__returns_release(self) -> None:
        assert coerce_release("enterprise-server@3.11") == Version("3.11.0")

    def test__bare_release__returns_release(self) -> None:
        assert coerce_release("2.20") == Version("2.20.0")

    def test__no_release__returns_none(self) -> None:
        assert coerce_release("free-pro-team@latest") is None


class TestVersionSatisfiesRange:
    """Tests for version_satisfies_range()."""

    def test__less_than__compares_numerically(self) -> None:
        """2.3 is older than 2.21, not newer."""
        assert version_satisfies_range("2.3", "<2.21")
        assert not version_satisfies_range("2.21", "<2.3")

    def test__greater_than__composite_version(self) -> None:
        assert version_satisfies_range("enterprise-server@3.11", ">2.15")
        assert not version_satisfies_range("enterprise-server@2.15", ">2.15")

    def test__equal__matches_same_release(self) -> None:
        assert version_satisfies_range("enterprise-server@3.11", "=3.11")
        assert not version_satisfies_range("enterprise-server@3.10", "=3.11")

    def test__no_release__never_satisfies(self) -> None:
        assert not version_satisfies_range("free-pro-team@latest", "<3.0")
        assert not version_satisfies_range("free-pro-team@latest", ">2.15")

    def test__legacy_dotted_release__only_older(self) -> None:
        """11.10.340 predates the 2.x series."""
        assert version_satisfies_range("11.10.340", "<2.21")
        assert not version_satisfies_range("11.10.340", ">2.15")

    @pytest.mark.parametrize("range_expr", ["~2.1", "2.1", "<", "<latest"])
    def test__malformed_range__raises_value_error(self, range_expr: str) -> None:
        with pytest.raises(ValueError):
            version_satisfies_range("2.20", range_expr)


class TestVersionRegistry:
    """Tests for VersionRegistry."""

    def test__create__defaults_supported_versions(self) -> None:
        registry = VersionRegistry.create("3.11")

        assert registry.supported_versions == ("free-pro-team@latest", "enterprise-server@3.11")

    def test__latest_enterprise_version__is_composite(self, registry: VersionRegistry) -> None:
        assert registry.latest_enterprise_version == "enterprise-server@3.11"

    def test__supported_plans__from_supported_versions(self, registry: VersionRegistry) -> None:
        assert registry.supported_plans == {"free-pro-team", "enterprise-server", "github-ae"}

    def test__is_deprecated__bare_and_composite(self, registry: VersionRegistry) -> None:
        assert registry.is_deprecated("2.1")
        assert registry.is_deprecated("enterprise-server@2.1")
        assert not registry.is_deprecated("enterprise-server@3.11")
        assert not registry.is_deprecated("free-pro-team@latest")

    def test__registry__is_immutable(self, registry: VersionRegistry) -> None:
        with pytest.raises(AttributeError):
            registry.latest = "3.12"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("path", "matches"),
        [
            ("/en", True),
            ("/ja/github", True),
            ("/go/foo", False),
            ("/enterprise", False),
            ("/", False),
        ],
    )
    def test__language_prefix__only_known_languages(
        self, registry: VersionRegistry, path: str, matches: bool
    ) -> None:
        assert (registry.language_prefix.match(path) is not None) is matches
