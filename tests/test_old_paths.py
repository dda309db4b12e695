"""Tests for old path derivation."""

import pytest
from docshift.core.old_paths import derive_old_paths
from docshift.core.versions import VersionRegistry


class TestDefaultVersionPaths:
    """Tests for default version aliases."""

    def test__dotcom_path__adds_default_version(self, registry: VersionRegistry) -> None:
        """Old path /free-pro-team@latest/github/foo for /github/foo."""
        old_paths = derive_old_paths("/en/github/foo", "en", "free-pro-team@latest", registry)

        assert old_paths == {
            "/en/github/foo",
            "/en/free-pro-team@latest/github/foo",
            "/github/foo",
            "/free-pro-team@latest/github/foo",
        }

    def test__homepage__excludes_root(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en", "en", "free-pro-team@latest", registry)

        assert old_paths == {"/en", "/en/free-pro-team@latest", "/free-pro-team@latest"}

    def test__explicit_default_version__not_duplicated(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/ja/free-pro-team@latest/github", "ja", "free-pro-team@latest", registry)

        assert old_paths == {"/ja/free-pro-team@latest/github"}


class TestLegacyFormatPaths:
    """Tests for /enterprise/<release>/ era aliases."""

    def test__desktop__adds_guides(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en/desktop/foo", "en", "free-pro-team@latest", registry)

        assert "/en/desktop/guides/foo" in old_paths
        assert "/desktop/guides/foo" in old_paths

    def test__desktop_with_guides__unchanged(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en/desktop/guides/foo", "en", "free-pro-team@latest", registry)

        assert "/en/desktop/guides/guides/foo" not in old_paths

    def test__admin_deep_link__adds_guides(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/admin/foo", "en", "enterprise-server@3.11", registry
        )

        assert "/en/enterprise-server@3.11/admin/guides/foo" in old_paths
        assert "/en/admin/guides/foo" in old_paths
        assert "/enterprise/3.11/admin/guides/foo" in old_paths

    def test__admin_root_before_restored_guides__adds_guides(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@2.20/admin", "en", "enterprise-server@2.20", registry
        )

        assert "/en/enterprise-server@2.20/admin/guides" in old_paths
        assert "/enterprise/2.20/admin/guides" in old_paths

    def test__legacy_insights__maps_to_insights(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en/enterprise/3.11/user/insights/foo", "en", "3.11", registry)

        assert "/insights/foo" in old_paths
        assert "/en/insights/foo" in old_paths

    def test__legacy_release__drops_user_segment(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en/enterprise/2.11/user/github/foo", "en", "2.11", registry)

        assert "/en/enterprise/2.11/github/foo" in old_paths
        assert "/enterprise/2.11/github/foo" in old_paths

    def test__release_before_user_github__no_user_alias(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en/enterprise/2.11/user/github/foo", "en", "2.11", registry)

        assert "/en/enterprise/2.11/user/foo" not in old_paths

    def test__legacy_latest__maps_to_bare_enterprise(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/en/enterprise/3.11/admin/foo", "en", "3.11", registry)

        assert "/en/enterprise/admin/foo" in old_paths


class TestModernFormatPaths:
    """Tests for /enterprise-server@<release>/ aliases."""

    def test__admin_root__aliases(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/admin", "en", "enterprise-server@3.11", registry
        )

        assert "/en/admin" in old_paths
        assert "/en/enterprise/admin" in old_paths
        assert "/en/enterprise/3.11/admin" in old_paths
        assert "/en/enterprise-server/admin" in old_paths
        assert "/en/enterprise-server@latest/admin" in old_paths
        assert "/admin" in old_paths

    def test__admin_root_after_restored_guides__no_guides(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/admin", "en", "enterprise-server@3.11", registry
        )

        assert not any("/guides" in path for path in old_paths)

    def test__admin_product__no_user_segment_aliases(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/admin/foo", "en", "enterprise-server@3.11", registry
        )

        assert "/en/enterprise/3.11/user/admin/foo" not in old_paths
        assert "/en/enterprise/user/admin/foo" not in old_paths

    def test__github_suffix__full_alias_set(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/github", "en", "enterprise-server@3.11", registry
        )

        localized = {
            "/en/enterprise-server@3.11/github",
            "/en/enterprise/3.11/github",
            "/en/enterprise/3.11/user",
            "/en/enterprise/github",
            "/en/enterprise-server/github",
            "/en/enterprise-server@latest/github",
            "/en/enterprise/3.11/user/github",
            "/en/enterprise/user/github",
        }
        stripped = {path.removeprefix("/en") for path in localized}
        assert old_paths == localized | stripped

    def test__older_supported_release__no_latest_aliases(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.10/github/foo", "en", "enterprise-server@3.10", registry
        )

        assert "/en/enterprise/3.10/user/foo" in old_paths
        assert "/en/enterprise/3.10/user/github/foo" in old_paths
        assert "/en/enterprise-server@latest/github/foo" not in old_paths
        assert "/en/enterprise/user/github/foo" not in old_paths

    def test__admin_substring__checks_diverge(self, registry: VersionRegistry) -> None:
        """The guides rule matches any "admin" substring, the admin-product rule does not."""
        path = "/en/enterprise-server@3.11/github/administering-a-repository/foo"

        old_paths = derive_old_paths(path, "en", "enterprise-server@3.11", registry)

        assert "/en/enterprise-server@3.11/github/admin/guidesistering-a-repository/foo" in old_paths
        assert "/en/enterprise/3.11/user/github/administering-a-repository/foo" in old_paths

    def test__modern_insights__maps_to_insights(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/insights/foo", "en", "enterprise-server@3.11", registry
        )

        assert "/en/insights/foo" in old_paths

    def test__legacy_format_release__no_modern_aliases(self, registry: VersionRegistry) -> None:
        """Releases up to the last legacy-format release never had @ versions."""
        old_paths = derive_old_paths("/en/enterprise/2.11/user/github/foo", "en", "2.11", registry)

        assert not any("enterprise-server" in path for path in old_paths)


class TestOneOffPaths:
    """Tests for one-off aliases."""

    def test__latest_all_releases__adds_releases_page(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/admin/all-releases", "en", "enterprise-server@3.11", registry
        )

        assert "/enterprise-server-releases" in old_paths
        assert "/en/enterprise-server-releases" in old_paths

    def test__older_all_releases__no_releases_page(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.10/admin/all-releases", "en", "enterprise-server@3.10", registry
        )

        assert "/enterprise-server-releases" not in old_paths


class TestLanguageVariants:
    """Tests for language variant expansion."""

    def test__non_english__no_stripped_variants(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/ja/enterprise-server@3.11/github/foo", "ja", "enterprise-server@3.11", registry
        )

        assert old_paths
        assert all(path.startswith("/ja/") for path in old_paths)

    def test__english__stripped_variants(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths(
            "/en/enterprise-server@3.11/github", "en", "enterprise-server@3.11", registry
        )

        assert "/enterprise/3.11/user" in old_paths
        assert "/en/enterprise/3.11/user" in old_paths

    def test__language_agnostic_alias__gets_language(self, registry: VersionRegistry) -> None:
        old_paths = derive_old_paths("/ja/enterprise/3.11/user/insights", "ja", "3.11", registry)

        assert "/ja/insights" in old_paths


class TestInvariants:
    """Tests for properties that hold for every input."""

    @pytest.mark.parametrize(
        ("path", "language_code", "version"),
        [
            ("/en", "en", "free-pro-team@latest"),
            ("/ja", "ja", "free-pro-team@latest"),
            ("/en/enterprise-server@3.11", "en", "enterprise-server@3.11"),
            ("/en/enterprise/3.11", "en", "3.11"),
            ("/en/enterprise-server@3.11/admin", "en", "enterprise-server@3.11"),
            ("/en/enterprise/2.1/admin", "en", "2.1"),
            ("/en/enterprise/11.10.340/admin", "en", "11.10.340"),
            ("/en/github/foo", "en", "not-a-version"),
        ],
    )
    def test__never_contains_root_or_empty(
        self, registry: VersionRegistry, path: str, language_code: str, version: str
    ) -> None:
        old_paths = derive_old_paths(path, language_code, version, registry)

        assert "" not in old_paths
        assert "/" not in old_paths

    def test__includes_current_path(self, registry: VersionRegistry) -> None:
        path = "/en/enterprise-server@3.10/admin/foo"

        assert path in derive_old_paths(path, "en", "enterprise-server@3.10", registry)
