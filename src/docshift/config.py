"""Configuration management for docshift.

Supports TOML configuration format with auto-discovery.
"""

import json
import logging
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from docshift.core.versions import (
    DEFAULT_LANGUAGES,
    DEFAULT_VERSION,
    ENTERPRISE_SERVER_PLAN,
    VersionRegistry,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "docshift.toml"

DEFAULT_LATEST = "3.11"
DEFAULT_DEPRECATED = ("11.10.340", "2.0", "2.1", "2.2", "2.3", "2.4", "2.5", "2.6", "2.7", "2.8")
GITHUB_AE_VERSION = "github-ae@latest"


@dataclass
class VersionsConfig:
    """Version registry configuration.

    When supported is not set, the supported versions follow latest.
    """

    latest: str = DEFAULT_LATEST
    deprecated: list[str] = field(default_factory=lambda: list(DEFAULT_DEPRECATED))
    last_release_with_legacy_format: str = "2.18"
    first_restored_admin_guides: str = "2.21"
    supported: list[str] | None = None
    non_enterprise_default: str = DEFAULT_VERSION

    def supported_versions(self) -> list[str]:
        if self.supported is not None:
            return self.supported
        return [
            self.non_enterprise_default,
            f"{ENTERPRISE_SERVER_PLAN}@{self.latest}",
            GITHUB_AE_VERSION,
        ]

    def with_latest(self, latest: str) -> "VersionsConfig":
        """Move latest to a new release, keeping it supported.

        An explicit supported list gains the new release next to the previous
        latest; the previous latest stays supported.
        """
        supported = self.supported
        new_version = f"{ENTERPRISE_SERVER_PLAN}@{latest}"
        if supported is not None and new_version not in supported:
            previous = f"{ENTERPRISE_SERVER_PLAN}@{self.latest}"
            position = supported.index(previous) if previous in supported else len(supported)
            supported = [*supported[:position], new_version, *supported[position:]]
        return replace(self, latest=latest, supported=supported)

    def to_registry(self, languages: Iterable[str] = DEFAULT_LANGUAGES) -> VersionRegistry:
        """Freeze into the registry passed to the deriver and rewriter."""
        return VersionRegistry.create(
            self.latest,
            deprecated=self.deprecated,
            last_release_with_legacy_format=self.last_release_with_legacy_format,
            first_restored_admin_guides=self.first_restored_admin_guides,
            supported_versions=self.supported_versions(),
            non_enterprise_default_version=self.non_enterprise_default,
            languages=languages,
        )


@dataclass
class LinksConfig:
    """Link rewriting configuration."""

    external_redirects: Path | None = None


@dataclass
class SiteConfig:
    """Site layout configuration."""

    languages: list[str] = field(default_factory=lambda: list(DEFAULT_LANGUAGES))


@dataclass
class Config:
    """Application configuration."""

    versions: VersionsConfig
    links: LinksConfig
    site: SiteConfig = field(default_factory=SiteConfig)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docshift.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(versions=VersionsConfig(), links=LinksConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        logger.debug(f"Loading configuration from {path}")
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent
        return cls(
            versions=cls._parse_versions(data.get("versions")),
            links=cls._parse_links(data.get("links"), config_dir),
            site=cls._parse_site(data.get("site")),
            config_path=path,
        )

    @classmethod
    def _parse_versions(cls, data: object) -> VersionsConfig:
        """Parse versions configuration section.

        Args:
            data: Raw versions section data

        Returns:
            VersionsConfig instance
        """
        if data is None:
            return VersionsConfig()

        if not isinstance(data, dict):
            raise ValueError("versions section must be a dictionary")

        defaults = VersionsConfig()

        latest = data.get("latest", defaults.latest)
        if not isinstance(latest, str):
            raise ValueError("versions.latest must be a string")

        last_legacy = data.get("last_release_with_legacy_format", defaults.last_release_with_legacy_format)
        if not isinstance(last_legacy, str):
            raise ValueError("versions.last_release_with_legacy_format must be a string")

        restored_guides = data.get("first_restored_admin_guides", defaults.first_restored_admin_guides)
        if not isinstance(restored_guides, str):
            raise ValueError("versions.first_restored_admin_guides must be a string")

        default_version = data.get("non_enterprise_default", defaults.non_enterprise_default)
        if not isinstance(default_version, str):
            raise ValueError("versions.non_enterprise_default must be a string")

        deprecated = cls._parse_string_list(data, "versions", "deprecated", defaults.deprecated)
        supported = cls._parse_string_list(data, "versions", "supported", defaults.supported)

        return VersionsConfig(
            latest=latest,
            deprecated=deprecated,
            last_release_with_legacy_format=last_legacy,
            first_restored_admin_guides=restored_guides,
            supported=supported,
            non_enterprise_default=default_version,
        )

    @classmethod
    def _parse_string_list(
        cls, data: dict, section: str, key: str, default: list[str] | None
    ) -> list[str] | None:
        raw = data.get(key)
        if raw is None:
            return default
        if not isinstance(raw, list):
            raise ValueError(f"{section}.{key} must be a list")
        items: list[str] = []
        for item in raw:
            if not isinstance(item, str):
                raise ValueError(f"{section}.{key} items must be strings")
            items.append(item)
        return items

    @classmethod
    def _parse_links(cls, data: object, config_dir: Path) -> LinksConfig:
        """Parse links configuration section.

        Args:
            data: Raw links section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            LinksConfig instance
        """
        if data is None:
            return LinksConfig()

        if not isinstance(data, dict):
            raise ValueError("links section must be a dictionary")

        external_redirects = data.get("external_redirects")
        if external_redirects is None:
            return LinksConfig()
        if not isinstance(external_redirects, str):
            raise ValueError("links.external_redirects must be a string")

        return LinksConfig(external_redirects=config_dir / external_redirects)

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        languages = cls._parse_string_list(data, "site", "languages", None)
        if languages is None:
            return SiteConfig()
        if not languages:
            raise ValueError("site.languages must not be empty")

        return SiteConfig(languages=languages)

    def registry(self) -> VersionRegistry:
        """Build the immutable version registry."""
        return self.versions.to_registry(languages=self.site.languages)

    def load_external_redirects(self) -> dict[str, str]:
        """Read the external redirect registry.

        Returns:
            Mapping of legacy href to off-site destination, empty if not configured

        Raises:
            FileNotFoundError: If the configured file doesn't exist
            ValueError: If the file is not a JSON object of strings
        """
        path = self.links.external_redirects
        if path is None:
            return {}
        if not path.exists():
            raise FileNotFoundError(f"External redirects file not found: {path}")

        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("External redirects must be a JSON object")
        for key, value in data.items():
            if not isinstance(value, str):
                raise ValueError(f"External redirect for {key} must be a string")
        return data

    def with_overrides(self, *, latest: str | None = None) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            latest: Override versions.latest; an explicit supported list
                gains the new latest release

        Returns:
            New Config instance with overrides applied
        """
        versions = self.versions
        if latest is not None:
            versions = self.versions.with_latest(latest)
        return replace(self, versions=versions)
