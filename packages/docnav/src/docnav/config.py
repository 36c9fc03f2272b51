"""Configuration management for Docnav.

Supports TOML configuration format with auto-discovery. Site metadata,
locales and theme options are passed through to renderers unchanged.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from docnav.core.types import BROKEN_LINK_POLICIES, BrokenLinkPolicy

CONFIG_FILENAME = "docnav.toml"


@dataclass
class SiteConfig:
    """Site metadata."""

    title: str = "Documentation"
    tagline: str | None = None
    url: str | None = None
    base_url: str = "/"
    favicon: str | None = None
    organization: str | None = None
    project: str | None = None


@dataclass
class I18nConfig:
    """Locale configuration."""

    default_locale: str = "en"
    locales: list[str] = field(default_factory=lambda: ["en"])


@dataclass
class DocsConfig:
    """Documentation sources configuration."""

    source_dir: Path = field(default_factory=lambda: Path("docs"))


@dataclass
class NavigationConfig:
    """Navigation configuration."""

    sidebars_file: Path = field(default_factory=lambda: Path("sidebars.json"))
    on_broken_links: BrokenLinkPolicy = "throw"


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    i18n: I18nConfig
    docs: DocsConfig
    navigation: NavigationConfig
    theme: dict[str, Any] = field(default_factory=dict)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docnav.toml in current directory and parents.

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
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
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
        """Create config with all defaults."""
        return cls(
            site=SiteConfig(),
            i18n=I18nConfig(),
            docs=DocsConfig(),
            navigation=NavigationConfig(),
        )

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
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        theme = data.get("theme", {})
        if not isinstance(theme, dict):
            raise ValueError("theme section must be a dictionary")

        return cls(
            site=cls._parse_site(data.get("site")),
            i18n=cls._parse_i18n(data.get("i18n")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            navigation=cls._parse_navigation(data.get("navigation"), config_dir),
            theme=theme,
            config_path=path,
        )

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

        title = data.get("title", "Documentation")
        if not isinstance(title, str):
            raise ValueError("site.title must be a string")

        base_url = data.get("base_url", "/")
        if not isinstance(base_url, str):
            raise ValueError("site.base_url must be a string")

        optional: dict[str, str | None] = {}
        for key in ("tagline", "url", "favicon", "organization", "project"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"site.{key} must be a string")
            optional[key] = value

        return SiteConfig(title=title, base_url=base_url, **optional)

    @classmethod
    def _parse_i18n(cls, data: object) -> I18nConfig:
        """Parse i18n configuration section.

        Locales default to the default locale alone.
        """
        if data is None:
            return I18nConfig()

        if not isinstance(data, dict):
            raise ValueError("i18n section must be a dictionary")

        default_locale = data.get("default_locale", "en")
        if not isinstance(default_locale, str):
            raise ValueError("i18n.default_locale must be a string")

        locales_raw = data.get("locales", [default_locale])
        if not isinstance(locales_raw, list):
            raise ValueError("i18n.locales must be a list")
        locales: list[str] = []
        for item in locales_raw:
            if not isinstance(item, str):
                raise ValueError("i18n.locales items must be strings")
            locales.append(item)

        return I18nConfig(default_locale=default_locale, locales=locales)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(source_dir=config_dir / "docs")

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        source_dir = data.get("source_dir", "docs")
        if not isinstance(source_dir, str):
            raise ValueError("docs.source_dir must be a string")

        return DocsConfig(source_dir=config_dir / source_dir)

    @classmethod
    def _parse_navigation(cls, data: object, config_dir: Path) -> NavigationConfig:
        """Parse navigation configuration section.

        Args:
            data: Raw navigation section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig(sidebars_file=config_dir / "sidebars.json")

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        sidebars_file = data.get("sidebars_file", "sidebars.json")
        if not isinstance(sidebars_file, str):
            raise ValueError("navigation.sidebars_file must be a string")

        on_broken_links = data.get("on_broken_links", "throw")
        if on_broken_links not in BROKEN_LINK_POLICIES:
            raise ValueError(
                "navigation.on_broken_links must be one of: "
                + ", ".join(BROKEN_LINK_POLICIES),
            )

        return NavigationConfig(
            sidebars_file=config_dir / sidebars_file,
            on_broken_links=on_broken_links,
        )

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        sidebars_file: Path | None = None,
        on_broken_links: BrokenLinkPolicy | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            source_dir: Override docs.source_dir
            sidebars_file: Override navigation.sidebars_file
            on_broken_links: Override navigation.on_broken_links

        Returns:
            New Config instance with overrides applied
        """
        docs = self.docs
        if source_dir is not None:
            docs = replace(self.docs, source_dir=source_dir)

        navigation = self.navigation
        if sidebars_file is not None or on_broken_links is not None:
            navigation = replace(
                self.navigation,
                sidebars_file=(
                    sidebars_file if sidebars_file is not None else self.navigation.sidebars_file
                ),
                on_broken_links=(
                    on_broken_links
                    if on_broken_links is not None
                    else self.navigation.on_broken_links
                ),
            )

        return replace(self, docs=docs, navigation=navigation)
