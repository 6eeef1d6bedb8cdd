"""Configuration management for Blogfront."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .comments import GiscusConfig
from .sources import DEFAULT_INDEX_PATH, DEFAULT_PAGES_DIR

DEFAULT_CONFIG_DIR = Path("~/.config/blogfront").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_SOURCE = "site"
DEFAULT_STATE_DIRNAME = "state"
DEFAULT_SITE_TITLE = "Blog"
DEFAULT_RENDERER = "markdown"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file misses required keys or values."""


@dataclass(slots=True)
class BlogfrontConfig:
    """In-memory representation of the Blogfront configuration file."""

    source: str
    state_dir: Path
    index_path: str = DEFAULT_INDEX_PATH
    pages_dir: str = DEFAULT_PAGES_DIR
    site_title: str = DEFAULT_SITE_TITLE
    renderer: str = DEFAULT_RENDERER
    color_scheme: str | None = None
    templates_dir: Path | None = None
    giscus: GiscusConfig | None = None
    plugins: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_path: Path | None = None


def _optional_str(section: dict[str, Any], key: str, where: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidConfigError(f"'{key}' in [{where}] must be a string when provided")
    return value.strip() or None


def _resolve_dir(raw: str | None, config_dir: Path, default: str) -> Path:
    path = Path(raw or default).expanduser()
    return (path if path.is_absolute() else config_dir / path).resolve()


def _resolve_source(raw: str | None, config_dir: Path) -> str:
    if raw and raw.startswith(("http://", "https://")):
        return raw
    return str(_resolve_dir(raw, config_dir, DEFAULT_SOURCE))


def _load_giscus(raw: Any) -> GiscusConfig | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise InvalidConfigError("'giscus' must be a table")

    values: dict[str, str] = {}
    for key, value in raw.items():
        if key not in GiscusConfig.__dataclass_fields__:
            raise InvalidConfigError(f"Unknown giscus setting '{key}'")
        if not isinstance(value, str):
            raise InvalidConfigError(f"giscus setting '{key}' must be a string")
        values[key] = value.strip()

    if not values.get("repo") or not values.get("repo_id"):
        raise InvalidConfigError("[giscus] requires non-empty 'repo' and 'repo_id'")
    return GiscusConfig(**values)


def load_config(path: Path | None = None) -> BlogfrontConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/blogfront/config.toml``) is used.

    Raises
    ------
    MissingConfigError
        If the file cannot be found.
    InvalidConfigError
        If settings are malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise MissingConfigError(config_path)

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    section = raw.get("blogfront", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'blogfront' section must be a table")

    config_dir = config_path.parent.expanduser()

    source = _resolve_source(_optional_str(section, "source", "blogfront"), config_dir)
    state_dir = _resolve_dir(
        _optional_str(section, "state_dir", "blogfront"),
        config_dir,
        DEFAULT_STATE_DIRNAME,
    )
    templates_raw = _optional_str(section, "templates_dir", "blogfront")
    templates_dir = (
        _resolve_dir(templates_raw, config_dir, "") if templates_raw else None
    )

    color_scheme = _optional_str(section, "color_scheme", "blogfront")
    if color_scheme is not None and color_scheme not in ("dark", "light"):
        raise InvalidConfigError("'color_scheme' must be 'dark' or 'light'")

    plugins_section = raw.get("plugins")
    plugins: dict[str, dict[str, Any]] = {}
    if isinstance(plugins_section, dict):
        for key, value in plugins_section.items():
            plugins[str(key)] = dict(value) if isinstance(value, dict) else {}

    return BlogfrontConfig(
        source=source,
        state_dir=state_dir,
        index_path=_optional_str(section, "index_path", "blogfront")
        or DEFAULT_INDEX_PATH,
        pages_dir=_optional_str(section, "pages_dir", "blogfront") or DEFAULT_PAGES_DIR,
        site_title=_optional_str(section, "site_title", "blogfront")
        or DEFAULT_SITE_TITLE,
        renderer=_optional_str(section, "renderer", "blogfront") or DEFAULT_RENDERER,
        color_scheme=color_scheme,
        templates_dir=templates_dir,
        giscus=_load_giscus(raw.get("giscus")),
        plugins=plugins,
        source_path=config_path,
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[blogfront]\n"
        'source = "site"\n'
        'site_title = "My Blog"\n'
        'renderer = "markdown"\n'
        "\n"
        "# [giscus]\n"
        '# repo = "owner/owner.github.io"\n'
        '# repo_id = "R_..."\n'
        '# category = "General"\n'
        '# category_id = "DIC_..."\n'
    )
    path.write_text(default_content, encoding="utf-8")
    return True
