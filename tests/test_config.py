from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from blogfront.config import (
    DEFAULT_RENDERER,
    BlogfrontConfig,
    ConfigError,
    InvalidConfigError,
    MissingConfigError,
    bootstrap_config_file,
    load_config,
)


def write_config(tmp_path: Path, content: str) -> Path:
    config_file = tmp_path / "config.toml"
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(textwrap.dedent(content), encoding="utf-8")
    return config_file


def test_defaults_resolve_against_config_dir(tmp_path: Path) -> None:
    config_path = write_config(tmp_path / "nested", "")

    config = load_config(config_path)
    base = config_path.parent.resolve()
    assert config.source == str(base / "site")
    assert config.state_dir == base / "state"
    assert config.renderer == DEFAULT_RENDERER
    assert config.giscus is None
    assert config.source_path == config_path


def test_load_config_success(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [blogfront]
        source = "https://blog.example.test"
        index_path = "data/posts.json"
        site_title = "Notes"
        renderer = "plain"
        color_scheme = "dark"
        templates_dir = "templates"

        [giscus]
        repo = "owner/blog"
        repo_id = "R_1"
        category_id = "DIC_1"
        lang = "en"

        [plugins.blogfront-markdown]
        css_class = "code"
        """,
    )

    config = load_config(config_path)
    assert isinstance(config, BlogfrontConfig)
    assert config.source == "https://blog.example.test"
    assert config.index_path == "data/posts.json"
    assert config.site_title == "Notes"
    assert config.renderer == "plain"
    assert config.color_scheme == "dark"
    assert config.templates_dir == (tmp_path / "templates").resolve()
    assert config.giscus is not None
    assert config.giscus.lang == "en"
    assert config.giscus.mapping == "pathname"
    assert config.plugins == {"blogfront-markdown": {"css_class": "code"}}


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigError):
        load_config(tmp_path / "missing.toml")


@pytest.mark.parametrize(
    "content",
    [
        "[blogfront]\nsite_title = 3\n",
        '[blogfront]\ncolor_scheme = "blue"\n',
        "blogfront = 1\n",
        '[giscus]\nrepo = "owner/blog"\n',
        '[giscus]\nrepo = "o/b"\nrepo_id = "R"\ntheme = "x"\n',
        "[blogfront\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path: Path, content: str) -> None:
    config_path = write_config(tmp_path, content)
    with pytest.raises(InvalidConfigError):
        load_config(config_path)


def test_bootstrap_config_file_creates_loadable_file(tmp_path: Path) -> None:
    path = tmp_path / "cfg" / "config.toml"

    assert bootstrap_config_file(path) is True
    assert bootstrap_config_file(path) is False

    config = load_config(path)
    assert config.site_title == "My Blog"


def test_errors_share_base_class() -> None:
    assert issubclass(MissingConfigError, ConfigError)
    assert issubclass(InvalidConfigError, ConfigError)
