"""Application bootstrap and context container for Blogfront."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .comments import GiscusWidget
from .config import BlogfrontConfig, ConfigError, load_config
from .pages import PostPage
from .plugins import (
    BootstrapContext,
    MarkdownRenderer,
    build_settings_getter,
    resolve_renderer,
    run_bootstrap,
)
from .preferences import DB_FILENAME, PreferenceStore
from .render import HtmlRenderer
from .sources import PostSource, source_from_location
from .theme import SystemColorScheme, ThemeController


@dataclass(slots=True)
class AppContext:
    """Aggregates core services shared by the pages of one session."""

    config: BlogfrontConfig
    source: PostSource
    renderer: HtmlRenderer
    markdown: MarkdownRenderer
    preferences: PreferenceStore
    theme: ThemeController

    def post_page(self) -> PostPage:
        comments = (
            GiscusWidget(self.config.giscus, self.renderer)
            if self.config.giscus is not None
            else None
        )
        return PostPage(
            self.source,
            self.renderer,
            self.markdown,
            self.theme,
            site_title=self.config.site_title,
            comments=comments,
        )


def bootstrap(config_path: Path | None) -> AppContext:
    """Load configuration and initialize sources, plugins and preferences."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)

    bootstrap_context = BootstrapContext(
        config=config, get_settings=build_settings_getter(config)
    )
    bootstrap_errors = run_bootstrap(bootstrap_context)
    if bootstrap_errors:
        first_error = bootstrap_errors[0]
        raise ConfigError(f"Plugin bootstrap failed: {first_error}") from first_error

    source = source_from_location(
        config.source, index_path=config.index_path, pages_dir=config.pages_dir
    )

    preferences = PreferenceStore(config.state_dir / DB_FILENAME)
    preferences.initialize()

    theme = ThemeController(
        preferences, SystemColorScheme.from_environment(config.color_scheme)
    )
    theme.initialize()

    return AppContext(
        config=config,
        source=source,
        renderer=HtmlRenderer(config.templates_dir),
        markdown=resolve_renderer(config.renderer),
        preferences=preferences,
        theme=theme,
    )
