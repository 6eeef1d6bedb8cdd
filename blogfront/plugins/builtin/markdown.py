"""Built-in markdown renderer backed by Python-Markdown and Pygments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import markdown as md

from .._markers import hookimpl
from ..types import BootstrapContext, RendererContribution

PLUGIN_ID = "blogfront-markdown"

# Line breaks, GFM-style fences and tables, header ids.
BASE_EXTENSIONS = ("fenced_code", "tables", "codehilite", "nl2br", "toc")
DEFAULT_CSS_CLASS = "highlight"


@dataclass(frozen=True)
class MarkdownPluginConfig:
    """Resolved settings for the markdown renderer."""

    extra_extensions: tuple[str, ...] = ()
    css_class: str = DEFAULT_CSS_CLASS


_current_config = MarkdownPluginConfig()


def _resolve_plugin_config(settings: Mapping[str, Any]) -> MarkdownPluginConfig:
    extensions_raw = settings.get("extensions", ())
    if isinstance(extensions_raw, str):
        extensions_raw = [extensions_raw]
    extensions = tuple(
        str(name).strip() for name in extensions_raw if str(name).strip()
    )
    css_class = str(settings.get("css_class", DEFAULT_CSS_CLASS)).strip()
    return MarkdownPluginConfig(
        extra_extensions=extensions, css_class=css_class or DEFAULT_CSS_CLASS
    )


def render_markdown(body: str) -> str:
    """Convert ``body`` to HTML; fenced code is highlighted by Pygments."""

    converter = md.Markdown(
        extensions=[*BASE_EXTENSIONS, *_current_config.extra_extensions],
        extension_configs={
            "codehilite": {
                "guess_lang": False,
                "css_class": _current_config.css_class,
            }
        },
    )
    return converter.convert(body)


@hookimpl
def bootstrap(context: BootstrapContext) -> None:
    """Capture renderer settings from the ``[plugins.blogfront-markdown]`` table."""

    global _current_config
    _current_config = _resolve_plugin_config(context.get_settings(PLUGIN_ID, default={}))


@hookimpl
def markdown_renderers() -> tuple[RendererContribution, ...]:
    contribution = RendererContribution(
        renderer_id="markdown",
        render=render_markdown,
        description="Python-Markdown with Pygments code highlighting",
    )
    return (contribution,)


__all__ = ["PLUGIN_ID", "bootstrap", "markdown_renderers", "render_markdown"]
