"""Blogfront plugin infrastructure based on pluggy."""

from __future__ import annotations

from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE, hookimpl, hookspec
from .config import build_settings_getter
from .manager import (
    FALLBACK_RENDERER_ID,
    PluginRegistrationError,
    get_plugin_manager,
    load_renderer_contributions,
    reset_plugin_manager_cache,
    resolve_renderer,
    run_bootstrap,
)
from .types import BootstrapContext, MarkdownRenderer, RendererContribution

__all__ = [
    "BootstrapContext",
    "ENTRY_POINT_GROUP",
    "FALLBACK_RENDERER_ID",
    "MarkdownRenderer",
    "PLUGIN_NAMESPACE",
    "PluginRegistrationError",
    "RendererContribution",
    "build_settings_getter",
    "get_plugin_manager",
    "hookimpl",
    "hookspec",
    "load_renderer_contributions",
    "reset_plugin_manager_cache",
    "resolve_renderer",
    "run_bootstrap",
]
