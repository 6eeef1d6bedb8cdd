"""Helpers for creating and working with the Blogfront plugin manager."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from typing import Iterable as TypingIterable
from typing import Tuple

import pluggy

from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE
from .spec import BlogfrontHookSpec
from .types import BootstrapContext, MarkdownRenderer, RendererContribution

FALLBACK_RENDERER_ID = "plain"

logger = logging.getLogger(__name__)


class PluginRegistrationError(RuntimeError):
    """Raised when a plugin fails validation or registration."""


def create_plugin_manager(*, load_entry_points: bool = True) -> pluggy.PluginManager:
    """Instantiate a pluggy ``PluginManager`` configured for Blogfront."""

    manager = pluggy.PluginManager(PLUGIN_NAMESPACE)
    manager.add_hookspecs(BlogfrontHookSpec)

    if load_entry_points:
        manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)

    return manager


def _register_modules(
    manager: pluggy.PluginManager,
    modules: Sequence[object],
) -> None:
    """Register in-process plugin modules with the manager."""

    for module in modules:
        try:
            manager.register(module)
        except pluggy.PluginValidationError as exc:
            raise PluginRegistrationError(str(exc)) from exc


def _iter_renderer_contributions(
    manager: pluggy.PluginManager,
) -> Iterator[RendererContribution]:
    """Yield markdown renderer contributions from all registered plugins."""

    for contributions in manager.hook.markdown_renderers():
        if not contributions:
            continue
        yield from _ensure_iterable(contributions)


def run_bootstrap_hooks(
    manager: pluggy.PluginManager,
    context: BootstrapContext,
) -> list[Exception]:
    """Execute bootstrap hooks, collecting exceptions per plugin."""

    hook_caller = manager.hook.bootstrap
    hook_impls = list(hook_caller.get_hookimpls())
    if not hook_impls:
        return []

    plugins_in_order = [impl.plugin for impl in hook_impls]
    errors: list[Exception] = []

    for plugin in plugins_in_order:
        others = [p for p in plugins_in_order if p is not plugin]
        subset = manager.subset_hook_caller("bootstrap", others)
        try:
            subset(context=context)
        except Exception as exc:
            logger.warning("Plugin bootstrap failed for %r: %s", plugin, exc)
            errors.append(exc)

    return errors


@lru_cache(maxsize=1)
def _builtin_plugin_modules() -> Tuple[object, ...]:
    from .builtin import BUILTIN_PLUGINS

    return BUILTIN_PLUGINS


def iter_plugin_modules() -> Tuple[object, ...]:
    """Return plugin modules bundled with Blogfront."""

    return _builtin_plugin_modules()


@lru_cache(maxsize=1)
def _build_plugin_manager() -> pluggy.PluginManager:
    manager = create_plugin_manager()
    _register_modules(manager, iter_plugin_modules())
    return manager


def get_plugin_manager() -> pluggy.PluginManager:
    """Return the cached plugin manager instance."""

    return _build_plugin_manager()


def reset_plugin_manager_cache() -> None:
    """Clear cached plugin manager so future calls rebuild state."""

    _build_plugin_manager.cache_clear()
    _builtin_plugin_modules.cache_clear()


def load_renderer_contributions() -> dict[str, RendererContribution]:
    """Collect markdown renderers from all registered plugins."""

    manager = get_plugin_manager()

    contributions: dict[str, RendererContribution] = {}
    for contribution in _iter_renderer_contributions(manager):
        key = contribution.renderer_id.lower()
        if key in contributions:
            raise PluginRegistrationError(
                f"Duplicate markdown renderer detected: '{contribution.renderer_id}'."
            )
        contributions[key] = contribution

    return contributions


def resolve_renderer(renderer_id: str) -> MarkdownRenderer:
    """Return the renderer registered as ``renderer_id``.

    Unknown ids fall back to the plain renderer so posts stay readable.
    """

    contributions = load_renderer_contributions()
    contribution = contributions.get(renderer_id.lower())
    if contribution is not None:
        return contribution.render

    logger.warning(
        "Markdown renderer '%s' is not available; using '%s'",
        renderer_id,
        FALLBACK_RENDERER_ID,
    )
    fallback = contributions.get(FALLBACK_RENDERER_ID)
    if fallback is None:
        raise PluginRegistrationError("No markdown renderer is available.")
    return fallback.render


def run_bootstrap(context: BootstrapContext) -> list[Exception]:
    """Execute bootstrap hooks using the shared plugin manager."""

    manager = get_plugin_manager()
    return run_bootstrap_hooks(manager, context)


def _ensure_iterable(
    contributions: object,
) -> TypingIterable[RendererContribution]:
    """Normalize hook return values to a concrete iterable of contributions."""

    if isinstance(contributions, RendererContribution):
        return (contributions,)

    if not isinstance(contributions, Iterable) or isinstance(
        contributions, (str, bytes)
    ):
        raise PluginRegistrationError(
            "Plugin hook did not return an iterable contribution collection."
        )

    normalized: list[RendererContribution] = []
    for item in contributions:
        if not isinstance(item, RendererContribution):
            raise PluginRegistrationError(
                "Renderer contributions must be RendererContribution instances."
            )
        normalized.append(item)
    return tuple(normalized)


__all__ = [
    "FALLBACK_RENDERER_ID",
    "PluginRegistrationError",
    "create_plugin_manager",
    "get_plugin_manager",
    "iter_plugin_modules",
    "load_renderer_contributions",
    "reset_plugin_manager_cache",
    "resolve_renderer",
    "run_bootstrap",
    "run_bootstrap_hooks",
]
