"""Hook specifications for Blogfront plugins."""

from __future__ import annotations

from collections.abc import Iterable

from ._markers import hookspec
from .types import BootstrapContext, RendererContribution


class BlogfrontHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def bootstrap(self, context: BootstrapContext) -> None:
        """Read plugin settings once configuration is loaded."""

    @hookspec
    def markdown_renderers(self) -> Iterable[RendererContribution]:
        """Return markdown renderers provided by the plugin."""
