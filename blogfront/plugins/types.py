"""Type definitions for Blogfront plugin contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol

if TYPE_CHECKING:  # pragma: no cover - type check only
    from ..config import BlogfrontConfig


class MarkdownRenderer(Protocol):
    """Callable turning a post body into an HTML fragment."""

    def __call__(self, body: str) -> str:  # pragma: no cover - Protocol
        """Return the HTML for ``body``."""


PluginSettingsGetter = Callable[..., Mapping[str, Any]]


@dataclass(slots=True, frozen=True)
class RendererContribution:
    """Descriptor for a markdown renderer provided by a plugin."""

    renderer_id: str
    render: MarkdownRenderer
    description: str


@dataclass(slots=True, frozen=True)
class BootstrapContext:
    """Information handed to plugins before any renderer is used."""

    config: "BlogfrontConfig"
    get_settings: PluginSettingsGetter
