"""Minimal renderer used when no markdown renderer is available."""

from __future__ import annotations

from .._markers import hookimpl
from ..types import RendererContribution


def render_plain(body: str) -> str:
    return body.replace("<", "&lt;").replace(">", "&gt;").replace("\n", "<br>")


@hookimpl
def markdown_renderers() -> tuple[RendererContribution, ...]:
    contribution = RendererContribution(
        renderer_id="plain",
        render=render_plain,
        description="Escaped text with line breaks",
    )
    return (contribution,)
