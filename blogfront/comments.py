"""Giscus comment widget: embed markup and live theme updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from markupsafe import Markup

from .render import HtmlRenderer
from .theme import DARK, LIGHT

GISCUS_ORIGIN = "https://giscus.app"
GISCUS_CLIENT_SRC = f"{GISCUS_ORIGIN}/client.js"

logger = logging.getLogger(__name__)


class MessageTarget(Protocol):
    """The widget's embedded frame, able to receive cross-origin messages."""

    def post_message(
        self, message: Mapping[str, Any], target_origin: str
    ) -> None:  # pragma: no cover - Protocol
        ...


@dataclass(frozen=True, slots=True)
class GiscusConfig:
    """Settings passed to the Giscus client script as ``data-*`` attributes."""

    repo: str
    repo_id: str
    category: str = "General"
    category_id: str = ""
    mapping: str = "pathname"
    strict: str = "0"
    reactions_enabled: str = "1"
    emit_metadata: str = "1"
    input_position: str = "top"
    lang: str = "ko"
    loading: str = "lazy"

    def attributes(self, theme: str) -> list[tuple[str, str]]:
        return [
            ("data-repo", self.repo),
            ("data-repo-id", self.repo_id),
            ("data-category", self.category),
            ("data-category-id", self.category_id),
            ("data-mapping", self.mapping),
            ("data-strict", self.strict),
            ("data-reactions-enabled", self.reactions_enabled),
            ("data-emit-metadata", self.emit_metadata),
            ("data-input-position", self.input_position),
            ("data-theme", widget_theme(theme)),
            ("data-lang", self.lang),
            ("data-loading", self.loading),
        ]


def widget_theme(theme: str) -> str:
    return DARK if theme == DARK else LIGHT


class GiscusWidget:
    """One comment widget on a post page."""

    def __init__(self, config: GiscusConfig, renderer: HtmlRenderer) -> None:
        self.config = config
        self._renderer = renderer
        self._embedded = False
        self._frame: MessageTarget | None = None

    @property
    def embedded(self) -> bool:
        return self._embedded

    def embed(self, theme: str) -> Markup:
        """Return the client script tag the first time; later calls return nothing."""

        if self._embedded:
            return Markup("")
        self._embedded = True
        return self._renderer.render_comment_embed(
            GISCUS_CLIENT_SRC, self.config.attributes(theme)
        )

    def attach_frame(self, frame: MessageTarget) -> None:
        self._frame = frame

    def sync_theme(self, theme: str) -> None:
        """Push ``theme`` to the widget; does nothing before the frame exists."""

        if self._frame is None:
            return
        logger.debug("Syncing comment widget theme to %s", theme)
        self._frame.post_message(
            {"giscus": {"setConfig": {"theme": widget_theme(theme)}}},
            GISCUS_ORIGIN,
        )
