"""HTML rendering for the post list and post detail views."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence
from urllib.parse import quote

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFound,
    select_autoescape,
)
from markupsafe import Markup

from .catalog import Post

TEMPLATE_PACKAGE = "blogfront"
ALL_TAGS_LABEL = "All"
NO_POSTS_LABEL = "No posts found."


class RenderError(RuntimeError):
    """Raised when a view template is missing or broken."""


def format_date(value: str | None) -> str:
    """Format an ISO-8601 date as ``YYYY. MM. DD``; unparseable input is returned as-is."""

    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed.year}. {parsed.month:02d}. {parsed.day:02d}"


def quote_param(value: str) -> str:
    return quote(value, safe="!~*'()")


class HtmlRenderer:
    """Render views from the bundled templates.

    A ``templates_dir`` may hold overrides for any of the bundled templates.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        loaders = [PackageLoader(TEMPLATE_PACKAGE, "templates")]
        if templates_dir is not None:
            loaders.insert(0, FileSystemLoader(str(templates_dir)))
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["format_date"] = format_date
        self._env.filters["quote_param"] = quote_param

    def render_tag_bar(self, tags: Sequence[str], active_tag: str | None) -> Markup:
        """Return the tag filter buttons, or nothing when no post is tagged."""

        if not tags:
            return Markup("")
        return self._render(
            "tag_bar.html", tags=tags, active_tag=active_tag, all_label=ALL_TAGS_LABEL
        )

    def render_post_list(self, posts: Iterable[Post]) -> Markup:
        return self._render(
            "post_list.html", posts=list(posts), empty_label=NO_POSTS_LABEL
        )

    def render_post_detail(
        self,
        *,
        title: str,
        body_html: str,
        date: str | None = None,
        category: str | None = None,
        tags: Sequence[str] = (),
        comments: str = "",
    ) -> Markup:
        return self._render(
            "post_detail.html",
            title=title,
            date=date,
            category=category,
            tags=tags,
            body_html=Markup(body_html),
            comments=Markup(comments),
        )

    def render_message(self, message: str, *, css_class: str = "loading") -> Markup:
        """Inline status block shown in place of a panel's content."""

        return self._render("message.html", message=message, css_class=css_class)

    def render_comment_embed(
        self, src: str, attributes: Sequence[tuple[str, str]]
    ) -> Markup:
        return self._render("giscus.html", src=src, attributes=attributes)

    def _render(self, name: str, **context: object) -> Markup:
        try:
            template = self._env.get_template(name)
        except TemplateNotFound as exc:
            raise RenderError(f"Template '{exc.name}' not found") from exc
        return Markup(template.render(**context).strip())
