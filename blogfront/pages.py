"""Page controllers for the post index and the post detail view.

Each controller owns its state for a single page view and is discarded on
navigation. Load failures stay inside the controller and become an inline
message, so theme toggling and search keep working.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable
from urllib.parse import parse_qs, urlsplit

from markupsafe import Markup

from .catalog import Catalog, Post, load_catalog
from .comments import GiscusWidget
from .debounce import DEFAULT_SEARCH_DELAY, Scheduler, SearchDebouncer
from .filtering import FilterState
from .frontmatter import ParsedDocument, parse_front_matter
from .plugins.types import MarkdownRenderer
from .render import HtmlRenderer
from .sources import IndexLoadError, PostLoadError, PostSource
from .theme import ThemeController

LOADING_MESSAGE = "Loading posts..."
INDEX_LOAD_FAILED = "Failed to load posts."
POST_NOT_FOUND = "Post not found."
POST_LOAD_FAILED = "Failed to load the post."

PostsListener = Callable[[tuple[Post, ...]], None]

logger = logging.getLogger(__name__)


class IndexPage:
    """Post list with tag filtering and debounced search."""

    def __init__(
        self,
        source: PostSource,
        renderer: HtmlRenderer,
        scheduler: Scheduler,
        *,
        search_delay: float = DEFAULT_SEARCH_DELAY,
    ) -> None:
        self._source = source
        self._renderer = renderer
        self._listeners: list[PostsListener] = []
        self.catalog = Catalog()
        self.state = FilterState()
        self.search = SearchDebouncer(scheduler, self._on_search, delay=search_delay)
        self.visible: tuple[Post, ...] = ()
        self.loaded = False
        self.error: str | None = None

    def subscribe(self, listener: PostsListener) -> Callable[[], None]:
        """Call ``listener`` with the visible posts after every change."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self) -> bool:
        try:
            catalog = load_catalog(self._source)
        except IndexLoadError as exc:
            logger.error("Loading the post index failed: %s", exc)
            self.error = INDEX_LOAD_FAILED
            return False

        self.catalog = catalog
        self.loaded = True
        self.error = None
        self._refresh()
        return True

    def select_tag(self, tag: str | None) -> tuple[Post, ...]:
        self.state.select_tag(tag)
        self._refresh()
        return self.visible

    def handle_search_input(self, text: str) -> None:
        self.search.handle_input(text)

    def handle_search_key(self, key: str) -> bool:
        return self.search.handle_key(key)

    def render(self) -> Markup:
        if self.error is not None:
            return self._renderer.render_message(self.error)
        if not self.loaded:
            return self._renderer.render_message(LOADING_MESSAGE)
        tag_bar = self._renderer.render_tag_bar(self.catalog.tags, self.state.active_tag)
        post_list = self._renderer.render_post_list(self.visible)
        return Markup("\n").join(part for part in (tag_bar, post_list) if part)

    def close(self) -> None:
        self.search.close()
        self._listeners.clear()

    def _on_search(self, query: str) -> None:
        self.state.set_query(query)
        self._refresh()

    def _refresh(self) -> None:
        self.visible = self.state.apply(self.catalog)
        for listener in list(self._listeners):
            listener(self.visible)


@dataclass(frozen=True, slots=True)
class PostView:
    """Everything shown on a post page."""

    html: Markup
    page_title: str
    file: str | None = None
    document: ParsedDocument | None = None
    error: str | None = None


def file_from_url(url: str) -> str | None:
    """Return the ``file`` query parameter of ``url`` (``post.html?file=...``)."""

    values = parse_qs(urlsplit(url).query).get("file")
    if not values:
        return None
    return values[0] or None


def default_title(file: str) -> str:
    return file.replace(".md", "", 1)


class PostPage:
    """Detail view of a single post, with the comment widget underneath."""

    def __init__(
        self,
        source: PostSource,
        renderer: HtmlRenderer,
        markdown: MarkdownRenderer,
        theme: ThemeController,
        *,
        site_title: str,
        comments: GiscusWidget | None = None,
    ) -> None:
        self._source = source
        self._renderer = renderer
        self._markdown = markdown
        self._theme = theme
        self._comments = comments
        self.site_title = site_title
        self._unsubscribe_theme: Callable[[], None] | None = None
        if comments is not None:
            self._unsubscribe_theme = theme.subscribe(comments.sync_theme)

    def open_url(self, url: str) -> PostView:
        return self.open(file_from_url(url))

    def open(self, file: str | None) -> PostView:
        if not file:
            return self._failure(None, POST_NOT_FOUND)

        try:
            raw = self._source.fetch_document(file)
        except PostLoadError as exc:
            logger.error("Loading post '%s' failed: %s", file, exc)
            return self._failure(file, POST_LOAD_FAILED)

        document = parse_front_matter(raw)
        metadata = document.metadata

        title = _string(metadata.get("title")) or default_title(file)
        tags = metadata.get("tags")
        comments = (
            self._comments.embed(self._theme.theme) if self._comments is not None else ""
        )

        html = self._renderer.render_post_detail(
            title=title,
            date=_string(metadata.get("date")),
            category=_string(metadata.get("category")),
            tags=tags if isinstance(tags, list) else (),
            body_html=self._markdown(document.body),
            comments=comments,
        )
        return PostView(
            html=html,
            page_title=f"{title} - {self.site_title}",
            file=file,
            document=document,
        )

    def close(self) -> None:
        if self._unsubscribe_theme is not None:
            self._unsubscribe_theme()
            self._unsubscribe_theme = None

    def _failure(self, file: str | None, message: str) -> PostView:
        return PostView(
            html=self._renderer.render_message(message, css_class="post-error"),
            page_title=self.site_title,
            file=file,
            error=message,
        )


def _string(value: object) -> str | None:
    return value if isinstance(value, str) and value else None
