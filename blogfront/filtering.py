"""Tag and text filtering over the post catalog."""

from __future__ import annotations

from dataclasses import dataclass

from .catalog import Catalog, Post

# Value carried by the "All" tag button.
ALL_TAGS = ""


def _matches_query(post: Post, lowered: str) -> bool:
    return (
        lowered in post.title.lower()
        or lowered in post.excerpt.lower()
        or any(lowered in tag.lower() for tag in post.tags)
    )


def filter_posts(
    catalog: Catalog, active_tag: str | None = None, query: str = ""
) -> tuple[Post, ...]:
    """Return the posts visible for ``active_tag`` and ``query``, in catalog order.

    The tag must match exactly. The query is a case-insensitive substring
    looked up in the title, the excerpt and each tag.
    """

    posts: tuple[Post, ...] = catalog.posts

    if active_tag:
        posts = tuple(post for post in posts if active_tag in post.tags)

    if query:
        lowered = query.lower()
        posts = tuple(post for post in posts if _matches_query(post, lowered))

    return posts


@dataclass(slots=True)
class FilterState:
    """Tag selection and search text of one index page."""

    active_tag: str | None = None
    search_query: str = ""

    def select_tag(self, tag: str | None) -> str | None:
        """Apply a tag click and return the resulting active tag.

        Clicking the active tag again, or the "All" button, clears the selection.
        """

        if not tag or tag == self.active_tag:
            self.active_tag = None
        else:
            self.active_tag = tag
        return self.active_tag

    def set_query(self, query: str) -> None:
        self.search_query = query

    def clear(self) -> None:
        self.active_tag = None
        self.search_query = ""

    def apply(self, catalog: Catalog) -> tuple[Post, ...]:
        return filter_posts(catalog, self.active_tag, self.search_query)
