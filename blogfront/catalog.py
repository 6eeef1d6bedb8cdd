"""Post catalog loaded once from the post index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from .sources import IndexLoadError, PostSource

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("file", "title", "date", "excerpt")


@dataclass(frozen=True, slots=True)
class Post:
    """One entry of the post index."""

    file: str
    title: str
    date: str
    excerpt: str
    category: str | None = None
    tags: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Post":
        """Build a post from a decoded index record, validating its shape."""

        if not isinstance(record, Mapping):
            raise IndexLoadError("Index entries must be objects")

        values: dict[str, str] = {}
        for name in _REQUIRED_FIELDS:
            value = record.get(name)
            if not isinstance(value, str):
                raise IndexLoadError(f"Index entry is missing string field '{name}'")
            values[name] = value

        category = record.get("category")
        if category is not None and not isinstance(category, str):
            raise IndexLoadError(f"'category' of '{values['file']}' must be a string")

        tags_raw = record.get("tags")
        if tags_raw is None:
            tags: tuple[str, ...] = ()
        elif isinstance(tags_raw, list) and all(isinstance(t, str) for t in tags_raw):
            tags = tuple(tags_raw)
        else:
            raise IndexLoadError(f"'tags' of '{values['file']}' must be a list of strings")

        return cls(category=category or None, tags=tags, **values)


def extract_tags(posts: Iterable[Post]) -> tuple[str, ...]:
    """Return every distinct tag used by ``posts``, sorted ascending."""

    seen: set[str] = set()
    for post in posts:
        seen.update(post.tags)
    return tuple(sorted(seen))


@dataclass(frozen=True, slots=True)
class Catalog:
    """All posts of the site plus their derived tag set."""

    posts: tuple[Post, ...] = ()
    tags: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", extract_tags(self.posts))

    @classmethod
    def from_records(cls, records: Any) -> "Catalog":
        """Validate a decoded index document; nothing is kept on failure."""

        if not isinstance(records, list):
            raise IndexLoadError("Post index must be a list of posts")
        return cls(posts=tuple(Post.from_record(record) for record in records))

    def get(self, file: str) -> Post | None:
        for post in self.posts:
            if post.file == file:
                return post
        return None

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)


def load_catalog(source: PostSource) -> Catalog:
    """Fetch the index from ``source`` and build the catalog.

    Raises
    ------
    IndexLoadError
        If the index cannot be fetched or does not describe a list of posts.
    """

    catalog = Catalog.from_records(source.fetch_index())
    logger.info(
        "Loaded %d posts (%d tags) from %r", len(catalog), len(catalog.tags), source
    )
    return catalog
