"""Blogfront: post catalog, filtering and rendering for a markdown blog."""

from __future__ import annotations

from .catalog import Catalog, Post, extract_tags, load_catalog
from .filtering import ALL_TAGS, FilterState, filter_posts
from .frontmatter import ParsedDocument, parse_front_matter
from .sources import IndexLoadError, LoadError, PostLoadError

__all__ = [
    "ALL_TAGS",
    "Catalog",
    "FilterState",
    "IndexLoadError",
    "LoadError",
    "ParsedDocument",
    "Post",
    "PostLoadError",
    "extract_tags",
    "filter_posts",
    "load_catalog",
    "parse_front_matter",
]
