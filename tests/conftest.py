from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from blogfront.catalog import Catalog, Post

POSTS = [
    {
        "file": "hello-world.md",
        "title": "Hello World",
        "date": "2024-01-05",
        "category": "Diary",
        "excerpt": "First post on the new blog.",
        "tags": ["intro", "blog"],
    },
    {
        "file": "python-tips.md",
        "title": "Python Tips",
        "date": "2024-02-10",
        "excerpt": "Small things that make code nicer.",
        "tags": ["python", "til"],
    },
    {
        "file": "no-tags.md",
        "title": "Untagged Thoughts",
        "date": "2024-03-01",
        "excerpt": "Nothing to filter by here.",
    },
]

HELLO_DOCUMENT = textwrap.dedent(
    """\
    ---
    title: "Hello World"
    date: 2024-01-05
    category: Diary
    tags: [intro, blog]
    ---
    First paragraph.
    Second line <b>bold</b>.
    """
)


@pytest.fixture
def index_records() -> list[dict]:
    return [dict(record) for record in POSTS]


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_records(POSTS)


@pytest.fixture
def sample_posts() -> tuple[Post, ...]:
    return tuple(Post.from_record(record) for record in POSTS)


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    site = tmp_path / "site"
    pages = site / "pages"
    pages.mkdir(parents=True)
    (site / "posts.json").write_text(json.dumps(POSTS), encoding="utf-8")
    (pages / "hello-world.md").write_text(HELLO_DOCUMENT, encoding="utf-8")
    (pages / "python-tips.md").write_text(
        "Plain body without front matter.\n", encoding="utf-8"
    )
    return site


@pytest.fixture(autouse=True)
def _no_color_scheme_env(monkeypatch) -> None:
    monkeypatch.delenv("BLOGFRONT_COLOR_SCHEME", raising=False)
