"""Tests for the index and post page controllers."""

from __future__ import annotations

from pathlib import Path

from blogfront.comments import GiscusConfig, GiscusWidget
from blogfront.debounce import ManualClock
from blogfront.pages import (
    INDEX_LOAD_FAILED,
    POST_LOAD_FAILED,
    POST_NOT_FOUND,
    IndexPage,
    PostPage,
    file_from_url,
)
from blogfront.plugins.builtin.plain import render_plain
from blogfront.render import HtmlRenderer
from blogfront.sources import DirectorySource
from blogfront.theme import DARK, LIGHT, SystemColorScheme, ThemeController


class _MemoryStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> bool:
        return self.values.pop(key, None) is not None


class _Frame:
    def __init__(self) -> None:
        self.themes: list[str] = []

    def post_message(self, message, target_origin: str) -> None:
        self.themes.append(message["giscus"]["setConfig"]["theme"])


def _files(posts) -> list[str]:
    return [post.file for post in posts]


def _index_page(site: Path) -> tuple[IndexPage, ManualClock, list[list[str]]]:
    clock = ManualClock()
    page = IndexPage(DirectorySource(site), HtmlRenderer(), clock)
    updates: list[list[str]] = []
    page.subscribe(lambda posts: updates.append(_files(posts)))
    return page, clock, updates


def _theme(prefers_dark: bool = False) -> ThemeController:
    controller = ThemeController(_MemoryStore(), SystemColorScheme(prefers_dark))
    controller.initialize()
    return controller


def test_index_page_loads_and_renders(site_dir: Path) -> None:
    page, _, updates = _index_page(site_dir)

    assert "Loading posts..." in page.render()
    assert page.load() is True

    assert updates == [["hello-world.md", "python-tips.md", "no-tags.md"]]
    html = page.render()
    assert 'class="tags-container"' in html
    assert html.count('<article class="post-item">') == 3


def test_index_page_tag_toggle(site_dir: Path) -> None:
    page, _, _ = _index_page(site_dir)
    page.load()

    assert _files(page.select_tag("python")) == ["python-tips.md"]
    assert 'class="tag active" data-tag="python"' in page.render()
    assert _files(page.select_tag("python")) == _files(page.catalog.posts)
    assert _files(page.select_tag("")) == _files(page.catalog.posts)


def test_index_page_debounced_search(site_dir: Path) -> None:
    page, clock, updates = _index_page(site_dir)
    page.load()
    updates.clear()

    page.handle_search_input("h")
    page.handle_search_input("he")
    page.handle_search_input("hello ")
    assert updates == []

    clock.advance(0.3)
    assert updates == [["hello-world.md"]]
    assert page.state.search_query == "hello"

    page.select_tag("python")
    assert _files(page.visible) == []
    assert "No posts found." in page.render()

    assert page.handle_search_key("Escape") is True
    assert _files(page.visible) == ["python-tips.md"]


def test_index_page_load_failure_is_local(tmp_path: Path) -> None:
    page, clock, updates = _index_page(tmp_path)

    assert page.load() is False
    assert page.error == INDEX_LOAD_FAILED
    assert INDEX_LOAD_FAILED in page.render()

    page.handle_search_input("anything")
    clock.advance(1.0)
    assert updates == [[]]
    assert page.select_tag("python") == ()


def test_file_from_url() -> None:
    assert file_from_url("post.html?file=hello%20world.md") == "hello world.md"
    assert file_from_url("https://blog.test/post.html?x=1&file=a.md") == "a.md"
    assert file_from_url("post.html") is None
    assert file_from_url("post.html?file=") is None


def test_post_page_renders_front_matter(site_dir: Path) -> None:
    page = PostPage(
        DirectorySource(site_dir),
        HtmlRenderer(),
        render_plain,
        _theme(),
        site_title="My Blog",
    )

    view = page.open_url("post.html?file=hello-world.md")

    assert view.error is None
    assert view.page_title == "Hello World - My Blog"
    assert view.document is not None
    assert view.document.metadata["tags"] == ["intro", "blog"]
    assert "2024. 01. 05" in view.html
    assert '<span class="post-category">Diary</span>' in view.html
    assert '<span class="post-tag">intro</span>' in view.html
    assert "Second line &lt;b&gt;bold&lt;/b&gt;.<br>" in view.html


def test_post_page_defaults_title_to_file_name(site_dir: Path) -> None:
    page = PostPage(
        DirectorySource(site_dir), HtmlRenderer(), render_plain, _theme(), site_title="B"
    )

    view = page.open("python-tips.md")

    assert view.page_title == "python-tips - B"
    assert '<h1 class="post-title">python-tips</h1>' in view.html
    assert "post-tags" not in view.html
    assert "post-date" not in view.html


def test_post_page_missing_parameter_and_missing_file(site_dir: Path) -> None:
    page = PostPage(
        DirectorySource(site_dir), HtmlRenderer(), render_plain, _theme(), site_title="B"
    )

    missing_param = page.open_url("post.html")
    assert missing_param.error == POST_NOT_FOUND
    assert POST_NOT_FOUND in missing_param.html

    missing_file = page.open("gone.md")
    assert missing_file.error == POST_LOAD_FAILED
    assert missing_file.file == "gone.md"
    assert POST_LOAD_FAILED in missing_file.html


def test_post_page_embeds_comments_and_syncs_theme(site_dir: Path) -> None:
    theme = _theme(prefers_dark=True)
    widget = GiscusWidget(GiscusConfig(repo="o/r", repo_id="R_1"), HtmlRenderer())
    page = PostPage(
        DirectorySource(site_dir),
        HtmlRenderer(),
        render_plain,
        theme,
        site_title="B",
        comments=widget,
    )

    theme.toggle()
    view = page.open("hello-world.md")
    assert 'data-theme="light"' in view.html
    assert "giscus-container" in view.html

    frame = _Frame()
    widget.attach_frame(frame)
    theme.toggle()
    assert frame.themes == [DARK]
    assert theme.theme == DARK
    assert LIGHT not in frame.themes


def test_closed_post_page_stops_syncing_comment_theme(site_dir: Path) -> None:
    theme = _theme()
    frames: list[_Frame] = []
    pages: list[PostPage] = []
    for _ in range(3):
        widget = GiscusWidget(GiscusConfig(repo="o/r", repo_id="R_1"), HtmlRenderer())
        page = PostPage(
            DirectorySource(site_dir),
            HtmlRenderer(),
            render_plain,
            theme,
            site_title="B",
            comments=widget,
        )
        frame = _Frame()
        widget.attach_frame(frame)
        frames.append(frame)
        pages.append(page)

    pages[0].close()
    pages[1].close()
    pages[1].close()
    theme.toggle()

    assert [frame.themes for frame in frames] == [[], [], [DARK]]


def test_undecodable_files_become_inline_errors(site_dir: Path) -> None:
    (site_dir / "pages" / "bad.md").write_bytes(b"\xff\xfe---\n")
    post_page = PostPage(
        DirectorySource(site_dir), HtmlRenderer(), render_plain, _theme(), site_title="B"
    )

    view = post_page.open("bad.md")
    assert view.error == POST_LOAD_FAILED
    assert POST_LOAD_FAILED in view.html

    (site_dir / "posts.json").write_bytes(b"[\xff\xfe]")
    index_page, _, updates = _index_page(site_dir)

    assert index_page.load() is False
    assert index_page.error == INDEX_LOAD_FAILED
    assert updates == []
