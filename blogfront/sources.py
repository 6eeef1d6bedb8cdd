"""Index and post document sources (local directory or HTTP)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote

import httpx

DEFAULT_INDEX_PATH = "posts.json"
DEFAULT_PAGES_DIR = "pages"
DEFAULT_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


class LoadError(RuntimeError):
    """Base error for resources that cannot be fetched or decoded."""


class IndexLoadError(LoadError):
    """Raised when the post index is unreachable or malformed."""


class PostLoadError(LoadError):
    """Raised when a single post document cannot be fetched."""


class PostSource(Protocol):
    """Where the post index and per-post documents come from."""

    def fetch_index(self) -> Any:  # pragma: no cover - Protocol
        """Return the decoded index document."""

    def fetch_document(self, file: str) -> str:  # pragma: no cover - Protocol
        """Return the raw text of the post identified by ``file``."""


def _decode_index(text: str, origin: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise IndexLoadError(f"Post index at {origin} is not valid JSON: {exc}") from exc


class DirectorySource:
    """Read the index and posts from a local site directory."""

    def __init__(
        self,
        root: Path | str,
        *,
        index_path: str = DEFAULT_INDEX_PATH,
        pages_dir: str = DEFAULT_PAGES_DIR,
    ) -> None:
        self.root = Path(root)
        self.index_path = index_path
        self.pages_dir = pages_dir

    def fetch_index(self) -> Any:
        path = self.root / self.index_path
        logger.debug("Reading post index from %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IndexLoadError(f"Cannot read post index at {path}: {exc}") from exc
        return _decode_index(text, str(path))

    def fetch_document(self, file: str) -> str:
        pages_root = (self.root / self.pages_dir).resolve()
        path = (pages_root / file).resolve()
        if not path.is_relative_to(pages_root):
            raise PostLoadError(f"Post '{file}' is outside of {pages_root}")

        logger.debug("Reading post document %s", path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PostLoadError(f"Cannot read post '{file}': {exc}") from exc

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.root)!r})"


class HttpSource:
    """Fetch the index and posts relative to a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        index_path: str = DEFAULT_INDEX_PATH,
        pages_dir: str = DEFAULT_PAGES_DIR,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        if not base_url.endswith("/"):
            base_url = base_url + "/"
        self.base_url = httpx.URL(base_url)
        self.index_path = index_path
        self.pages_dir = pages_dir.strip("/")
        self.timeout = timeout
        self._client = client

    def fetch_index(self) -> Any:
        url = self.base_url.join(self.index_path)
        response = self._get(url, IndexLoadError)
        return _decode_index(response.text, str(url))

    def fetch_document(self, file: str) -> str:
        pages_root = self.base_url
        if self.pages_dir:
            pages_root = pages_root.join(f"{self.pages_dir}/")
        url = pages_root.join(quote(file))
        if not str(url).startswith(str(pages_root)):
            raise PostLoadError(f"Post '{file}' is outside of {pages_root}")
        return self._get(url, PostLoadError).text

    def _get(self, url: httpx.URL, error_cls: type[LoadError]) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(
                    timeout=self.timeout, follow_redirects=True
                ) as client:
                    response = client.get(url)
        except httpx.HTTPError as exc:
            raise error_cls(f"Request to {url} failed: {exc}") from exc

        if not response.is_success:
            raise error_cls(f"{url} returned HTTP {response.status_code}")
        return response

    def __repr__(self) -> str:
        return f"HttpSource({str(self.base_url)!r})"


def source_from_location(
    location: str | Path,
    *,
    index_path: str = DEFAULT_INDEX_PATH,
    pages_dir: str = DEFAULT_PAGES_DIR,
) -> PostSource:
    """Return an HTTP source for ``http(s)://`` locations, else a directory source."""

    text = str(location)
    if text.startswith(("http://", "https://")):
        return HttpSource(text, index_path=index_path, pages_dir=pages_dir)
    return DirectorySource(location, index_path=index_path, pages_dir=pages_dir)
