"""File-based article storage for Markdown/MDX posts with YAML front matter.

Each article lives in its own file inside a content directory. The file stem
is the article id (the slug used in URLs), the front matter carries the
``title`` and ``locale``, and everything after the closing ``---`` delimiter
is the raw body handed to the linking engine. Writing back replaces only the
body so the front matter is preserved exactly as authored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Protocol, Tuple

import yaml

from .engine.types import Article

logger = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


class ArticleStoreError(Exception):
    """Raised when an article file cannot be read, parsed or written."""


class ArticleStore(Protocol):
    """Read/write interface the batch pipeline expects from a storage backend."""

    def load_articles(self) -> List[Article]:
        ...

    def save_body(self, article_id: str, body: str) -> None:
        ...


def split_front_matter(text: str) -> Tuple[str, str]:
    """Split ``text`` into its raw front matter block and body.

    Parameters
    ----------
    text:
        Full file contents.

    Returns
    -------
    tuple of (front_matter_block, body)
        The block includes both ``---`` delimiters and the trailing newline.
        Files without front matter return an empty block and the whole text.
    """

    match = FRONT_MATTER_RE.match(text)
    if not match:
        return "", text
    return text[:match.end()], text[match.end():]


def parse_front_matter(block: str, path: Path | None = None) -> Dict[str, Any]:
    """Parse a front matter block with PyYAML and return its mapping."""

    match = FRONT_MATTER_RE.match(block)
    if not match:
        return {}
    try:
        data = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError as exc:
        raise ArticleStoreError(f"Malformed front matter in {path or 'article'}: {exc}") from exc
    if not isinstance(data, dict):
        raise ArticleStoreError(f"Front matter in {path or 'article'} must be a mapping")
    return data


@dataclass
class MarkdownArticleStore:
    """Article store backed by a directory of front-matter Markdown files."""

    directory: Path
    extension: str = ".mdx"

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)

    def path_for(self, article_id: str) -> Path:
        return self.directory / f"{article_id}{self.extension}"

    def files(self) -> List[Path]:
        if not self.directory.is_dir():
            raise ArticleStoreError(f"Content directory {self.directory} does not exist")
        return sorted(path for path in self.directory.iterdir() if path.is_file() and path.name.endswith(self.extension))

    def load_articles(self) -> List[Article]:
        articles: List[Article] = []
        for path in self.files():
            article = self.load_article(path)
            if not article.title:
                logger.debug("Article %s has no title", path.name)
            articles.append(article)
        return articles

    def load_article(self, path: Path) -> Article:
        text = self._read(path)
        block, body = split_front_matter(text)
        metadata = parse_front_matter(block, path)
        locale = metadata.get("locale")
        return Article(
            id=path.name[: -len(self.extension)],
            title=str(metadata.get("title") or "").strip(),
            body=body,
            locale=str(locale) if locale is not None else None,
            metadata=metadata,
        )

    def save_body(self, article_id: str, body: str) -> None:
        path = self.path_for(article_id)
        block, _ = split_front_matter(self._read(path))
        try:
            path.write_text(block + body, encoding="utf-8")
        except OSError as exc:
            raise ArticleStoreError(f"Unable to write {path}: {exc}") from exc

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ArticleStoreError(f"Unable to read {path}: {exc}") from exc
