"""Shared fixtures for engine tests."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

import pytest

from autolinker.engine.config import load_config
from autolinker.engine.phrases import PhraseExtractor
from autolinker.engine.types import AnchorPhrase, Article, Candidate

PREFIX = "/de/blog"


@pytest.fixture()
def engine_config():
    """Provide a fresh copy of the default engine configuration."""

    return load_config(None)


@pytest.fixture()
def extractor(engine_config):
    return PhraseExtractor.from_config(engine_config, "de")


def make_article(
    id: str,
    title: str,
    body: str = "",
    *,
    locale: str | None = "de",
    metadata: Dict[str, Any] | None = None,
) -> Article:
    return Article(id=id, title=title, body=body, locale=locale, metadata=metadata or {})


def make_candidates(*pairs: Tuple[str, str], manual: Iterable[str] = ()) -> list[Candidate]:
    manual_texts = set(manual)
    return [
        Candidate(
            phrase=AnchorPhrase(
                text=text,
                source_article_id=target,
                origin="manual" if text in manual_texts else "title",
            ),
            target_id=target,
        )
        for text, target in pairs
    ]
