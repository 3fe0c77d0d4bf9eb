"""Service functions for running the internal linking pass over a corpus.

These functions glue the storage layer to the linking engine so they can be
reused from the management command or from a publishing pipeline. They
filter articles by locale, build the corpus phrase index once per run, rewrite
each article body and persist the bodies that changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .engine.config import EngineConfig
from .engine.index import CorpusIndex
from .engine.injector import inject
from .engine.phrases import PhraseExtractor
from .engine.types import Article, InjectionResult
from .storage import ArticleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArticleResult:
    """Outcome of the linking pass for one article."""

    article_id: str
    result: InjectionResult

    @property
    def links_added(self) -> int:
        return len(self.result.links)


@dataclass
class LinkingSummary:
    """Aggregated outcome of a linking run."""

    index_size: int = 0
    files: int = 0
    processed: int = 0
    updated: int = 0
    dry_run: bool = False
    results: List[ArticleResult] = field(default_factory=list)

    @property
    def changed(self) -> List[ArticleResult]:
        return [item for item in self.results if item.result.changed]


def filter_locale(articles: Sequence[Article], locale: str | None) -> List[Article]:
    """Return the articles whose ``locale`` matches, or all when no locale is set."""

    if not locale:
        return list(articles)
    return [article for article in articles if article.locale == locale]


def build_link_index(articles: Sequence[Article], config: EngineConfig) -> CorpusIndex:
    """Build the phrase index for ``articles`` using the configured locale rules.

    Parameters
    ----------
    articles:
        The corpus for this run, already filtered to one locale.
    config:
        Engine configuration providing stop sets, thresholds and manual
        phrase mappings.

    Returns
    -------
    CorpusIndex
        Candidates for every article with at least one phrase, ordered
        longest phrase first.
    """

    extractor = PhraseExtractor.from_config(config)
    return CorpusIndex.build(articles, extractor, manual_links=config.manual_links())


def process_article(article: Article, index: CorpusIndex, config: EngineConfig) -> InjectionResult:
    """Insert links to every other indexed article into ``article``'s body."""

    return inject(
        article.id,
        article.body,
        index.phrases_excluding(article.id),
        config.link_prefix,
        fence_markers=config.fence_markers(),
    )


def process_all_articles(
    store: ArticleStore,
    config: EngineConfig,
    *,
    slug: str | None = None,
    dry_run: bool = False,
) -> LinkingSummary:
    """Run the linking pass over every article in ``store``.

    The index is built from the whole locale-filtered corpus even when only
    one ``slug`` is processed, so link precedence does not depend on which
    articles are rewritten. ``files`` counts every article file matching
    ``slug``, whatever its locale. Changed bodies are saved unless ``dry_run`` is
    set. Storage errors propagate to the caller.
    """

    loaded = store.load_articles()
    articles = filter_locale(loaded, config.locale)
    index = build_link_index(articles, config)
    summary = LinkingSummary(
        index_size=len(index.target_ids),
        files=sum(1 for article in loaded if not slug or article.id == slug),
        dry_run=dry_run,
    )
    logger.info("Loaded %d articles into link index (%d phrases)", summary.index_size, len(index))

    for article in articles:
        if slug and article.id != slug:
            continue
        result = process_article(article, index, config)
        summary.processed += 1
        summary.results.append(ArticleResult(article_id=article.id, result=result))

        if not result.changed:
            logger.debug("No new links for %s", article.id)
            continue

        logger.info("%s: +%d links", article.id, len(result.links))
        if not dry_run:
            store.save_body(article.id, result.body)
            summary.updated += 1

    if not summary.changed:
        logger.info("No new links to add")
    return summary
