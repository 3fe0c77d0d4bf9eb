"""Corpus-wide phrase index shared by every injection in a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from .phrases import PhraseExtractor, normalize_phrase
from .types import AnchorPhrase, Article, Candidate


@dataclass(frozen=True)
class CorpusIndex:
    """Phrase to target mapping ordered by phrase length, longest first.

    Ties keep corpus order: articles in the order they were supplied, manual
    phrases ahead of title phrases inside one article. The ordering is
    computed once so every article sees the same precedence.
    """

    entries: Tuple[Candidate, ...]

    @classmethod
    def build(
        cls,
        articles: Sequence[Article],
        extractor: PhraseExtractor,
        manual_links: Iterable[Mapping[str, Any]] = (),
    ) -> "CorpusIndex":
        grouped: Dict[str, List[AnchorPhrase]] = {}

        for article in articles:
            if not article.title or not article.title.strip():
                continue
            phrases = extractor.extract(article.title)
            if phrases:
                grouped[article.id] = [AnchorPhrase(text=text, source_article_id=article.id) for text in phrases]

        known_ids = {article.id for article in articles}
        for mapping in manual_links:
            slug = str(mapping.get("slug", "")).strip()
            if not slug or slug not in known_ids:
                continue
            manual = [
                AnchorPhrase(text=text, source_article_id=slug, origin="manual")
                for text in (normalize_phrase(str(raw)) for raw in mapping.get("phrases", []))
                if text
            ]
            grouped[slug] = _dedupe(manual + grouped.get(slug, []))

        flattened = [
            Candidate(phrase=phrase, target_id=article_id)
            for article_id, phrases in grouped.items()
            for phrase in phrases
        ]
        flattened.sort(key=lambda candidate: candidate.phrase.length, reverse=True)
        return cls(entries=tuple(flattened))

    def phrases_excluding(self, target_id: str) -> List[Candidate]:
        """Return the ordered candidates that do not point at ``target_id``."""

        return [candidate for candidate in self.entries if candidate.target_id != target_id]

    @property
    def target_ids(self) -> List[str]:
        seen: Dict[str, None] = {}
        for candidate in self.entries:
            seen.setdefault(candidate.target_id, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self.entries)


def _dedupe(phrases: List[AnchorPhrase]) -> List[AnchorPhrase]:
    seen: set[str] = set()
    unique: List[AnchorPhrase] = []
    for phrase in phrases:
        if phrase.text in seen:
            continue
        seen.add(phrase.text)
        unique.append(phrase)
    return unique
