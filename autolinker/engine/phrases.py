"""Anchor phrase extraction from article titles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, List

from .config import EngineConfig

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class PhraseExtractor:
    """Derive ranked anchor phrases from a title.

    Only the headline (the part before the first colon) is used. Tokens are
    filtered against a stop set, then combined into bigrams, trigrams and
    long compound singles. Results are lowercase, unique and sorted longest
    first so more specific phrases are tried before generic ones.
    """

    stopwords: FrozenSet[str]
    single_stopwords: FrozenSet[str]
    alphabet: str = "a-z"
    min_token_length: int = 3
    bigram_first_min: int = 4
    bigram_second_min: int = 5
    trigram_min: int = 4
    compound_min: int = 12

    @classmethod
    def from_config(cls, config: EngineConfig, locale: str | None = None) -> "PhraseExtractor":
        locale = locale if locale is not None else config.locale
        return cls(
            stopwords=config.stopwords(locale),
            single_stopwords=config.single_stopwords(locale),
            alphabet=config.alphabet(locale),
            min_token_length=config.phrase_setting("min_token_length"),
            bigram_first_min=config.phrase_setting("bigram_first_min"),
            bigram_second_min=config.phrase_setting("bigram_second_min"),
            trigram_min=config.phrase_setting("trigram_min"),
            compound_min=config.phrase_setting("compound_min"),
        )

    def extract(self, title: str) -> List[str]:
        tokens = self.tokenize(title)
        phrases: dict[str, None] = {}

        for first, second in zip(tokens, tokens[1:]):
            if len(first) >= self.bigram_first_min or len(second) >= self.bigram_second_min:
                phrases.setdefault(f"{first} {second}", None)

        for first, second, third in zip(tokens, tokens[1:], tokens[2:]):
            if all(len(word) >= self.trigram_min for word in (first, second, third)):
                phrases.setdefault(f"{first} {second} {third}", None)

        for word in tokens:
            if len(word) >= self.compound_min and word not in self.single_stopwords:
                phrases.setdefault(word, None)

        return sorted(phrases, key=len, reverse=True)

    def tokenize(self, title: str) -> List[str]:
        """Return the filtered headline tokens of ``title``."""

        headline = headline_of(title).lower()
        cleaned = re.sub(f"[^{self.alphabet}\\s]", " ", headline).strip()
        return [
            word
            for word in _WHITESPACE_RE.split(cleaned)
            if len(word) >= self.min_token_length and word not in self.stopwords
        ]


def headline_of(title: str) -> str:
    """Return the part of ``title`` before the first colon."""

    return title.split(":", 1)[0] or title


def normalize_phrase(phrase: str) -> str:
    """Return a lowercase, single-space version of ``phrase`` for lookups."""

    return _WHITESPACE_RE.sub(" ", phrase.strip().lower())
