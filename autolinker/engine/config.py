"""Configuration helpers for the linking engine."""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    @property
    def locale(self) -> str:
        return str(self.raw.get("locale") or "")

    @property
    def link_prefix(self) -> str:
        return str(self.raw.get("link_prefix", "")).rstrip("/")

    def phrase_setting(self, key: str) -> int:
        phrases = self.raw.get("phrases", {})
        return int(phrases.get(key, DEFAULTS["phrases"][key]))

    def stopwords(self, locale: str) -> FrozenSet[str]:
        words = self.raw.get("stopwords", {}).get(locale, [])
        return frozenset(str(word).lower() for word in words)

    def single_stopwords(self, locale: str) -> FrozenSet[str]:
        """Return the extended stop set applied to single-word phrases."""

        words = self.raw.get("single_stopwords", {}).get(locale, [])
        return self.stopwords(locale) | frozenset(str(word).lower() for word in words)

    def alphabet(self, locale: str) -> str:
        """Return the body of a regex character class for ``locale`` letters."""

        extra = self.raw.get("alphabets", {}).get(locale, "")
        return "a-z" + re.escape(str(extra or ""))

    def fence_markers(self) -> tuple[str, ...]:
        return tuple(self.raw.get("fence_markers", DEFAULTS["fence_markers"]))

    def manual_links(self) -> List[Dict[str, Any]]:
        return list(self.raw.get("manual_links") or [])

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with top-level keys replaced, skipping ``None`` values."""

        data = copy.deepcopy(self.raw)
        for key, value in overrides.items():
            if value is not None:
                data[key] = value
        return EngineConfig(data)


_GERMAN_STOPWORDS = [
    "für", "der", "die", "das", "ein", "eine", "und", "oder", "mit", "von", "zu", "im", "in", "am",
    "an", "auf", "so", "wie", "ohne", "pro", "dein", "deinen", "deiner", "deine", "mein", "sein",
    "ihre", "unser", "was", "warum", "dass", "ist", "nicht", "du", "sich", "es", "wir", "auch",
    "nur", "wenn", "dann", "aber", "noch", "mehr", "alle", "alles", "immer", "viele", "sehr", "gut",
    "neue", "schon", "nach", "bei", "zum", "zur", "über", "unter", "durch", "den", "dem", "des",
    "dieser", "diese", "diesem", "wirklich", "richtig", "einfach", "schnell", "besser", "best",
    "beste", "kompletter", "vollständige", "ehrliche", "konkrete", "kostenlos", "täglich", "mal",
    "davon", "damit", "dabei", "daran", "darüber", "darunter", "daraus", "welche", "welchen",
    "kann", "kannst", "sollst", "sollte", "musst", "muss", "wird", "werden", "hat", "haben",
    "bist", "sind", "war", "waren", "wer", "wen", "wem", "ihren", "seinen",
    "jetzt", "heute", "hier", "dort", "schritt", "schritte", "weniger",
    "guide", "anleitung", "tipps", "tipp", "ideen", "idee",
    # English-titled articles on the German blog
    "for", "the", "and", "how", "your", "make", "best", "with", "owner", "examples",
]

_GERMAN_SINGLE_STOPWORDS = [
    "restaurant", "restaurants", "gastronomie", "marketing", "content", "social", "media",
    "online", "digital", "google", "instagram", "tiktok", "facebook", "hashtags", "hashtag",
    "bewertungen", "bewertung", "reichweite", "sichtbarkeit", "strategie", "strategien",
    "plan", "optimieren", "optimiert", "funktionieren", "funktioniert",
]

_ENGLISH_STOPWORDS = [
    "the", "and", "for", "with", "how", "why", "what", "your", "you", "our", "are", "was",
    "from", "into", "this", "that", "these", "those", "make", "best", "more", "most", "new",
    "guide", "tips", "ideas", "examples", "owner", "ultimate", "complete", "easy", "fast",
]

_ENGLISH_SINGLE_STOPWORDS = [
    "restaurant", "restaurants", "marketing", "content", "social", "media", "online", "digital",
    "google", "instagram", "tiktok", "facebook", "hashtags", "reviews", "strategy", "strategies",
]


DEFAULTS: Dict[str, Any] = {
    "locale": "de",
    "link_prefix": "/de/blog",
    "phrases": {
        "min_token_length": 3,
        "bigram_first_min": 4,
        "bigram_second_min": 5,
        "trigram_min": 4,
        "compound_min": 12,
    },
    "alphabets": {
        "de": "äöüß",
        "en": "",
    },
    "stopwords": {
        "de": _GERMAN_STOPWORDS,
        "en": _ENGLISH_STOPWORDS,
    },
    "single_stopwords": {
        "de": _GERMAN_SINGLE_STOPWORDS,
        "en": _ENGLISH_SINGLE_STOPWORDS,
    },
    "fence_markers": ["```", "~~~"],
    "manual_links": [],
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            try:
                user = yaml.safe_load(stream) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Engine configuration in {path} is not valid YAML: {exc}") from exc
        if not isinstance(user, dict):
            raise ValueError(f"Engine configuration in {path} must be a mapping, got {type(user).__name__}")
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
