"""Typed data structures used by the linking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass(frozen=True)
class Article:
    """Normalized article representation handed to the engine."""

    id: str
    title: str
    body: str
    locale: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AnchorPhrase:
    """Lowercase anchor phrase derived from the title of ``source_article_id``."""

    text: str
    source_article_id: str
    origin: str = "title"

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def manual(self) -> bool:
        return self.origin == "manual"


@dataclass(frozen=True)
class Candidate:
    """A phrase eligible for insertion as a link to ``target_id``."""

    phrase: AnchorPhrase
    target_id: str

    @property
    def text(self) -> str:
        return self.phrase.text


@dataclass
class LinkRecord:
    """Targets and anchor texts already linked inside one article."""

    targets: Set[str] = field(default_factory=set)
    phrases: Set[str] = field(default_factory=set)

    def is_consumed(self, candidate: Candidate) -> bool:
        return candidate.target_id in self.targets or candidate.text.lower() in self.phrases

    def consume(self, target_id: str, anchor_text: str) -> None:
        self.targets.add(target_id)
        self.phrases.add(anchor_text.lower())


@dataclass(frozen=True)
class LinkInsertion:
    """Details about a link that was inserted into an article body."""

    phrase: str
    target_id: str
    url: str
    anchor_text: str
    line_number: int
    manual: bool = False
    context: str | None = None


@dataclass(frozen=True)
class InjectionResult:
    """Rewritten body together with the links added to it."""

    body: str
    links: List[LinkInsertion] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.links)
