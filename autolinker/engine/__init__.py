"""Title-driven internal linking engine for Markdown corpora."""

from .config import EngineConfig, load_config
from .index import CorpusIndex
from .injector import inject
from .phrases import PhraseExtractor
from .types import AnchorPhrase, Article, Candidate, InjectionResult, LinkInsertion, LinkRecord

__all__ = [
    "AnchorPhrase",
    "Article",
    "Candidate",
    "CorpusIndex",
    "EngineConfig",
    "InjectionResult",
    "LinkInsertion",
    "LinkRecord",
    "PhraseExtractor",
    "inject",
    "load_config",
]
