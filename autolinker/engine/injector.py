"""Link injection into raw Markdown bodies."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from . import markup
from .types import Candidate, InjectionResult, LinkInsertion, LinkRecord

logger = logging.getLogger(__name__)

DEFAULT_FENCE_MARKERS = ("```", "~~~")


@dataclass(frozen=True)
class _Placement:
    """Where a single link was placed in the body."""

    body: str
    anchor_text: str
    line_number: int
    context: str


def build_url(link_prefix: str, target_id: str) -> str:
    return f"{link_prefix.rstrip('/')}/{target_id}"


def scan_existing_links(body: str, link_prefix: str, record: LinkRecord | None = None) -> LinkRecord:
    """Record targets and anchor texts of links already present in ``body``."""

    record = record if record is not None else LinkRecord()
    for text, target in markup.find_existing_links(body, link_prefix):
        record.consume(target, text)
    return record


def inject(
    article_id: str,
    body: str,
    candidates: Sequence[Candidate],
    link_prefix: str,
    record: LinkRecord | None = None,
    *,
    fence_markers: Iterable[str] = DEFAULT_FENCE_MARKERS,
) -> InjectionResult:
    """Insert at most one link per candidate target into ``body``.

    Candidates are consumed in the given order, which callers keep sorted
    longest phrase first. A candidate is skipped when its target or its
    phrase is already linked in this article, when the phrase does not occur
    in the body, or when every occurrence sits inside a heading, a code
    region or an existing link.

    Parameters
    ----------
    article_id:
        Id of the article being rewritten. Candidates pointing at it are
        ignored so an article never links to itself.
    body:
        Raw Markdown body.
    candidates:
        Ordered ``(phrase, target)`` candidates, usually from
        :meth:`CorpusIndex.phrases_excluding`.
    link_prefix:
        Path prefix of internal links, e.g. ``/de/blog``.
    record:
        Optional :class:`LinkRecord` to continue from. It is updated in
        place with the links found and inserted.

    Returns
    -------
    InjectionResult
        The rewritten body and the list of inserted links.
    """

    markers = tuple(fence_markers)
    record = scan_existing_links(body, link_prefix, record)
    inserted: List[LinkInsertion] = []

    for candidate in candidates:
        if candidate.target_id == article_id:
            continue
        if record.is_consumed(candidate):
            continue
        pattern = re.compile(re.escape(candidate.text), flags=re.IGNORECASE)
        if not pattern.search(body):
            continue

        url = build_url(link_prefix, candidate.target_id)
        placement = insert_link(body, pattern, url, fence_markers=markers)
        if placement is None:
            logger.debug("No linkable occurrence of %r in %s", candidate.text, article_id)
            continue

        body = placement.body
        record.consume(candidate.target_id, candidate.text)
        inserted.append(
            LinkInsertion(
                phrase=candidate.text,
                target_id=candidate.target_id,
                url=url,
                anchor_text=placement.anchor_text,
                line_number=placement.line_number,
                manual=candidate.phrase.manual,
                context=placement.context or None,
            )
        )

    return InjectionResult(body=body, links=inserted)


def insert_link(
    body: str,
    pattern: re.Pattern[str],
    url: str,
    *,
    fence_markers: Iterable[str] = DEFAULT_FENCE_MARKERS,
) -> _Placement | None:
    """Wrap the first linkable match of ``pattern`` and return the new body.

    Lines inside fenced code, headings and indented code are left alone.
    Open link brackets carry over to the next line until a blank line,
    heading or fence ends the paragraph. Returns ``None`` when no
    occurrence may be linked.
    """

    markers = tuple(fence_markers)
    lines = body.split("\n")
    in_code_block = False
    state = markup.CLOSED

    for number, line in enumerate(lines):
        if markup.is_fence(line, markers):
            in_code_block = not in_code_block
            state = markup.CLOSED
            continue
        if in_code_block:
            continue
        if not line.strip() or markup.is_heading(line):
            state = markup.CLOSED
            continue

        mask, state = markup.scan_links(line, state)
        if markup.is_indented_code(line):
            continue

        match = _first_linkable_match(line, pattern, mask)
        if match is None:
            continue

        start, end = match
        anchor_text = line[start:end]
        lines[number] = f"{line[:start]}[{anchor_text}]({url}){line[end:]}"
        return _Placement(
            body="\n".join(lines),
            anchor_text=anchor_text,
            line_number=number + 1,
            context=_extract_context_snippet(line, start, end),
        )

    return None


def _first_linkable_match(line: str, pattern: re.Pattern[str], mask: List[bool]) -> tuple[int, int] | None:
    if not pattern.search(line):
        return None

    position = 0
    while position < len(line):
        match = pattern.search(line, position)
        if match is None:
            return None
        start, end = match.span()
        if markup.is_linkable_position(line, start, end, mask):
            return start, end
        position = start + 1
    return None


def _extract_context_snippet(text: str, start: int, end: int, window: int = 45) -> str:
    """Return a trimmed snippet of ``text`` surrounding the span."""

    snippet = text[max(0, start - window):min(len(text), end + window)].strip()
    return re.sub(r"\s+", " ", snippet)
