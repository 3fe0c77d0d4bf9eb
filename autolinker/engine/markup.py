"""Structural scanning of Markdown bodies.

The injector must never place a link inside headings, code blocks or an
existing link. These helpers classify lines and track, character by
character, whether a position sits inside link text or a link destination.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

HEADING_RE = re.compile(r"^#{1,6}\s")
INDENT = "    "
LINK_TARGET_OPEN = "]("


def is_fence(line: str, markers: Iterable[str] = ("```", "~~~")) -> bool:
    stripped = line.lstrip()
    return any(stripped.startswith(marker) for marker in markers)


def is_heading(line: str) -> bool:
    return bool(HEADING_RE.match(line.strip()))


def is_indented_code(line: str) -> bool:
    return line.startswith(INDENT)


@dataclass(frozen=True)
class LinkState:
    """Open ``[`` brackets and ``](`` parentheses carried past a line end."""

    depth: int = 0
    target_depth: int = 0


CLOSED = LinkState()


def link_mask(line: str, state: LinkState = CLOSED) -> List[bool]:
    """Return, for each index of ``line``, whether it lies inside a link.

    ``state`` is the link state at the start of the line, so link text
    wrapped over several lines of a paragraph stays masked.
    """

    return scan_links(line, state)[0]


def scan_links(line: str, state: LinkState = CLOSED) -> Tuple[List[bool], LinkState]:
    """Return the link mask of ``line`` and the state after its last character.

    The state machine tracks the depth of ``[`` brackets (anchor text) and
    whether it is inside a ``](...)`` destination, counting nested
    parentheses there. The value at ``i`` describes the state before
    character ``i`` is consumed. Unbalanced ``]`` never drives the depth
    below zero.
    """

    mask: List[bool] = []
    depth = state.depth
    target_depth = state.target_depth
    previous = ""

    for char in line:
        mask.append(depth > 0 or target_depth > 0)
        if target_depth:
            if char == "(":
                target_depth += 1
            elif char == ")":
                target_depth -= 1
        elif char == "(" and previous == "]":
            target_depth = 1
        elif char == "[":
            depth += 1
        elif char == "]":
            depth = max(depth - 1, 0)
        previous = char

    return mask, LinkState(depth=depth, target_depth=target_depth)


def is_linkable_position(line: str, start: int, end: int, mask: List[bool]) -> bool:
    """Return True when ``line[start:end]`` may be wrapped in a new link."""

    if mask[start]:
        return False
    if line.startswith(LINK_TARGET_OPEN, end):
        return False
    if start > 0 and line[start - 1] == "(":
        return False
    return True


def existing_link_pattern(link_prefix: str) -> re.Pattern[str]:
    prefix = re.escape(link_prefix.rstrip("/"))
    return re.compile(r"\[([^\]]+)\]\(" + prefix + r"/([^)]+)\)")


def find_existing_links(body: str, link_prefix: str) -> List[Tuple[str, str]]:
    """Return ``(text, target)`` pairs of links already pointing under ``link_prefix``."""

    pattern = existing_link_pattern(link_prefix)
    return [(match.group(1), target_id_of(match.group(2))) for match in pattern.finditer(body)]


def target_id_of(destination: str) -> str:
    """Strip a link title, query, fragment and trailing slash from ``destination``."""

    target = destination.strip().split(maxsplit=1)[0] if destination.strip() else ""
    target = re.split(r"[?#]", target, maxsplit=1)[0]
    return target.rstrip("/")
