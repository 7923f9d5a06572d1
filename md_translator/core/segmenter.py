"""
Heading-based Markdown segmentation.

Splits a Markdown document into fragments at ATX heading lines (``#`` to
``######``). Each fragment runs from one heading to the line before the next
one; text before the first heading forms its own fragment. Lines inside
fenced code blocks are never treated as headings, so a ``# comment`` in a
shell snippet stays with the section that contains it.
"""
import re
from typing import Iterator, List, Optional

from .exceptions import EmptyInputError


# 1-6 '#' at column 0, then whitespace or end of line
HEADING_PATTERN = re.compile(r'^#{1,6}(?:\s|$)')

# ``` or ~~~ (3 or more), up to 3 spaces of indentation. A backtick fence's
# info string cannot contain a backtick, so "```x``` text" is an inline span.
FENCE_PATTERN = re.compile(r'^ {0,3}(?:(`{3,})[^`]*$|(~{3,}))')

# Markdown line endings only: \n, \r\n or a lone \r
LINE_PATTERN = re.compile(r'[^\r\n]*(?:\r\n|\r|\n|$)')


def is_heading_line(line: str) -> bool:
    """Return True if the line opens an ATX heading."""
    return bool(HEADING_PATTERN.match(line))


def _match_fence(line: str) -> Optional[str]:
    """Return the fence marker opening a code block on this line, if any."""
    match = FENCE_PATTERN.match(line)
    if not match:
        return None
    return match.group(1) or match.group(2)


def _closes_fence(line: str, fence: str) -> bool:
    """A closing fence uses the same character, at least as many times, and nothing else."""
    stripped = line.strip()
    return (
        len(stripped) >= len(fence)
        and set(stripped) == {fence[0]}
        and len(line) - len(line.lstrip(' ')) <= 3
    )


def _lines(text: str) -> Iterator[str]:
    """Yield lines with their endings; other Unicode line separators stay inside a line."""
    for match in LINE_PATTERN.finditer(text):
        if match.group():
            yield match.group()


def split(text: str) -> List[str]:
    """
    Split Markdown text into heading-delimited fragments.

    Args:
        text: Markdown text, already trimmed by the caller

    Returns:
        Fragments in source order, each trimmed and non-empty

    Raises:
        EmptyInputError: If the text is empty or whitespace only
    """
    if not text or not text.strip():
        raise EmptyInputError()

    fragments: List[str] = []
    current: List[str] = []
    fence: Optional[str] = None

    def flush():
        fragment = ''.join(current).strip()
        if fragment:
            fragments.append(fragment)
        current.clear()

    for line in _lines(text):
        if fence is None:
            if is_heading_line(line):
                flush()
            else:
                fence = _match_fence(line)
        elif _closes_fence(line, fence):
            fence = None
        current.append(line)

    flush()
    return fragments
