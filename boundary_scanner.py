"""Line boundary scanning over raw patch text."""

from typing import Iterator, List, Optional, Tuple

from log_setup import get_logger

logger = get_logger(__name__)

Span = Tuple[int, int]


def iter_line_offsets(text: str, start: int = 0, end: Optional[int] = None) -> Iterator[Tuple[int, int, int]]:
    """
    Walk the lines of ``text[start:end]`` without slicing them out.

    A line ends at each ``\\n``. A ``\\r\\n`` terminator is detected as a
    whole, so ``\\r`` is never part of the line content.

    Args:
        text: Buffer to scan
        start: Offset to start scanning at
        end: Offset to stop at (defaults to the end of the buffer)

    Returns:
        Iterator of (line_start, content_end, next_line_start) offsets
    """
    if end is None:
        end = len(text)

    pos = start
    while pos < end:
        newline = text.find("\n", pos, end)
        if newline == -1:
            yield pos, end, end
            return

        content_end = newline
        if content_end > pos and text[content_end - 1] == "\r":
            content_end -= 1
        yield pos, content_end, newline + 1
        pos = newline + 1


def first_line(text: str, start: int = 0, end: Optional[int] = None) -> str:
    """Return the first line of a span, terminator excluded ('' for an empty span)."""
    for line_start, content_end, _ in iter_line_offsets(text, start, end):
        return text[line_start:content_end]
    return ""


def find_boundaries(text: str, marker: str, start: int = 0, end: Optional[int] = None) -> List[int]:
    """Offsets of every line in the span whose content starts with ``marker``."""
    boundaries = []
    for line_start, content_end, _ in iter_line_offsets(text, start, end):
        # The marker must fit in the line content, not run into its terminator
        if content_end - line_start >= len(marker) and text.startswith(marker, line_start):
            boundaries.append(line_start)
    return boundaries


def find_spans(text: str, marker: str, start: int = 0, end: Optional[int] = None) -> List[Span]:
    """
    Split a span of text into contiguous sections headed by ``marker`` lines.

    Each section runs from its marker line up to the next marker line, the
    last one up to the end of the span. Text before the first marker line
    belongs to no section.

    Args:
        text: Buffer to scan
        marker: Literal prefix a line must start with to open a section
        start: Offset the span starts at
        end: Offset the span stops at (defaults to the end of the buffer)

    Returns:
        List of (start, end) offset pairs, empty when no line matches
    """
    if end is None:
        end = len(text)

    boundaries = find_boundaries(text, marker, start, end)
    if not boundaries:
        logger.debug("no_boundaries", marker=marker, start=start, end=end)
        return []

    return list(zip(boundaries, boundaries[1:] + [end]))
