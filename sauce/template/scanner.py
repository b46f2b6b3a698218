"""
Tag scanner.

Splits template source into alternating literal-text spans and tag bodies
using a configurable begin/end marker pair.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Union

logger = logging.getLogger(__name__)


class Markers(NamedTuple):
    """Begin/end delimiter pair bounding a tag."""
    begin: str
    end: str


DEFAULT_MARKERS = Markers("{%", "%}")


@dataclass(frozen=True)
class TextToken:
    """Literal text between tags."""
    text: str
    position: int  # Offset in the source


@dataclass(frozen=True)
class StatementToken:
    """
    Raw tag body: everything strictly between a begin marker and the next
    end marker, untrimmed.
    """
    body: str
    position: int  # Offset of the begin marker in the source


ScanToken = Union[TextToken, StatementToken]


class TagScanner:
    """
    Scanner producing a lazy stream of TextToken / StatementToken.

    A begin marker with no end marker after it terminates scanning: the
    dangling span from that marker to the end of the source is dropped.
    """

    def __init__(self, source: str, markers: Markers = DEFAULT_MARKERS):
        begin, end = markers
        if not begin or not end:
            raise ValueError("Tag markers must be non-empty strings")
        self.source = source
        self.markers = Markers(begin, end)

    def scan(self) -> Iterator[ScanToken]:
        """
        Yields tokens in source order.

        The returned generator is single-use.
        """
        source = self.source
        begin, end = self.markers
        length = len(source)
        position = 0

        while position < length:
            begin_pos = source.find(begin, position)
            if begin_pos == -1:
                yield TextToken(source[position:], position)
                return

            if begin_pos > position:
                yield TextToken(source[position:begin_pos], position)

            body_start = begin_pos + len(begin)
            end_pos = source.find(end, body_start)
            if end_pos == -1:
                logger.debug(
                    "Unterminated tag at offset %d: dropping %d trailing characters",
                    begin_pos, length - begin_pos,
                )
                return

            yield StatementToken(source[body_start:end_pos], begin_pos)
            position = end_pos + len(end)


def scan_tags(source: str, markers: Markers = DEFAULT_MARKERS) -> Iterator[ScanToken]:
    """
    Convenience function for scanning template source.

    Args:
        source: Template source text
        markers: Begin/end marker pair

    Returns:
        Single-use iterator of tokens
    """
    return TagScanner(source, markers).scan()


__all__ = [
    "Markers",
    "DEFAULT_MARKERS",
    "TextToken",
    "StatementToken",
    "ScanToken",
    "TagScanner",
    "scan_tags",
]
