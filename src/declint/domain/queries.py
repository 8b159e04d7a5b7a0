"""Range queries over a file: regex matches correlated with syntax tokens.

This module is the only place that converts between UTF-8 byte offsets (used
by the structure model) and character indices (used by ``re``). Everything
it returns is expressed in byte offsets again.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from declint.domain.structure import ByteRange, Token

if TYPE_CHECKING:
    from declint.domain.structure import StructureModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeMatch:
    """A regex match in byte coordinates plus the tokens it overlaps, in file order."""

    range: ByteRange
    tokens: tuple[Token, ...]


class TextOffsetIndex:
    """Bidirectional byte offset <-> character index table for one text."""

    def __init__(self, text: str) -> None:
        char_to_byte = [0]
        total = 0
        for char in text:
            total += TextOffsetIndex._utf8_width(char)
            char_to_byte.append(total)
        self._char_to_byte = char_to_byte
        self._byte_to_char = {byte: index for index, byte in enumerate(char_to_byte)}
        self._line_starts = [0] + [index + 1 for index, char in enumerate(text) if char == "\n"]

    @staticmethod
    def _utf8_width(char: str) -> int:
        code = ord(char)
        if code < 0x80:
            return 1
        if code < 0x800:
            return 2
        if code < 0x10000:
            return 3
        return 4

    @property
    def byte_length(self) -> int:
        return self._char_to_byte[-1]

    def char_to_byte(self, index: int) -> int:
        return self._char_to_byte[index]

    def byte_to_char(self, offset: int) -> int | None:
        """Character index starting at a byte offset; None if the offset splits a character."""
        return self._byte_to_char.get(offset)

    def char_span(self, byte_range: ByteRange) -> tuple[int, int] | None:
        start = self.byte_to_char(byte_range.offset)
        end = self.byte_to_char(byte_range.end)
        if start is None or end is None or end < start:
            return None
        return (start, end)

    def line_and_column(self, offset: int) -> tuple[int, int] | None:
        """1-based line and character column of a byte offset."""
        index = self.byte_to_char(offset)
        if index is None:
            return None
        line = bisect_right(self._line_starts, index) - 1
        return (line + 1, index - self._line_starts[line] + 1)


class RangeQuery:
    """Regex and token lookups over one StructureModel. Obtain via ``file.query``."""

    def __init__(self, file: "StructureModel") -> None:
        self._file = file
        self._index = TextOffsetIndex(file.text)
        self._token_offsets = [token.offset for token in file.tokens]
        self._token_ends = [token.offset + token.length for token in file.tokens]

    @property
    def index(self) -> TextOffsetIndex:
        return self._index

    def find_matches(
        self,
        pattern: str | re.Pattern[str],
        byte_range: ByteRange | None = None,
    ) -> list[RangeMatch]:
        """
        All non-overlapping matches of pattern inside byte_range (whole file when None).

        A byte_range that does not start and end on character boundaries
        yields no matches rather than matches at shifted locations.
        Empty matches are dropped since they cannot overlap any token.
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        if byte_range is None:
            start, end = 0, len(self._file.text)
        else:
            span = self._index.char_span(byte_range)
            if span is None:
                logger.debug(
                    "Dropping query %r: byte range %s of %s is not on character boundaries",
                    regex.pattern,
                    byte_range,
                    self._file.path,
                )
                return []
            start, end = span

        matches: list[RangeMatch] = []
        for match in regex.finditer(self._file.text, start, end):
            if match.end() == match.start():
                continue
            match_start = self._index.char_to_byte(match.start())
            match_range = ByteRange(match_start, self._index.char_to_byte(match.end()) - match_start)
            matches.append(RangeMatch(match_range, self.tokens_intersecting(match_range)))
        return matches

    def tokens_intersecting(self, byte_range: ByteRange) -> tuple[Token, ...]:
        first = bisect_right(self._token_ends, byte_range.offset)
        last = bisect_left(self._token_offsets, byte_range.end)
        return tuple(self._file.tokens[first:last])

    def contents(self, byte_range: ByteRange) -> str | None:
        """Source text of a byte range, or None if the range cannot be translated."""
        span = self._index.char_span(byte_range)
        if span is None:
            return None
        return self._file.text[span[0]:span[1]]

    def line_and_column(self, offset: int) -> tuple[int, int] | None:
        return self._index.line_and_column(offset)

    @staticmethod
    def nearest_preceding_token(offset: int, tokens: Sequence[Token]) -> Token | None:
        """Last token in an offset-ordered stream whose offset is strictly less than offset."""
        position = bisect_left(tokens, offset, key=lambda token: token.offset)
        if position == 0:
            return None
        return tokens[position - 1]
