"""Translate between absolute character offsets and 1-based (line, column)."""

from __future__ import annotations

from bisect import bisect_right

from yamlsourcemap.models.errors import InvalidLocationError, OffsetOutOfRangeError


def _line_starts(text: str) -> list[int]:
    """Offsets of the first character of every line.

    ``\\n``, ``\\r\\n`` and a lone ``\\r`` each end a line.
    """
    starts = [0]
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\r":
            if i + 1 < length and text[i + 1] == "\n":
                i += 1
            starts.append(i + 1)
        elif ch == "\n":
            starts.append(i + 1)
        i += 1
    return starts


class PositionTranslator:
    """Lookup structure over the line starts of one document.

    Built once from the text; all lookups are pure.
    """

    def __init__(self, text: str) -> None:
        self._length = len(text)
        self._line_starts = _line_starts(text)

    @property
    def document_length(self) -> int:
        return self._length

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_to_line_column(self, offset: int) -> tuple[int, int]:
        if offset < 0 or offset > self._length:
            raise OffsetOutOfRangeError(offset, self._length)
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def line_column_to_offset(self, line: int, column: int) -> int:
        if line < 1 or line > len(self._line_starts) or column < 1:
            raise InvalidLocationError(line, column)
        start = self._line_starts[line - 1]
        if line < len(self._line_starts):
            # columns of the line's characters, line break included
            limit = self._line_starts[line] - start
        else:
            # last line: the document end is addressable too
            limit = self._length - start + 1
        if column > limit:
            raise InvalidLocationError(line, column)
        return start + column - 1
