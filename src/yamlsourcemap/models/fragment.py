"""Fragment model: a classified range of YAML text sharing one JSON Pointer."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class FragmentKind(StrEnum):
    """Syntactic role of a fragment.

    Beside the kinds known from the JSON data model (``SCALAR``,
    ``SEQUENCE``, ``MAP``) refined kinds cover the sub aspects of an entry,
    e.g. ``MAP_KEY`` and ``MAP_VALUE`` within a map entry's definition. The
    ``ALIAS_AS_*`` kinds tell where an alias (``*name``) is used.
    """

    DOCUMENT_START = "document_start"
    DOCUMENT_END = "document_end"
    SCALAR = "scalar"
    SCALAR_VALUE = "scalar_value"
    SEQUENCE = "sequence"
    SEQUENCE_ITEM = "sequence_item"
    MAP = "map"
    MAP_KEY = "map_key"
    MAP_VALUE = "map_value"
    ALIAS_AS_SEQUENCE_ITEM = "alias_as_sequence_item"
    ALIAS_AS_MAP_KEY = "alias_as_map_key"
    ALIAS_AS_MAP_VALUE = "alias_as_map_value"


# Kinds covering the *value* of the entity addressed by the pointer.
VALUE_KINDS: frozenset[FragmentKind] = frozenset(
    {
        FragmentKind.SCALAR_VALUE,
        FragmentKind.SEQUENCE_ITEM,
        FragmentKind.MAP_VALUE,
        FragmentKind.ALIAS_AS_SEQUENCE_ITEM,
        FragmentKind.ALIAS_AS_MAP_VALUE,
    }
)

ALIAS_KINDS: frozenset[FragmentKind] = frozenset(
    {
        FragmentKind.ALIAS_AS_SEQUENCE_ITEM,
        FragmentKind.ALIAS_AS_MAP_KEY,
        FragmentKind.ALIAS_AS_MAP_VALUE,
    }
)

KEY_KINDS: frozenset[FragmentKind] = frozenset(
    {FragmentKind.MAP_KEY, FragmentKind.ALIAS_AS_MAP_KEY}
)

# The only kinds allowed to be zero-width.
BOUNDARY_KINDS: frozenset[FragmentKind] = frozenset(
    {FragmentKind.DOCUMENT_START, FragmentKind.DOCUMENT_END}
)


class SourceRange(BaseModel):
    """A half-open range of the YAML text, by offset and by (line, column)."""

    start_offset: int
    end_offset: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int

    model_config = {"frozen": True}

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset

    def text(self, document: str) -> str:
        """Return the characters of ``document`` covered by this range."""
        return document[self.start_offset : self.end_offset]


class Fragment(SourceRange):
    """A range of characters sharing the same JSON Pointer and kind.

    The fragment contains all characters from ``start_offset`` up to but
    excluding ``end_offset``. Lines and columns start at 1.
    """

    kind: FragmentKind
    json_pointer: str

    @property
    def is_value(self) -> bool:
        return self.kind in VALUE_KINDS

    @property
    def is_key(self) -> bool:
        return self.kind in KEY_KINDS

    @property
    def is_alias(self) -> bool:
        return self.kind in ALIAS_KINDS

    def contains_offset(self, offset: int) -> bool:
        return self.start_offset <= offset < self.end_offset

    def contains_location(self, line: int, column: int) -> bool:
        if line < self.start_line or self.end_line < line:
            return False
        left_ok = self.start_line < line or self.start_column <= column
        right_ok = line < self.end_line or column < self.end_column
        return left_ok and right_ok

    def source_range(self) -> SourceRange:
        return SourceRange(
            start_offset=self.start_offset,
            end_offset=self.end_offset,
            start_line=self.start_line,
            start_column=self.start_column,
            end_line=self.end_line,
            end_column=self.end_column,
        )
