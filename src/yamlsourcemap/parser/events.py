"""Structural parse events with source offsets, independent of the YAML library."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class EventType(StrEnum):
    DOCUMENT_START = "document_start"
    DOCUMENT_END = "document_end"
    MAPPING_START = "mapping_start"
    MAPPING_END = "mapping_end"
    SEQUENCE_START = "sequence_start"
    SEQUENCE_END = "sequence_end"
    SCALAR = "scalar"
    ALIAS = "alias"


@dataclass(frozen=True)
class ParseEvent:
    """One parser event covering ``[start, end)`` of the source text.

    For node events ``start`` includes the node properties (anchor, tag);
    ``content_start`` is where the node's own content begins. For an alias
    ``anchor`` is the referenced anchor name. ``implicit`` is false only for
    document markers written out as ``---`` or ``...``.
    """

    type: EventType
    start: int
    end: int
    content_start: int | None = None
    value: str | None = None
    anchor: str | None = None
    tag: str | None = None
    implicit: bool = True

    @property
    def property_end(self) -> int:
        """End of the node properties, i.e. start of the content."""
        return self.start if self.content_start is None else self.content_start
