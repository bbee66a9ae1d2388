"""YAML event loader: ruamel.yaml parse events with character offsets."""

from __future__ import annotations

import logging
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError, YAMLError
from ruamel.yaml.events import (
    AliasEvent,
    DocumentEndEvent,
    DocumentStartEvent,
    MappingEndEvent,
    MappingStartEvent,
    ScalarEvent,
    SequenceEndEvent,
    SequenceStartEvent,
)

from yamlsourcemap.models.errors import MalformedDocumentError, YAMLSafetyError
from yamlsourcemap.parser.events import EventType, ParseEvent
from yamlsourcemap.settings import DEFAULT_MAX_DEPTH, DEFAULT_MAX_DOCUMENT_SIZE

logger = logging.getLogger("yamlsourcemap.parser")

_FLOW_INDICATORS = ",[]{}"


def _skip_node_properties(text: str, pos: int, end: int) -> int:
    """Return the offset after the anchor/tag properties starting at ``pos``.

    Whitespace and comments between the properties and the content are
    skipped too. Never moves beyond ``end``.
    """
    while pos < end and text[pos] in "&!":
        if text.startswith("!<", pos):
            close = text.find(">", pos, end)
            pos = end if close < 0 else close + 1
        else:
            while pos < end and not text[pos].isspace() and text[pos] not in _FLOW_INDICATORS:
                pos += 1
        while pos < end:
            ch = text[pos]
            if ch in " \t\r\n":
                pos += 1
            elif ch == "#":
                while pos < end and text[pos] not in "\r\n":
                    pos += 1
            else:
                break
    return min(pos, end)


class EventLoader:
    """Parses YAML text into :class:`ParseEvent` objects.

    Uses ruamel.yaml's pure Python parser, whose marks carry the character
    index of every event. Aliases are checked against the anchors defined
    so far; everything else about the grammar is left to ruamel.yaml.
    """

    def __init__(
        self,
        max_document_size: int = DEFAULT_MAX_DOCUMENT_SIZE,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._yaml = YAML(typ="safe", pure=True)
        self._max_document_size = max_document_size
        self._max_depth = max_depth

    # -- safety checks -------------------------------------------------------

    def _check_yaml_safety(self, content: str) -> None:
        """Pre-parse check: reject documents exceeding the maximum size."""
        if len(content) > self._max_document_size:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {self._max_document_size:,} limit)"
            )

    # -- public API ----------------------------------------------------------

    def parse(self, content: str) -> list[ParseEvent]:
        """Parse ``content`` and return its structural events in document order.

        Raises ``MalformedDocumentError`` when ruamel.yaml rejects the text.
        """
        self._check_yaml_safety(content)
        events: list[ParseEvent] = []
        anchors: set[str] = set()
        depth = 0
        try:
            for raw in self._yaml.parse(content):
                event = self._convert(raw, content)
                if event is None:
                    continue
                if event.type is EventType.DOCUMENT_START:
                    anchors.clear()
                elif event.type is EventType.ALIAS:
                    if event.anchor not in anchors:
                        line, column = raw.start_mark.line + 1, raw.start_mark.column + 1
                        raise MalformedDocumentError(
                            f"found undefined alias {event.anchor!r}", line, column
                        )
                elif event.type in (EventType.MAPPING_START, EventType.SEQUENCE_START):
                    depth += 1
                    if depth > self._max_depth:
                        raise YAMLSafetyError(
                            f"YAML document exceeds maximum nesting depth ({self._max_depth})",
                            raw.start_mark.line + 1,
                            raw.start_mark.column + 1,
                        )
                elif event.type in (EventType.MAPPING_END, EventType.SEQUENCE_END):
                    depth -= 1
                if event.anchor is not None and event.type is not EventType.ALIAS:
                    anchors.add(event.anchor)
                events.append(event)
        except MarkedYAMLError as exc:
            mark = exc.problem_mark or exc.context_mark
            message = exc.problem or exc.context or str(exc)
            if mark is None:
                raise MalformedDocumentError(message) from exc
            raise MalformedDocumentError(message, mark.line + 1, mark.column + 1) from exc
        except YAMLError as exc:
            raise MalformedDocumentError(str(exc)) from exc
        logger.debug("parsed %d events (yaml length=%d)", len(events), len(content))
        return events

    # -- conversion ----------------------------------------------------------

    @staticmethod
    def _convert(raw: Any, content: str) -> ParseEvent | None:
        start, end = raw.start_mark.index, raw.end_mark.index
        if isinstance(raw, ScalarEvent):
            return ParseEvent(
                type=EventType.SCALAR,
                start=start,
                end=end,
                content_start=_properties_end(raw, content, start, end),
                value=raw.value,
                anchor=raw.anchor,
                tag=raw.tag,
            )
        if isinstance(raw, AliasEvent):
            return ParseEvent(type=EventType.ALIAS, start=start, end=end, anchor=raw.anchor)
        if isinstance(raw, MappingStartEvent):
            return ParseEvent(
                type=EventType.MAPPING_START,
                start=start,
                end=end,
                content_start=_properties_end(raw, content, start, end),
                anchor=raw.anchor,
                tag=raw.tag,
            )
        if isinstance(raw, SequenceStartEvent):
            return ParseEvent(
                type=EventType.SEQUENCE_START,
                start=start,
                end=end,
                content_start=_properties_end(raw, content, start, end),
                anchor=raw.anchor,
                tag=raw.tag,
            )
        if isinstance(raw, MappingEndEvent):
            return ParseEvent(type=EventType.MAPPING_END, start=start, end=end)
        if isinstance(raw, SequenceEndEvent):
            return ParseEvent(type=EventType.SEQUENCE_END, start=start, end=end)
        if isinstance(raw, DocumentStartEvent):
            return ParseEvent(
                type=EventType.DOCUMENT_START, start=start, end=end, implicit=not raw.explicit
            )
        if isinstance(raw, DocumentEndEvent):
            return ParseEvent(
                type=EventType.DOCUMENT_END, start=start, end=end, implicit=not raw.explicit
            )
        # StreamStartEvent / StreamEndEvent carry no structure
        return None


def _properties_end(raw: Any, content: str, start: int, end: int) -> int:
    if raw.anchor is None and raw.ctag is None:
        return start
    return _skip_node_properties(content, start, end)
