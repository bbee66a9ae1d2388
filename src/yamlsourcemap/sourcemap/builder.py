"""Fragment builder: tiles the YAML text with classified, pointer-tagged fragments.

The builder walks the parser's events once, in document order. Every token
(scalar, alias, flow indicator, node property) becomes a fragment of the
kind its slot demands; every character between two tokens is assigned to
the enclosing structure. The result covers ``[0, len(text)]`` without gap
or overlap, which is verified before the fragments are handed out.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from yamlsourcemap.models.errors import FragmentTilingError, MalformedDocumentError
from yamlsourcemap.models.fragment import BOUNDARY_KINDS, Fragment, FragmentKind
from yamlsourcemap.parser.events import EventType, ParseEvent
from yamlsourcemap.parser.positions import PositionTranslator
from yamlsourcemap.sourcemap.pointer import ROOT_POINTER, PointerBuilder

logger = logging.getLogger("yamlsourcemap.builder")

# (start, end, kind, pointer); mutable so adjacent equal fragments can merge
_RawFragment = list


@dataclass
class _Context:
    """An open collection."""

    kind: FragmentKind  # MAP or SEQUENCE
    pointer: str
    content_start: int
    expecting_key: bool = True
    keys: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class BuildResult:
    fragments: tuple[Fragment, ...]
    # pointer -> (start, end) of the node defining the pointer's value
    node_spans: dict[str, tuple[int, int]]


class _FragmentWalk:
    """State of one pass over an event stream."""

    def __init__(self, translator: PositionTranslator) -> None:
        self._translator = translator
        self._length = translator.document_length
        self._raw: list[_RawFragment] = []
        self._cursor = 0
        self._stack: list[_Context] = []
        self._pointers = PointerBuilder()
        self._documents = 0
        self._root_seen = False
        self._last_token_end = 0
        # anchor name -> scalar value; None for anchored collections
        self._anchored_scalars: dict[str, str | None] = {}
        self.node_spans: dict[str, tuple[int, int]] = {}

    # -- events --------------------------------------------------------------

    def handle(self, event: ParseEvent) -> None:
        if event.type is EventType.DOCUMENT_START:
            self._documents += 1
            if self._documents > 1:
                raise MalformedDocumentError(
                    "expected a single document in the stream, but found another document",
                    *self._location(event.start),
                )
        elif event.type is EventType.DOCUMENT_END:
            return
        elif event.type in (EventType.MAPPING_END, EventType.SEQUENCE_END):
            self._close(event)
        else:
            self._node(event)

    def finish(self) -> list[_RawFragment]:
        if self._stack:
            raise MalformedDocumentError(
                "unexpected end of stream inside a collection", *self._location(self._length)
            )
        if not self._root_seen:
            self._append(0, self._length, FragmentKind.DOCUMENT_START, ROOT_POINTER)
        self._append(self._cursor, self._length, FragmentKind.DOCUMENT_END, ROOT_POINTER)
        return self._raw

    # -- nodes ---------------------------------------------------------------

    def _node(self, event: ParseEvent) -> None:
        alias_kind: FragmentKind | None = None
        if not self._stack:
            if self._root_seen:
                raise MalformedDocumentError(
                    "found a second root node", *self._location(event.start)
                )
            self._root_seen = True
            self._append(0, event.start, FragmentKind.DOCUMENT_START, ROOT_POINTER)
            pointer = ROOT_POINTER
            value_kind = FragmentKind.SCALAR_VALUE
        else:
            ctx = self._stack[-1]
            self._fill(event.start, ctx.kind, ctx.pointer)
            if ctx.kind is FragmentKind.MAP and ctx.expecting_key:
                self._key(ctx, event)
                return
            if ctx.kind is FragmentKind.MAP:
                ctx.expecting_key = True
                pointer = self._pointers.child_pointer()
                value_kind = FragmentKind.MAP_VALUE
                alias_kind = FragmentKind.ALIAS_AS_MAP_VALUE
            else:
                pointer = self._pointers.next_item()
                value_kind = FragmentKind.SEQUENCE_ITEM
                alias_kind = FragmentKind.ALIAS_AS_SEQUENCE_ITEM

        if event.type is EventType.ALIAS:
            if alias_kind is None:
                raise MalformedDocumentError(
                    "an alias cannot be the document root", *self._location(event.start)
                )
            self._emit(event.start, event.end, alias_kind, pointer)
            self._record_span(pointer, event.start, event.end)
        elif event.type is EventType.SCALAR:
            self._emit(event.start, event.property_end, FragmentKind.SCALAR, pointer)
            self._emit(event.property_end, event.end, value_kind, pointer)
            self._record_span(pointer, event.property_end, event.end)
            self._remember_anchor(event)
        else:
            self._open(event, pointer)

    def _key(self, ctx: _Context, event: ParseEvent) -> None:
        if event.type in (EventType.MAPPING_START, EventType.SEQUENCE_START):
            raise MalformedDocumentError(
                "complex (non-scalar) mapping keys are not supported",
                *self._location(event.start),
            )
        if event.type is EventType.ALIAS:
            key = self._anchored_scalars.get(event.anchor or "")
            if key is None:
                raise MalformedDocumentError(
                    f"alias {event.anchor!r} used as a mapping key does not refer to a scalar",
                    *self._location(event.start),
                )
            kind = FragmentKind.ALIAS_AS_MAP_KEY
        else:
            key = event.value or ""
            kind = FragmentKind.MAP_KEY
        if key in ctx.keys:
            raise MalformedDocumentError(
                f"found duplicate key {key!r}", *self._location(event.start)
            )
        ctx.keys.add(key)
        ctx.expecting_key = False
        pointer = self._pointers.set_key(key)

        if event.type is EventType.SCALAR:
            self._emit(event.start, event.property_end, FragmentKind.SCALAR, pointer)
            self._emit(event.property_end, event.end, kind, pointer)
            self._remember_anchor(event)
        else:
            self._emit(event.start, event.end, kind, pointer)

    def _open(self, event: ParseEvent, pointer: str) -> None:
        if event.type is EventType.MAPPING_START:
            kind = FragmentKind.MAP
            self._pointers.enter_map()
        else:
            kind = FragmentKind.SEQUENCE
            self._pointers.enter_sequence()
        # node properties plus the opening "{" / "[" / "-", if any
        self._emit(event.start, event.end, kind, pointer)
        if event.anchor is not None:
            self._anchored_scalars[event.anchor] = None
        self._stack.append(_Context(kind=kind, pointer=pointer, content_start=event.property_end))

    def _close(self, event: ParseEvent) -> None:
        ctx = self._stack.pop()
        self._pointers.leave()
        self._fill(event.start, ctx.kind, ctx.pointer)
        # closing "}" / "]"; block collections end without a token
        self._emit(event.start, event.end, ctx.kind, ctx.pointer)
        self._record_span(ctx.pointer, ctx.content_start, max(ctx.content_start, self._last_token_end))

    def _remember_anchor(self, event: ParseEvent) -> None:
        if event.anchor is not None:
            self._anchored_scalars[event.anchor] = event.value or ""

    # -- fragments -----------------------------------------------------------

    def _fill(self, upto: int, kind: FragmentKind, pointer: str) -> None:
        """Assign the characters before ``upto`` to the enclosing structure."""
        if upto > self._cursor:
            self._append(self._cursor, upto, kind, pointer)

    def _emit(self, start: int, end: int, kind: FragmentKind, pointer: str) -> None:
        """Add the fragment of a token; empty tokens produce nothing."""
        if end <= start:
            return
        if start != self._cursor:
            raise FragmentTilingError(
                f"{kind} fragment [{start}, {end}) for {pointer!r} does not start "
                f"at the end of the previous fragment ({self._cursor})"
            )
        self._append(start, end, kind, pointer)
        self._last_token_end = end

    def _append(self, start: int, end: int, kind: FragmentKind, pointer: str) -> None:
        if self._raw:
            last = self._raw[-1]
            if last[2] is kind and last[3] == pointer and last[1] == start and end > start:
                last[1] = end
                self._cursor = end
                return
        self._raw.append([start, end, kind, pointer])
        self._cursor = end

    def _record_span(self, pointer: str, start: int, end: int) -> None:
        if end > start:
            self.node_spans[pointer] = (start, end)

    def _location(self, offset: int) -> tuple[int, int]:
        return self._translator.offset_to_line_column(min(max(offset, 0), self._length))


def verify_tiling(raw: list[_RawFragment], length: int) -> None:
    """Check the partition invariant; raise ``FragmentTilingError`` if broken."""
    if not raw or raw[0][2] is not FragmentKind.DOCUMENT_START:
        raise FragmentTilingError("fragments must begin with DOCUMENT_START")
    if raw[-1][2] is not FragmentKind.DOCUMENT_END:
        raise FragmentTilingError("fragments must end with DOCUMENT_END")
    expected = 0
    for start, end, kind, pointer in raw:
        if start != expected:
            kind_of_problem = "overlap" if start < expected else "gap"
            raise FragmentTilingError(
                f"{kind_of_problem} before {kind} fragment [{start}, {end}) for {pointer!r}; "
                f"expected start {expected}"
            )
        if end < start or (end == start and kind not in BOUNDARY_KINDS):
            raise FragmentTilingError(f"empty {kind} fragment at {start} for {pointer!r}")
        expected = end
    if expected != length:
        raise FragmentTilingError(f"fragments end at {expected}, document length is {length}")


class FragmentBuilder:
    """Builds the ordered fragment list of one YAML document."""

    def __init__(self, text: str, translator: PositionTranslator | None = None) -> None:
        self._text = text
        self._translator = translator or PositionTranslator(text)

    def build(self, events: Iterable[ParseEvent]) -> BuildResult:
        walk = _FragmentWalk(self._translator)
        count = 0
        for event in events:
            walk.handle(event)
            count += 1
        raw = walk.finish()
        verify_tiling(raw, len(self._text))
        fragments = tuple(self._to_fragment(*entry) for entry in raw)
        logger.debug("built %d fragments from %d events", len(fragments), count)
        return BuildResult(fragments=fragments, node_spans=walk.node_spans)

    def _to_fragment(self, start: int, end: int, kind: FragmentKind, pointer: str) -> Fragment:
        start_line, start_column = self._translator.offset_to_line_column(start)
        end_line, end_column = self._translator.offset_to_line_column(end)
        return Fragment(
            start_offset=start,
            end_offset=end,
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
            kind=kind,
            json_pointer=pointer,
        )
