"""Immutable lookup structures over the ordered fragment list."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType

from yamlsourcemap.models.errors import OffsetOutOfRangeError
from yamlsourcemap.models.fragment import BOUNDARY_KINDS, Fragment
from yamlsourcemap.parser.positions import PositionTranslator
from yamlsourcemap.sourcemap.pointer import parent_pointer

FragmentPredicate = Callable[[Fragment], bool]


class FragmentIndex:
    """Offset, location and pointer lookups over a tiled fragment list.

    Built once; never mutated afterwards, so it can be shared between
    threads without locking.
    """

    def __init__(
        self,
        fragments: Sequence[Fragment],
        translator: PositionTranslator,
        node_spans: Mapping[str, tuple[int, int]] | None = None,
    ) -> None:
        self._fragments = tuple(fragments)
        self._translator = translator
        self._starts = [f.start_offset for f in self._fragments]
        self._node_spans = MappingProxyType(dict(node_spans or {}))

        by_pointer: dict[str, list[Fragment]] = {}
        children: dict[str, list[Fragment]] = {}
        values: dict[str, Fragment] = {}
        for fragment in self._fragments:
            pointer = fragment.json_pointer
            by_pointer.setdefault(pointer, []).append(fragment)
            parent = parent_pointer(pointer)
            if parent is not None:
                children.setdefault(parent, []).append(fragment)
            if fragment.is_value:
                values[pointer] = fragment

        self._by_pointer = {p: tuple(fs) for p, fs in by_pointer.items()}
        self._children = {p: tuple(fs) for p, fs in children.items()}
        self._values = values

    @property
    def fragments(self) -> tuple[Fragment, ...]:
        return self._fragments

    @property
    def document_length(self) -> int:
        return self._translator.document_length

    # -- offsets and locations -----------------------------------------------

    def fragment_at_offset(self, offset: int) -> Fragment:
        """Fragment containing ``offset``; the document end maps to the last fragment."""
        length = self.document_length
        if offset < 0 or offset > length:
            raise OffsetOutOfRangeError(offset, length)
        # rightmost fragment starting at or before offset; skips zero-width ones
        return self._fragments[bisect_right(self._starts, offset) - 1]

    def fragment_at_location(self, line: int, column: int) -> Fragment:
        return self.fragment_at_offset(self._translator.line_column_to_offset(line, column))

    # -- pointers --------------------------------------------------------------

    def fragments_of_pointer(self, pointer: str) -> tuple[Fragment, ...]:
        return self._by_pointer.get(pointer, ())

    def fragments_of_children(self, pointer: str) -> tuple[Fragment, ...]:
        return self._children.get(pointer, ())

    def value_fragment(self, pointer: str) -> Fragment | None:
        return self._values.get(pointer)

    def pointers(self) -> list[str]:
        """All pointers, in order of their first fragment."""
        return list(self._by_pointer)

    def node_span(self, pointer: str) -> tuple[int, int] | None:
        return self._node_spans.get(pointer)

    def span_of_pointer_tree(self, pointer: str) -> tuple[int, int] | None:
        """Smallest span covering the fragments of ``pointer`` and its descendants."""
        prefix = pointer + "/"
        start: int | None = None
        end = 0
        for fragment in self._fragments:
            if fragment.kind in BOUNDARY_KINDS:
                continue
            p = fragment.json_pointer
            if p == pointer or p.startswith(prefix):
                if start is None:
                    start = fragment.start_offset
                end = fragment.end_offset
        if start is None:
            return None
        return start, end

    # -- predicates ------------------------------------------------------------

    def matching(self, predicate: FragmentPredicate) -> list[Fragment]:
        return [f for f in self._fragments if predicate(f)]

    def first_matching(self, predicate: FragmentPredicate) -> Fragment | None:
        return next((f for f in self._fragments if predicate(f)), None)
