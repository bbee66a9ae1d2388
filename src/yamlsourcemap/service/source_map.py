"""YAML source map: read-only query facade over the fragments of one document."""

from __future__ import annotations

import logging

from yamlsourcemap.models.fragment import Fragment, SourceRange
from yamlsourcemap.parser.loader import EventLoader
from yamlsourcemap.parser.positions import PositionTranslator
from yamlsourcemap.settings import Settings, get_settings
from yamlsourcemap.sourcemap.builder import FragmentBuilder
from yamlsourcemap.sourcemap.index import FragmentIndex, FragmentPredicate

logger = logging.getLogger("yamlsourcemap.service")


class YAMLSourceMap:
    """Fine-grained mapping between a YAML text and the data it encodes.

    Fragments partition the whole text into non-overlapping ranges. Each
    fragment covers characters sharing the same JSON Pointer and the same
    :class:`~yamlsourcemap.models.fragment.FragmentKind`. A pointer usually
    relates to several fragments of different kinds, e.g. the key, the
    separator and the value of a map entry.

    Instances are immutable; all queries are pure reads.
    """

    def __init__(self, document: str, index: FragmentIndex, translator: PositionTranslator) -> None:
        self._document = document
        self._index = index
        self._translator = translator

    @property
    def document(self) -> str:
        return self._document

    @property
    def translator(self) -> PositionTranslator:
        return self._translator

    def document_length(self) -> int:
        return len(self._document)

    def all_fragments(self) -> list[Fragment]:
        return list(self._index.fragments)

    def all_fragments_matching(self, predicate: FragmentPredicate) -> list[Fragment]:
        return self._index.matching(predicate)

    def find_first_fragment_matching(self, predicate: FragmentPredicate) -> Fragment | None:
        """First fragment in document order for which ``predicate`` is true."""
        return self._index.first_matching(predicate)

    def fragment_at_offset(self, offset: int) -> Fragment:
        """Fragment containing ``offset``.

        Raises ``OffsetOutOfRangeError`` outside ``[0, document_length()]``.
        """
        return self._index.fragment_at_offset(offset)

    def fragment_at_location(self, line: int, column: int) -> Fragment:
        """Fragment containing the 1-based (line, column).

        Raises ``InvalidLocationError`` when the location is not in the document.
        """
        return self._index.fragment_at_location(line, column)

    def all_fragments_of_json_pointer(self, json_pointer: str) -> list[Fragment]:
        return list(self._index.fragments_of_pointer(json_pointer))

    def all_fragments_of_children_of_json_pointer(self, json_pointer: str) -> list[Fragment]:
        """Fragments whose pointer is exactly one segment below ``json_pointer``."""
        return list(self._index.fragments_of_children(json_pointer))

    def value_fragment_of_json_pointer(self, json_pointer: str) -> Fragment | None:
        """The fragment holding the scalar (or alias) value of ``json_pointer``.

        Returns ``None`` for maps and sequences, whose content is reachable
        only through their children, and for unknown pointers.
        """
        return self._index.value_fragment(json_pointer)

    # -- convenience queries ---------------------------------------------------

    def json_pointer_at_offset(self, offset: int) -> str:
        return self.fragment_at_offset(offset).json_pointer

    def json_pointer_at_location(self, line: int, column: int) -> str:
        return self.fragment_at_location(line, column).json_pointer

    def all_json_pointers(self) -> list[str]:
        return self._index.pointers()

    def source_range_of_json_pointer(self, json_pointer: str) -> SourceRange | None:
        """Range covering every fragment of ``json_pointer`` and its descendants."""
        span = self._index.span_of_pointer_tree(json_pointer)
        return None if span is None else self._range(*span)

    def source_range_of_value_of_json_pointer(self, json_pointer: str) -> SourceRange | None:
        """Range of the node defining the value of ``json_pointer``.

        Node properties (anchor, tag) and trailing whitespace or comments are
        excluded. ``None`` for unknown pointers and empty values.
        """
        span = self._index.node_span(json_pointer)
        return None if span is None else self._range(*span)

    def _range(self, start: int, end: int) -> SourceRange:
        start_line, start_column = self._translator.offset_to_line_column(start)
        end_line, end_column = self._translator.offset_to_line_column(end)
        return SourceRange(
            start_offset=start,
            end_offset=end,
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
        )


def create_source_map(text: str, settings: Settings | None = None) -> YAMLSourceMap:
    """Parse ``text`` and build its source map.

    Raises ``MalformedDocumentError`` (or its subclass ``YAMLSafetyError``)
    when the text cannot be mapped; no partial map is ever returned.
    """
    settings = settings or get_settings()
    loader = EventLoader(
        max_document_size=settings.max_document_size,
        max_depth=settings.max_depth,
    )
    events = loader.parse(text)
    translator = PositionTranslator(text)
    result = FragmentBuilder(text, translator).build(events)
    index = FragmentIndex(result.fragments, translator, result.node_spans)
    logger.info(
        "source map built (yaml length=%d, fragments=%d, pointers=%d)",
        len(text), len(result.fragments), len(index.pointers()),
    )
    return YAMLSourceMap(text, index, translator)
