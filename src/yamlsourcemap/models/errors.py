"""Exceptions raised while building or querying a YAML source map."""

from __future__ import annotations


class YAMLSourceMapError(Exception):
    """Base class of all source map errors."""


class MalformedDocumentError(YAMLSourceMapError):
    """Raised when the YAML text cannot be turned into a source map.

    ``line`` and ``column`` (1-based) point at the problem when the parser
    reported a position.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{location}")


class YAMLSafetyError(MalformedDocumentError):
    """Raised when YAML input violates the configured safety limits.

    Distinct from parse errors: the text may be valid YAML, but it is too
    large or too deeply nested to be mapped.
    """


class InvalidLocationError(YAMLSourceMapError):
    """Raised when a (line, column) pair lies outside the document."""

    def __init__(self, line: int, column: int) -> None:
        self.line = line
        self.column = column
        super().__init__(f"Invalid location: line {line}, column {column}")


class OffsetOutOfRangeError(YAMLSourceMapError):
    """Raised when an offset lies outside ``[0, document_length]``."""

    def __init__(self, offset: int, length: int) -> None:
        self.offset = offset
        self.length = length
        super().__init__(f"Offset {offset} out of range [0, {length}]")


class FragmentTilingError(YAMLSourceMapError):
    """Internal failure: the built fragments do not tile the document.

    Indicates a defect in the fragment builder, not a problem of the input.
    """
