"""Pydantic models and exceptions for YAML source maps."""

from yamlsourcemap.models.errors import (
    FragmentTilingError,
    InvalidLocationError,
    MalformedDocumentError,
    OffsetOutOfRangeError,
    YAMLSafetyError,
    YAMLSourceMapError,
)
from yamlsourcemap.models.fragment import (
    ALIAS_KINDS,
    BOUNDARY_KINDS,
    KEY_KINDS,
    VALUE_KINDS,
    Fragment,
    FragmentKind,
    SourceRange,
)

__all__ = [
    "ALIAS_KINDS",
    "BOUNDARY_KINDS",
    "KEY_KINDS",
    "VALUE_KINDS",
    "Fragment",
    "FragmentKind",
    "FragmentTilingError",
    "InvalidLocationError",
    "MalformedDocumentError",
    "OffsetOutOfRangeError",
    "SourceRange",
    "YAMLSafetyError",
    "YAMLSourceMapError",
]
