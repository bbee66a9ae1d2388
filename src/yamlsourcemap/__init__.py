"""yamlsourcemap: map YAML source text to JSON Pointers and back."""

from yamlsourcemap.models.errors import (
    FragmentTilingError,
    InvalidLocationError,
    MalformedDocumentError,
    OffsetOutOfRangeError,
    YAMLSafetyError,
    YAMLSourceMapError,
)
from yamlsourcemap.models.fragment import Fragment, FragmentKind, SourceRange
from yamlsourcemap.service.source_map import YAMLSourceMap, create_source_map
from yamlsourcemap.settings import Settings, configure_logging, get_settings

__version__ = "0.1.0"

__all__ = [
    "Fragment",
    "FragmentKind",
    "FragmentTilingError",
    "InvalidLocationError",
    "MalformedDocumentError",
    "OffsetOutOfRangeError",
    "Settings",
    "SourceRange",
    "YAMLSafetyError",
    "YAMLSourceMap",
    "YAMLSourceMapError",
    "configure_logging",
    "create_source_map",
    "get_settings",
]
