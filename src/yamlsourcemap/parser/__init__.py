"""YAML parse events with character offsets, and offset/location translation."""

from yamlsourcemap.parser.events import EventType, ParseEvent
from yamlsourcemap.parser.loader import EventLoader
from yamlsourcemap.parser.positions import PositionTranslator

__all__ = [
    "EventLoader",
    "EventType",
    "ParseEvent",
    "PositionTranslator",
]
