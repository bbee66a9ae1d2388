"""JSON Pointer (RFC 6901) paths built while walking the YAML structure."""

from __future__ import annotations

from dataclasses import dataclass

ROOT_POINTER = ""


def escape_segment(segment: str) -> str:
    """Escape a key for use as a pointer segment (``~`` → ``~0``, ``/`` → ``~1``)."""
    return segment.replace("~", "~0").replace("/", "~1")


def unescape_segment(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def join_pointer(segments: list[str]) -> str:
    """Build a pointer from unescaped segments."""
    return "".join("/" + escape_segment(s) for s in segments)


def split_pointer(pointer: str) -> list[str]:
    """Split a pointer into its unescaped segments; the root has none."""
    if pointer == ROOT_POINTER:
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON Pointer {pointer!r}: must be empty or start with '/'")
    return [unescape_segment(s) for s in pointer[1:].split("/")]


def parent_pointer(pointer: str) -> str | None:
    """Pointer of the enclosing entity; ``None`` for the root."""
    if pointer == ROOT_POINTER:
        return None
    return pointer[: pointer.rindex("/")]


def is_child_pointer(parent: str, candidate: str) -> bool:
    """True when ``candidate`` is exactly one segment below ``parent``."""
    return candidate.startswith(parent + "/") and "/" not in candidate[len(parent) + 1 :]


@dataclass
class _PathFrame:
    is_sequence: bool
    segment: str | None = None  # escaped segment of the current child
    next_index: int = 0


class PointerBuilder:
    """Tracks the pointer of the current position during a single-pass walk.

    One frame per open collection. A map frame holds the escaped key of its
    current entry, a sequence frame the index of its current item; every
    sequence counts its items independently of its siblings.
    """

    def __init__(self) -> None:
        self._frames: list[_PathFrame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    def enter_map(self) -> None:
        self._frames.append(_PathFrame(is_sequence=False))

    def enter_sequence(self) -> None:
        self._frames.append(_PathFrame(is_sequence=True))

    def leave(self) -> None:
        self._frames.pop()

    def set_key(self, key: str) -> str:
        """Select the entry ``key`` of the innermost map; returns its pointer."""
        frame = self._frames[-1]
        if frame.is_sequence:
            raise ValueError("set_key() called inside a sequence")
        frame.segment = escape_segment(key)
        return self.child_pointer()

    def next_item(self) -> str:
        """Advance the innermost sequence to its next item; returns its pointer."""
        frame = self._frames[-1]
        if not frame.is_sequence:
            raise ValueError("next_item() called inside a map")
        frame.segment = str(frame.next_index)
        frame.next_index += 1
        return self.child_pointer()

    def current_pointer(self) -> str:
        """Pointer of the innermost open collection (root when none is open)."""
        return "".join("/" + frame.segment for frame in self._frames[:-1])  # type: ignore[operator]

    def child_pointer(self) -> str:
        """Pointer of the innermost collection's current entry or item."""
        return "".join("/" + frame.segment for frame in self._frames)  # type: ignore[operator]
