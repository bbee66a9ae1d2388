"""Tests for JSON Pointer segments and the pointer builder."""

from __future__ import annotations

import pytest

from yamlsourcemap.sourcemap.pointer import (
    PointerBuilder,
    escape_segment,
    is_child_pointer,
    join_pointer,
    parent_pointer,
    split_pointer,
    unescape_segment,
)


class TestSegments:
    """RFC 6901 segment escaping and pointer helpers."""

    def test_escape(self) -> None:
        assert escape_segment("a/b") == "a~1b"
        assert escape_segment("m~n") == "m~0n"
        assert escape_segment("~/") == "~0~1"

    def test_unescape_order(self) -> None:
        """``~1`` is decoded before ``~0``."""
        # "~01" is "~" followed by "1", not "/"
        assert unescape_segment("~01") == "~1"
        assert unescape_segment("a~1b") == "a/b"

    def test_join_and_split(self) -> None:
        pointer = join_pointer(["invoice", "a/b", "0"])
        assert pointer == "/invoice/a~1b/0"
        assert split_pointer(pointer) == ["invoice", "a/b", "0"]

    def test_root(self) -> None:
        assert join_pointer([]) == ""
        assert split_pointer("") == []

    def test_empty_key_segment(self) -> None:
        """An empty key is a segment of its own."""
        assert join_pointer([""]) == "/"
        assert split_pointer("/") == [""]

    def test_split_rejects_relative(self) -> None:
        with pytest.raises(ValueError, match="must be empty or start with"):
            split_pointer("a/b")

    def test_parent(self) -> None:
        assert parent_pointer("") is None
        assert parent_pointer("/a") == ""
        assert parent_pointer("/a/b~1c") == "/a"

    def test_is_child(self) -> None:
        """Only pointers exactly one segment below count as children."""
        assert is_child_pointer("", "/a")
        assert is_child_pointer("/a", "/a/0")
        assert not is_child_pointer("/a", "/a/0/x")
        assert not is_child_pointer("/a", "/ab")
        assert not is_child_pointer("/a", "/a")


class TestPointerBuilder:
    """Pointer tracking during a single-pass walk."""

    def test_root_pointer(self) -> None:
        builder = PointerBuilder()
        assert builder.current_pointer() == ""
        assert builder.depth == 0

    def test_map_entries(self) -> None:
        builder = PointerBuilder()
        builder.enter_map()
        assert builder.set_key("a") == "/a"
        assert builder.set_key("b/c") == "/b~1c"
        assert builder.current_pointer() == ""

    def test_sequence_items_count(self) -> None:
        builder = PointerBuilder()
        builder.enter_sequence()
        assert builder.next_item() == "/0"
        assert builder.next_item() == "/1"
        assert builder.next_item() == "/2"

    def test_nested_sequences_count_independently(self) -> None:
        """Every sequence numbers its items from zero."""
        builder = PointerBuilder()
        builder.enter_sequence()
        builder.next_item()
        builder.enter_sequence()
        assert builder.next_item() == "/0/0"
        assert builder.next_item() == "/0/1"
        builder.leave()
        assert builder.next_item() == "/1"
        builder.enter_sequence()
        assert builder.next_item() == "/1/0"

    def test_map_inside_sequence(self) -> None:
        builder = PointerBuilder()
        builder.enter_map()
        builder.set_key("items")
        builder.enter_sequence()
        builder.next_item()
        builder.enter_map()
        assert builder.current_pointer() == "/items/0"
        assert builder.set_key("name") == "/items/0/name"
        builder.leave()
        builder.leave()
        assert builder.current_pointer() == ""
        assert builder.child_pointer() == "/items"

    def test_wrong_container(self) -> None:
        """Keys only in maps, items only in sequences."""
        builder = PointerBuilder()
        builder.enter_map()
        with pytest.raises(ValueError, match="inside a map"):
            builder.next_item()
        builder.enter_sequence()
        with pytest.raises(ValueError, match="inside a sequence"):
            builder.set_key("x")
