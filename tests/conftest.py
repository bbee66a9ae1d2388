"""Shared test fixtures for yamlsourcemap."""

from __future__ import annotations

import pytest

from yamlsourcemap.models.fragment import BOUNDARY_KINDS, Fragment
from yamlsourcemap.parser.loader import EventLoader
from yamlsourcemap.service.source_map import YAMLSourceMap, create_source_map


@pytest.fixture
def loader() -> EventLoader:
    return EventLoader()


@pytest.fixture
def invoice_map() -> YAMLSourceMap:
    return create_source_map(INVOICE_YAML)


INVOICE_YAML = """\
invoice:
  id: 34
  items:
    - a
    - b
"""

SAMPLE_DOCUMENTS: dict[str, str] = {
    "empty": "",
    "comment_only": "# nothing here\n",
    "root_scalar": "hello\n",
    "root_quoted_scalar": "'hello world'",
    "simple_map": "a: 1\nb: 2\n",
    "simple_sequence": "- x\n- y\n",
    "anchor_alias": "a: &x 1\nb: *x\n",
    "nested": INVOICE_YAML,
    "flow": "{a: [1, 2], b: {c: d}}\n",
    "flow_in_block": "list: [1, 2, 3]\nmap: {x: 1}\n",
    "markers_and_comments": "# head\n---\na: 1 # c\n...\n",
    "empty_values": "a:\nb: 2\nc:\n",
    "tags": "a: !!str 1\nb: !!int 2\n",
    "alias_key": "base: &k name\n*k : 1\n",
    "anchored_map": "base: &b\n  x: 1\nother: *b\n",
    "escaped_keys": "a/b: 1\nc~d: 2\n",
    "crlf": "a: 1\r\nb:\r\n  - 2\r\n",
    "block_scalars": (
        "text: |\n"
        "  line one\n"
        "  line two\n"
        "folded: >-\n"
        "  folded\n"
        "  text\n"
        "after: 1\n"
    ),
    "multiline_plain": "key: this is\n  a long\n  plain scalar\nnext: x\n",
    "quoted": "\"double\": 'single'\nesc: \"a\\nb\"\n",
    "indentless_sequence": "items:\n- one\n- two\nrest: 3\n",
    "nested_sequences": "- - a\n  - b\n- - c\n",
    "sequence_of_maps": "- name: a\n  size: 1\n- name: b\n  size: 2\n",
    "explicit_key": "? a\n: 1\n",
    "deep_comments": "# top\nroot:\n  # inner\n  child: 1  # trailing\n  # between\n  other: 2\n# end\n",
    "merge_key": "base: &base\n  a: 1\nderived:\n  <<: *base\n  b: 2\n",
    "empty_flow": "a: {}\nb: []\n",
    "trailing_no_newline": "a: 1",
}


def assert_tiled(fragments: list[Fragment], length: int) -> None:
    """Check that fragments partition ``[0, length]`` without gap or overlap."""
    assert fragments, "no fragments"
    assert fragments[0].start_offset == 0
    assert fragments[-1].end_offset == length
    for left, right in zip(fragments, fragments[1:]):
        assert left.end_offset == right.start_offset, (left, right)
    for fragment in fragments:
        if fragment.kind not in BOUNDARY_KINDS:
            assert fragment.start_offset < fragment.end_offset, fragment
