"""Tests for decoding and opcode dispatch."""

import pytest
from vipcore import decode, lookup, OPCODE_TABLE, UnknownInstruction
from vipcore.decode import join_word
from vipcore.instructions.display import execute_display
from vipcore.instructions.misc import execute_wait_for_key


def test_decode_fields():
    decoded = decode(0xD5A7)

    assert decoded.raw == 0xD5A7
    assert decoded.x == 0x5
    assert decoded.y == 0xA
    assert decoded.n == 0x7
    assert decoded.k == 0xA7
    assert decoded.addr == 0x5A7


def test_join_word_is_big_endian():
    assert join_word(0x12, 0x34) == 0x1234
    assert join_word(0xFF, 0x00) == 0xFF00


def test_lookup_known():
    assert lookup(0xD123) is execute_display
    assert lookup(0xFA0A) is execute_wait_for_key


@pytest.mark.parametrize("word", [
    0x0000, 0x0123, 0x00E1, 0x00FF, 0x5121, 0x8128, 0x812F, 0x9121,
    0xE19F, 0xE000, 0xF000, 0xF130, 0xFFFF,
])
def test_lookup_unknown(word):
    with pytest.raises(UnknownInstruction) as info:
        lookup(word)
    assert info.value.instruction == word


def test_opcode_patterns_are_disjoint():
    """No instruction word matches more than one table entry."""
    for word in range(0x10000):
        matches = sum(1 for mask, value, _ in OPCODE_TABLE if word & mask == value)
        assert matches <= 1, f"{word:#06x} matches {matches} entries"


def test_table_size():
    assert len(OPCODE_TABLE) == 34
