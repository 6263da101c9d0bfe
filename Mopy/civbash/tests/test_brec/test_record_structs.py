# -*- coding: utf-8 -*-
#
# GPL License and Copyright Notice ============================================
#  This file is part of Civ Bash.
#
#  Civ Bash is free software: you can redistribute it and/or
#  modify it under the terms of the GNU General Public License
#  as published by the Free Software Foundation, either version 3
#  of the License, or (at your option) any later version.
#
#  Civ Bash is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with Civ Bash.  If not, see <https://www.gnu.org/licenses/>.
#
#  Civ Bash copyright (C) 2024 Civ Bash Team
#
# =============================================================================
import pytest

from .. import ELEMENT_END_MARKER, TEST_MARKER, array_record, \
    bool_record, int_record, opaque_record, string_record, utf_string_record
from ...brec import ACTOR_DATA, COMPRESSED_DATA_END, END_OF_DATA, \
    GAME_DATA, Opaque, SLOT_HEADERS, SaveReader, SaveRecord, parse_record, \
    simplify
from ...exception import MalformedArrayError, SaveReadError, \
    UnknownTypeError

def _parse_all(buf):
    """Parse records back to back until the buffer runs out."""
    ins = SaveReader(buf, 'test.Civ6Save')
    records = []
    while not ins.atEnd():
        records.append(parse_record(ins))
    return records

class TestParseRecord(object):
    def test_int_record(self):
        rec_bytes = int_record(TEST_MARKER, 1234)
        record, = _parse_all(rec_bytes)
        assert record.marker == TEST_MARKER
        assert record.rec_type == 2
        assert record.value == 1234
        assert record.byte_span == (0, len(rec_bytes))
        assert not record.is_opaque

    def test_span_of_later_record(self):
        first = bool_record(TEST_MARKER, 1)
        second = string_record(ACTOR_DATA['ACTOR_NAME'], 'CIVILIZATION_ROME')
        records = _parse_all(first + second)
        assert [r.value for r in records] == [True, 'CIVILIZATION_ROME']
        assert records[1].byte_span == (len(first), len(first) + len(second))

    def test_filler(self):
        """Markers that are really small numbers, or type 0, are filler."""
        records = _parse_all(b'\x05\x00\x00\x00\x02\x00\x00\x00' +
                             TEST_MARKER + b'\x00' * 4)
        assert [r.value for r in records] == [Opaque.SKIP, Opaque.SKIP]
        assert records[1].byte_span == (8, 16)

    def test_opaque_types_mid_stream(self):
        """Types we only know the size of must not break the alignment of
        whatever follows."""
        records = _parse_all(b''.join([
            int_record(TEST_MARKER, 1),
            opaque_record(TEST_MARKER, 3),
            string_record(TEST_MARKER, 'after 3'),
            opaque_record(TEST_MARKER, 0x0D),
            opaque_record(TEST_MARKER, 0x14),
            TEST_MARKER + b'\x15\x00\x00\x00' + b'\x00' * 12,
            TEST_MARKER + b'\x15\x00\x00\x00\x00\x00\x00\x80' + b'\x00' * 16,
            utf_string_record(TEST_MARKER, 'after 0x15'),
        ]))
        assert simplify(records) == [
            1, 'UNKNOWN!', 'after 3', 'UNKNOWN!', 'UNKNOWN!', 'UNKNOWN!',
            'UNKNOWN!', 'after 0x15']

    def test_end_of_data(self):
        buf = int_record(TEST_MARKER, 1) + END_OF_DATA + b'\x02\x00\x00\x00' \
              b'whatever comes next'
        records = _parse_all(buf)
        assert records[1].value is Opaque.END_OF_DATA
        assert records[1].byte_span == (20, len(buf))

    def test_compressed_blob(self):
        blob = TEST_MARKER + b'\x18\x00\x00\x00' + b'\x78\x9c\x01\x02' + \
               COMPRESSED_DATA_END
        records = _parse_all(blob + int_record(TEST_MARKER, 9))
        assert records[0].value is Opaque.COMPRESSED
        assert records[0].byte_span == (0, len(blob))
        assert records[1].value == 9

    def test_unknown_type(self):
        buf = int_record(TEST_MARKER, 1) + TEST_MARKER + b'\x99\x00\x00\x00'
        with pytest.raises(UnknownTypeError) as exc_info:
            _parse_all(buf)
        assert exc_info.value.rec_type == 0x99
        assert exc_info.value.at_pos == 28

    def test_truncated_record(self):
        with pytest.raises(SaveReadError):
            _parse_all(int_record(TEST_MARKER, 1)[:-2])

class TestArrays(object):
    def test_array(self):
        buf = array_record(
            TEST_MARKER,
            string_record(GAME_DATA['MOD_ID'], 'expansion1') +
            int_record(TEST_MARKER, 1) +
            string_record(GAME_DATA['MOD_TITLE'], 'Rise and Fall'),
            string_record(GAME_DATA['MOD_ID'], 'expansion2'),
        )
        record, = _parse_all(buf)
        assert record.byte_span == (0, len(buf))
        assert simplify(record) == [
            {'MOD_ID': 'expansion1', 'MOD_TITLE': 'Rise and Fall'},
            {'MOD_ID': 'expansion2'}]

    def test_empty_array(self):
        record, = _parse_all(array_record(TEST_MARKER))
        assert record.value == []

    def test_malformed_element(self):
        buf = bytearray(array_record(TEST_MARKER, int_record(TEST_MARKER, 1)))
        buf[20] = 0x0B
        with pytest.raises(MalformedArrayError):
            _parse_all(bytes(buf))

    def test_truncated_element(self):
        """The stream ends before the element is closed."""
        buf = array_record(TEST_MARKER, b'')
        buf = buf[:len(buf) - len(string_record(ELEMENT_END_MARKER, '1'))]
        with pytest.raises(SaveReadError):
            _parse_all(buf)

class TestSaveRecord(object):
    def test_field_name(self):
        assert SaveRecord(GAME_DATA['GAME_TURN'], 2).field_name == \
               'GAME_TURN'
        assert SaveRecord(ACTOR_DATA['PLAYER_NAME'], 5).field_name == \
               'PLAYER_NAME'
        assert SaveRecord(SLOT_HEADERS[3], 2).field_name == 'SLOT_HEADER_3'
        assert SaveRecord(TEST_MARKER, 2).field_name is None

    def test_repr(self):
        record = SaveRecord(GAME_DATA['GAME_TURN'], 2, 7, span_start=12)
        assert repr(record) == '<SaveRecord [GAME_TURN (9D 2C E6 BD):0x2] ' \
                               '7 @12>'

def test_simplify():
    record = SaveRecord(TEST_MARKER, 5, 'x')
    assert simplify({'A': record, 'B': [record, Opaque.SKIP],
                     'C': (1, 2)}) == {'A': 'x', 'B': ['x', 'SKIP'],
                                       'C': [1, 2]}
