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
"""Houses SaveRecord, the in memory form of one marker-tagged record, and the
record parser that produces them from a SaveReader."""
from .basic_elements import STRING_TYPES, read_boolean, read_int, \
    read_string, read_utf_string, skip_opaque, skip_type_15
from .save_io import SaveReader
from .utils_constants import ARRAY, ARRAY_ELEMENT_END, ARRAY_ELEMENT_MARKER, \
    ARRAY_START, BOOLEAN, COMPRESSED_BLOB, COMPRESSED_DATA_END, END_OF_DATA, \
    INTEGER, Opaque, UTF_STRING, ZLIB_HEADER, actor_data_names, \
    game_data_names, opaque_skips, slot_header_index
from ..bolt import sig_to_str, structs_cache
from ..exception import MalformedArrayError, SaveReadError, UnknownTypeError

__all__ = ['SaveRecord', 'parse_record', 'read_array', 'simplify']

class SaveRecord(object):
    """One decoded (marker, type, value) unit plus the span of bytes
    [span_start, span_end) it was read from. chunk is the ledger chunk
    holding its bytes - None for records nested inside arrays, which are
    owned by the chunk of the array record."""
    __slots__ = ('marker', 'rec_type', 'value', 'span_start', 'span_end',
                 'chunk')

    def __init__(self, marker: bytes, rec_type: int, value=None,
                 span_start=0, span_end=0):
        self.marker = marker
        self.rec_type = rec_type
        self.value = value
        self.span_start = span_start
        self.span_end = span_end
        self.chunk = None

    @property
    def byte_span(self):
        return self.span_start, self.span_end

    @property
    def field_name(self) -> str | None:
        """The name of this record's marker in the marker tables, if any."""
        if name := game_data_names.get(self.marker):
            return name
        if name := actor_data_names.get(self.marker):
            return name
        if (slot_dex := slot_header_index.get(self.marker)) is not None:
            return f'SLOT_HEADER_{slot_dex}'
        return None

    @property
    def is_opaque(self):
        return isinstance(self.value, Opaque)

    def __repr__(self):
        return f'<SaveRecord [{sig_to_str(self.marker)}:0x' \
               f'{self.rec_type:X}] {self.value!r} @{self.span_start}>'

def simplify(parsed):
    """Strip SaveRecords (and containers of them) down to their plain
    values - handy for dumping a parse result as json and for tests."""
    if isinstance(parsed, SaveRecord):
        return simplify(parsed.value)
    if isinstance(parsed, dict):
        return {k: simplify(v) for k, v in parsed.items()}
    if isinstance(parsed, (list, tuple)):
        return [simplify(v) for v in parsed]
    if isinstance(parsed, Opaque):
        return parsed.value
    return parsed

_int_unpacker = structs_cache['<I'].unpack

def parse_record(ins: SaveReader) -> SaveRecord:
    """Parse the record starting at the cursor and move past it."""
    start_pos = ins.pos
    marker, rec_type = ins.unpack(structs_cache['<4sI'].unpack, 8,
                                  'REC_HEADER')
    record = SaveRecord(marker, rec_type, span_start=start_pos)
    if _int_unpacker(marker)[0] < 256 or rec_type == 0:
        # Filler, nothing to read
        record.value = Opaque.SKIP
    elif marker == END_OF_DATA:
        # Not sure what comes after this, just stop processing here
        record.value = Opaque.END_OF_DATA
        ins.seek(ins.size)
    elif rec_type == COMPRESSED_BLOB or ins.buf[
            start_pos + 4:start_pos + 6] == ZLIB_HEADER:
        # Compressed data, skip past the end of the deflate stream for now
        record.value = Opaque.COMPRESSED
        ins.seek(ins.find(COMPRESSED_DATA_END, marker) + 4)
    else:
        record.value = _read_payload(ins, record)
    record.span_end = ins.pos
    return record

def _read_payload(ins, record):
    rec_type = record.rec_type
    if rec_type == BOOLEAN:
        return read_boolean(ins)
    # ARRAY_START is an array, but we only care about its length, which
    # looks like a normal integer
    if rec_type in (INTEGER, ARRAY_START):
        return read_int(ins)
    if rec_type in STRING_TYPES:
        return read_string(ins)
    if rec_type == UTF_STRING:
        return read_utf_string(ins)
    if rec_type == ARRAY:
        return read_array(ins)
    if rec_type == 0x15:
        return skip_type_15(ins)
    if rec_type in opaque_skips:
        return skip_opaque(ins, rec_type)
    raise UnknownTypeError(ins.inName, record.marker, rec_type,
                           record.span_start + 8)

def read_array(ins: SaveReader) -> list[dict[str, SaveRecord]]:
    """Array of elements, each a nested record stream that ends with a
    narrow string reading '1'. Only game data fields are kept per element,
    everything else is parsed just to stay aligned."""
    ins.skip(8, 'ARRAY')
    array_len = ins.unpack_int('ARRAY')
    elements = []
    for element_dex in range(array_len):
        if (got_byte := ins.peek(1, 'ARRAY')[0]) != ARRAY_ELEMENT_MARKER:
            raise MalformedArrayError(ins.inName, ins.pos, element_dex,
                                      got_byte)
        ins.skip(16, 'ARRAY')
        cur_element = {}
        while True:
            if ins.advance() is None:
                raise SaveReadError(ins.inName, f'ARRAY.{element_dex}',
                                    ins.pos + 8, ins.size)
            nested = parse_record(ins)
            if field_name := game_data_names.get(nested.marker):
                cur_element[field_name] = nested
            if nested.value == ARRAY_ELEMENT_END:
                break
        elements.append(cur_element)
    return elements
