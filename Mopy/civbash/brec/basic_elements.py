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
"""Type codec for save records: readers that decode the payload following a
marker and type tag, and the writers for the few types we know how to
serialize again. Readers expect the cursor to sit just past the 8 byte
marker + type header and leave it just past the payload."""
from .save_io import SaveReader
from .utils_constants import ARRAY_START, INTEGER, Opaque, STRING, \
    STRING_SUB_HEADER, TYPE_15_LONG_SENTINEL, UTF_STRING_SUB_HEADER, \
    opaque_skips
from .. import bass
from ..bolt import decoder, encode_narrow, struct_error, structs_cache
from ..exception import ArgumentError, MalformedStringError, \
    UnsupportedWriteError

__all__ = ['read_boolean', 'read_int', 'read_string', 'read_utf_string',
           'skip_opaque', 'skip_type_15', 'dump_int', 'dump_array_len',
           'dump_string', 'dump_value', 'STRING_TYPES']

# Both 4 and 5 hold narrow strings
STRING_TYPES = frozenset({4, STRING})

_null8 = b'\x00' * 8
# Reserved bytes of freshly written array lengths, copied from real saves
_array_len_reserved = bytes([0, 0, 0, 5, 0, 0, 0, 0])
_pack_int = structs_cache['<I'].pack
_pack_short = structs_cache['<H'].pack
# The length field counts the null terminator too
_max_str_len = 0xFFFF

# Readers ---------------------------------------------------------------------
def read_boolean(ins: SaveReader) -> bool:
    """8 reserved bytes, then a flag byte padded to 4 bytes."""
    ins.skip(8, 'BOOLEAN')
    flag_byte = ins.read(4, 'BOOLEAN')[0]
    return bool(flag_byte)

def read_int(ins: SaveReader) -> int:
    """8 reserved bytes, then an uint32. Array lengths look the same."""
    ins.skip(8, 'INTEGER')
    return ins.unpack_int('INTEGER')

def read_string(ins: SaveReader, encoding=None):
    """Narrow string. The length is stored in (at most) 3 bytes, the 4th
    byte of that field doubles as the start of a 6 byte sub-header whose
    second byte tells us the kind of string. We only understand kind 0x21,
    and even then we trust the null terminator rather than the length."""
    at_pos = ins.pos
    str_len = int.from_bytes(ins.peek(3, 'STRING'), 'little')
    ins.skip(2, 'STRING')
    sub_header = ins.peek(6, 'STRING')
    if sub_header[1] in (0x00, 0x20):
        ins.skip(10, 'STRING')
        return Opaque.UNKNOWN_STRING
    if sub_header[1] != 0x21:
        raise MalformedStringError(ins.inName, at_pos, sub_header)
    ins.skip(6, 'STRING')
    null_pos = ins.find(b'\x00', 'STRING')
    str_bytes = bytes(ins.buf[ins.pos:null_pos])
    ins.skip(str_len, 'STRING')
    encoding = encoding or bass.get_ini_setting('NarrowStringEncoding')
    try:
        return decoder(str_bytes, encoding)
    except UnicodeError:
        # undecodable bytes become U+FFFD
        return str_bytes.decode(encoding or 'utf-8', errors='replace')

def read_utf_string(ins: SaveReader) -> str:
    """Wide string - an uint16 count of UTF-16 code units, a fixed sub-header,
    then the text including a null code unit."""
    at_pos = ins.pos
    str_len = ins.unpack_short('UTF_STRING') * 2
    sub_header = ins.read(6, 'UTF_STRING')
    if sub_header != UTF_STRING_SUB_HEADER:
        raise MalformedStringError(ins.inName, at_pos, sub_header)
    # Ignore null terminator
    str_bytes = ins.peek(max(str_len - 2, 0), 'UTF_STRING')
    ins.skip(str_len, 'UTF_STRING')
    return str_bytes.decode('utf-16-le')

def skip_opaque(ins: SaveReader, rec_type: int) -> Opaque:
    """Skip a type we know the size but not the meaning of."""
    ins.skip(opaque_skips[rec_type], f'0x{rec_type:X}')
    return Opaque.UNKNOWN

def skip_type_15(ins: SaveReader) -> Opaque:
    if ins.peek(4, '0x15') == TYPE_15_LONG_SENTINEL:
        ins.skip(20, '0x15')
    else:
        ins.skip(12, '0x15')
    return Opaque.UNKNOWN

# Writers ---------------------------------------------------------------------
def _reserved_from(template, default_reserved):
    """The 8 reserved bytes of an existing int-like record, so that writing
    back an unchanged value reproduces the original bytes."""
    if template is not None and len(template) == 20:
        return bytes(template[8:16])
    return default_reserved

def _pack_value(rec_type, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedWriteError(rec_type,
            f'Type 0x{rec_type:X} needs an int, got {value!r}')
    try:
        return _pack_int(value)
    except struct_error as e:
        raise ArgumentError(f'{value} does not fit in an uint32') from e

def dump_int(marker: bytes, value: int, template=None) -> bytes:
    return b''.join((marker, _pack_int(INTEGER),
                     _reserved_from(template, _null8),
                     _pack_value(INTEGER, value)))

def dump_array_len(marker: bytes, value: int, template=None) -> bytes:
    return b''.join((marker, _pack_int(ARRAY_START),
                     _reserved_from(template, _array_len_reserved),
                     _pack_value(ARRAY_START, value)))

def dump_string(marker: bytes, value: str, template=None) -> bytes:
    """Write a narrow string of the 0x21 kind. Characters that don't fit in
    ASCII are transliterated or replaced."""
    if not isinstance(value, (str, bytes)):
        raise UnsupportedWriteError(STRING,
            f'Type 0x{STRING:X} needs a string, got {value!r}')
    safe_value = encode_narrow(value)
    if len(safe_value) >= _max_str_len:
        raise ArgumentError(f'String of {len(safe_value)} bytes is too long, '
                            f'at most {_max_str_len - 1} fit')
    return b''.join((marker, _pack_int(STRING),
                     _pack_short(len(safe_value) + 1), STRING_SUB_HEADER,
                     safe_value, b'\x00'))

_writers = {
    INTEGER: dump_int,
    ARRAY_START: dump_array_len,
    STRING: dump_string,
}

def dump_value(marker: bytes, rec_type: int, value, template=None) -> bytes:
    """Serialize a (marker, type, value) triple. Only integers, array lengths
    and narrow strings can be written, anything else raises an
    UnsupportedWriteError."""
    try:
        writer = _writers[rec_type]
    except KeyError:
        raise UnsupportedWriteError(rec_type) from None
    return writer(marker, value, template)
