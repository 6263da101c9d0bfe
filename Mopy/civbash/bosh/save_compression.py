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
"""The compressed section of a save: a zlib stream flushed with Z_SYNC_FLUSH
(so it ends in 00 00 FF FF and has no adler32 trailer), cut into 64KiB blocks
that are each preceded by the 00 00 01 00 marker."""
import zlib

from ..brec import COMPRESSED_DATA_END, COMPRESSED_START, ZLIB_HEADER
from ..exception import CompressionError

__all__ = ['compress', 'decompress', 'find_section_end', 'FRAME_BLOCK_SIZE']

FRAME_BLOCK_SIZE = 64 * 1024
_sep_len = len(COMPRESSED_START)
# Bytes of a previous block that may hold the start of a split end marker
_carry_len = len(COMPRESSED_DATA_END) - 1
_zlib_header_len = len(ZLIB_HEADER)
# BFINAL set, fixed Huffman codes, end of block
_final_empty_block = b'\x03\x00'

def compress(data) -> bytes:
    """Deflate data and frame it, adding the marker in front of every 64KiB
    block of compressed bytes."""
    try:
        compressor = zlib.compressobj()
        compressed = compressor.compress(bytes(data)) + compressor.flush(
            zlib.Z_SYNC_FLUSH)
    except zlib.error as e:
        raise CompressionError(None, f'Failed to compress save data: {e!r}')
    framed = [COMPRESSED_START]
    pos = 0
    while pos + FRAME_BLOCK_SIZE < len(compressed):
        framed.append(compressed[pos:pos + FRAME_BLOCK_SIZE])
        pos += FRAME_BLOCK_SIZE
        framed.append(COMPRESSED_START)
    framed.append(compressed[pos:])
    return b''.join(framed)

def _iter_end_markers(buffer, section_start):
    """Yield the offset just past every end marker candidate, skipping the
    separators so that a marker split in two by one is found as well."""
    pos = section_start + _sep_len
    carry = b''
    while pos < len(buffer):
        window = carry + bytes(buffer[pos:pos + FRAME_BLOCK_SIZE])
        found = window.find(COMPRESSED_DATA_END)
        while found != -1:
            yield pos + found + len(COMPRESSED_DATA_END) - len(carry)
            found = window.find(COMPRESSED_DATA_END, found + 1)
        carry = window[-_carry_len:]
        pos += FRAME_BLOCK_SIZE + _sep_len

def _deframe(framed):
    """Drop the separator after every block."""
    return b''.join([framed[p:p + FRAME_BLOCK_SIZE] for p in range(
        0, len(framed), FRAME_BLOCK_SIZE + _sep_len)])

def find_section_end(buffer, section_start, in_name=None) -> int:
    """Return the offset just past the end marker of the compressed section
    starting (with its start marker) at section_start.

    Incompressible data is deflated into stored blocks, which may contain the
    end marker bytes verbatim. A candidate only ends the section if the
    inflater sits on a block boundary there, which we check by appending an
    empty final block and seeing whether the stream ends. If the section does
    not inflate at all, the first candidate is returned and decompress gets
    to report the zlib error."""
    data_start = section_start + _sep_len
    compressed = _deframe(bytes(buffer[data_start:]))
    inflater = zlib.decompressobj(-zlib.MAX_WBITS)
    fed = _zlib_header_len
    first_end = None
    for marker_end in _iter_end_markers(buffer, section_start):
        if first_end is None:
            first_end = marker_end
        framed_len = marker_end - data_start
        comp_end = framed_len - _sep_len * (
                framed_len // (FRAME_BLOCK_SIZE + _sep_len))
        try:
            inflater.decompress(compressed[fed:comp_end])
        except zlib.error:
            break
        fed = comp_end
        trial = inflater.copy()
        try:
            trial.decompress(_final_empty_block)
        except zlib.error:
            continue
        if trial.eof:
            return marker_end
    if first_end is None:
        raise CompressionError(in_name, f'Compressed section at '
                                        f'{section_start} has no end marker')
    return first_end

def decompress(buffer, section_start=None, in_name=None):
    """Split buffer into header, compressed section and footer and inflate
    the section. Returns (body, header, footer) - body is a bytearray so the
    money locator can edit it in place.

    :param section_start: Offset of the start marker of the compressed
        section. If None, the first start marker followed by a zlib header is
        used."""
    if section_start is None:
        section_start = buffer.find(COMPRESSED_START + ZLIB_HEADER)
        if section_start == -1:
            raise CompressionError(in_name, 'No compressed section found')
    section_end = find_section_end(buffer, section_start, in_name)
    compressed = _deframe(buffer[section_start + _sep_len:section_end])
    try:
        body = zlib.decompressobj().decompress(compressed)
    except zlib.error as e:
        raise CompressionError(in_name, f'zlib error while decompressing '
                                        f'save data: {e!r}')
    return bytearray(body), bytes(buffer[:section_start]), bytes(
        buffer[section_end:])
