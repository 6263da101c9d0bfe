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
"""Houses the very low-level cursor used for reading bytes out of a save
buffer. Every other part of brec advances one of these."""

# no local imports beyond this, imported everywhere in brec
from ..bolt import structs_cache
from ..exception import SaveReadError

__all__ = ['SaveReader']

class SaveReader(object):
    """Read cursor over an in memory save buffer. The buffer itself is never
    modified - edits go through the chunk ledger.

    pos is the absolute read position, next4 the 4 byte marker candidate at
    that position (refreshed by advance)."""
    __slots__ = ('inName', 'buf', 'size', 'pos', 'next4')

    def __init__(self, buf, inName=None, pos=0):
        self.inName = inName
        self.buf = buf
        self.size = len(buf)
        self.pos = pos
        self.next4 = bytes(buf[pos:pos + 4])

    def advance(self):
        """Re-read the marker candidate at the current position. Returns it,
        or None if fewer than 4 bytes remain (end of stream)."""
        if self.size - self.pos < 4:
            return None
        self.next4 = bytes(self.buf[self.pos:self.pos + 4])
        return self.next4

    def scan_to(self, marker):
        """Step forward one byte at a time until next4 equals marker. Returns
        the position of the marker, or None (cursor left at the end) if it
        never shows up."""
        while self.advance() is not None:
            if self.next4 == marker:
                return self.pos
            self.pos += 1
        return None

    def remaining(self):
        return self.size - self.pos

    def atEnd(self):
        """Return True if current read position is at the end of the
        buffer."""
        return self.pos >= self.size

    #--Read/Unpack ----------------------------------------
    def _check(self, end_pos, *debug_strs):
        if end_pos > self.size:
            raise SaveReadError(self.inName, self._debug(debug_strs),
                                end_pos, self.size)

    def _debug(self, debug_strs):
        if not debug_strs:
            return self.next4
        if len(debug_strs) == 1: # may be a marker, exception code hexes it
            return debug_strs[0]
        return '.'.join(map(str, debug_strs))

    def seek(self, new_pos, *debug_strs):
        """Move to an absolute position - the end of the buffer is a valid
        position."""
        if new_pos < 0 or new_pos > self.size:
            raise SaveReadError(self.inName, self._debug(debug_strs),
                                new_pos, self.size)
        self.pos = new_pos

    def skip(self, size, *debug_strs):
        """Move forward size bytes."""
        self.seek(self.pos + size, *debug_strs)

    def peek(self, size, *debug_strs, offset=0) -> bytes:
        """Return size bytes at pos + offset without moving."""
        start_pos = self.pos + offset
        self._check(start_pos + size, *debug_strs)
        return bytes(self.buf[start_pos:start_pos + size])

    def read(self, size, *debug_strs) -> bytes:
        """Read size bytes and move past them."""
        read_bytes = self.peek(size, *debug_strs)
        self.pos += size
        return read_bytes

    def unpack(self, struct_unpacker, size, *debug_strs):
        """Read size bytes and unpack according to format of
        struct_unpacker."""
        self._check(self.pos + size, *debug_strs)
        unpacked = struct_unpacker(self.buf[self.pos:self.pos + size])
        self.pos += size
        return unpacked

    def unpack_int(self, *debug_strs, __unpacker=structs_cache['<I'].unpack):
        return self.unpack(__unpacker, 4, *debug_strs)[0]

    def unpack_short(self, *debug_strs,
                     __unpacker=structs_cache['<H'].unpack):
        return self.unpack(__unpacker, 2, *debug_strs)[0]

    def find(self, pattern, *debug_strs) -> int:
        """Return the position of the next occurrence of pattern at or after
        pos. Raises a SaveReadError if there is none."""
        found_pos = self.buf.find(pattern, self.pos)
        if found_pos == -1:
            raise SaveReadError(self.inName, self._debug(debug_strs),
                                self.size + len(pattern), self.size)
        return found_pos

    def __repr__(self):
        return f'{type(self).__name__}({self.inName}, pos={self.pos})'
