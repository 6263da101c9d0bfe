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
"""Reading and writing player gold straight out of the decompressed body of a
save. Nothing here goes through the record model: each player's treasury
sits behind a three part signature (MONEY_MARKERS at +0, +8 and +16), the
value itself being an uint32 at +44, stored times 256. Both numbers were
found by trial and error and are only known to hold for the saves we have
seen."""
from ..bolt import struct_error, structs_cache
from ..brec import MONEY_MARKERS
from ..exception import ArgumentError, SaveReadError

__all__ = ['find_money_pos', 'count_money_slots', 'read_money_raw',
           'read_money', 'write_money', 'MONEY_SCALE']

MONEY_SCALE = 256
_VALUE_OFFSET = 44

def _iter_money_positions(body):
    first, second, third = MONEY_MARKERS
    pos = body.find(first)
    while pos != -1:
        if (body[pos + 8:pos + 12] == second and
                body[pos + 16:pos + 20] == third):
            yield pos + _VALUE_OFFSET
        pos = body.find(first, pos + 1)

def find_money_pos(body, idx: int) -> int:
    """Offset of the money value of the idx-th (0-based) player, or -1 if
    there are not that many signatures in body."""
    for match_dex, money_pos in enumerate(_iter_money_positions(body)):
        if match_dex == idx:
            return money_pos
    return -1

def count_money_slots(body) -> int:
    return sum(1 for _pos in _iter_money_positions(body))

def read_money_raw(body, idx: int,
                   __unpack=structs_cache['<I'].unpack_from) -> int:
    """The stored (scaled) value, 0 if the signature is missing."""
    if (money_pos := find_money_pos(body, idx)) == -1:
        return 0
    try:
        return __unpack(body, money_pos)[0]
    except struct_error:
        raise SaveReadError(None, f'MONEY.{idx}', money_pos + 4,
                            len(body)) from None

def read_money(body, idx: int) -> int:
    """Gold of the idx-th player, 0 if the signature is missing."""
    return read_money_raw(body, idx) // MONEY_SCALE

def write_money(body: bytearray, idx: int, money: int,
                __pack=structs_cache['<I'].pack_into) -> bool:
    """Overwrite the 4 bytes holding the gold of the idx-th player in place.
    Returns False (and leaves body alone) if the signature is missing."""
    if (money_pos := find_money_pos(body, idx)) == -1:
        return False
    if money_pos + 4 > len(body):
        raise SaveReadError(None, f'MONEY.{idx}', money_pos + 4, len(body))
    try:
        __pack(body, money_pos, money * MONEY_SCALE)
    except struct_error as e:
        raise ArgumentError(f'Invalid amount of money: {money}') from e
    return True
