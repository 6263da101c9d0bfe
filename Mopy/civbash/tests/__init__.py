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
"""Builders for synthetic save data. We can't ship real saves, so every test
assembles the bytes it needs from these."""
import random
import string

from ..bolt import structs_cache
from ..bosh import compress
from ..brec import ACTOR_DATA, ARRAY, BOOLEAN, FULL_CIV, GAME_DATA, INTEGER, \
    MONEY_MARKERS, SAVE_MAGIC, SLOT_HEADERS, STRING, STRING_SUB_HEADER, \
    UTF_STRING, UTF_STRING_SUB_HEADER, opaque_skips

_pack_int = structs_cache['<I'].pack
_pack_short = structs_cache['<H'].pack

# Not in any of the marker tables
TEST_MARKER = bytes([0x11, 0x22, 0x33, 0x44])
ELEMENT_END_MARKER = bytes([0xAA, 0xBB, 0xCC, 0xDD])

# Records ---------------------------------------------------------------------
def int_record(marker, value, rec_type=INTEGER, reserved=b'\x00' * 8):
    return marker + _pack_int(rec_type) + reserved + _pack_int(value)

def bool_record(marker, flag):
    return marker + _pack_int(BOOLEAN) + b'\x00' * 8 + bytes([flag, 0, 0, 0])

def string_record(marker, text, rec_type=STRING):
    """Narrow string of the kind the game writes (and we write back)."""
    if isinstance(text, str):
        text = text.encode('ascii')
    return b''.join((marker, _pack_int(rec_type), _pack_short(len(text) + 1),
                     STRING_SUB_HEADER, text, b'\x00'))

def utf_string_record(marker, text):
    return b''.join((marker, _pack_int(UTF_STRING), _pack_short(len(text) + 1),
                     UTF_STRING_SUB_HEADER, text.encode('utf-16-le'),
                     b'\x00\x00'))

def opaque_record(marker, rec_type):
    return marker + _pack_int(rec_type) + b'\x00' * opaque_skips[rec_type]

def array_record(marker, *elements):
    """Each element is the bytes of its nested records - the closing '1'
    string is added here."""
    out = [marker, _pack_int(ARRAY), b'\x00' * 8, _pack_int(len(elements))]
    for element in elements:
        out.append(b'\x0A' + b'\x00' * 15)
        out.append(element)
        out.append(string_record(ELEMENT_END_MARKER, '1'))
    return b''.join(out)

def civ_records(slot, civ_name, player_name='Player', ai_human=3,
                actor_type=FULL_CIV, password=None):
    """The records of one player slot, closed by its description."""
    out = [int_record(SLOT_HEADERS[slot], 1),
           string_record(ACTOR_DATA['ACTOR_NAME'], f'CIVILIZATION_{civ_name}'),
           string_record(ACTOR_DATA['LEADER_NAME'], f'LEADER_{civ_name}'),
           string_record(ACTOR_DATA['ACTOR_TYPE'], actor_type),
           string_record(ACTOR_DATA['PLAYER_NAME'], player_name)]
    if password is not None:
        out.append(string_record(ACTOR_DATA['PLAYER_PASSWORD'], password))
    out.append(int_record(ACTOR_DATA['ACTOR_AI_HUMAN'], ai_human))
    out.append(string_record(ACTOR_DATA['ACTOR_DESCRIPTION'],
                             f'LOC_{civ_name}_DESCRIPTION'))
    return b''.join(out)

# Bodies and saves ------------------------------------------------------------
def money_body(*amounts, lead=b'\x07' * 10):
    """A decompressed body holding one money signature per amount."""
    parts = [lead]
    for amount in amounts:
        signature = bytearray(64)
        signature[0:4] = MONEY_MARKERS[0]
        signature[8:12] = MONEY_MARKERS[1]
        signature[16:20] = MONEY_MARKERS[2]
        signature[44:48] = _pack_int(amount * 256)
        parts.append(bytes(signature))
    return bytearray(b''.join(parts))

def letters(size, seed=4000):
    """Deterministic, not too compressible data."""
    rng = random.Random(seed)
    return ''.join(rng.choices(string.ascii_letters, k=size)).encode('ascii')

def build_save(*records, body=None, footer=b'', prefix=b'\x00' * 12,
               game_speed='GAMESPEED_STANDARD'):
    """A whole save file: magic, a header we don't parse, the game speed
    record all parsing starts at, the given records and optionally a
    compressed section plus footer."""
    out = [SAVE_MAGIC, prefix,
           string_record(GAME_DATA['GAME_SPEED'], game_speed)]
    out.extend(records)
    if body is not None:
        out.append(compress(body))
        out.append(footer)
    return b''.join(out)

def three_civ_save(**kwargs):
    """Three civs plus a city state, slots deliberately out of order."""
    return build_save(
        int_record(GAME_DATA['GAME_TURN'], 42),
        string_record(GAME_DATA['MAP_FILE'], 'Continents.lua'),
        civ_records(2, 'FRANCE', 'Player Two'),
        civ_records(0, 'RUSSIA', 'Player Zero'),
        civ_records(5, 'CITY_STATE_GENEVA', actor_type='CIVILIZATION_LEVEL_'
                                                       'CITY_STATE'),
        civ_records(1, 'EGYPT', 'Player One', ai_human=1),
        body=money_body(10, 20, 30), footer=b'\x00\x00\x00\x00FOOTER',
        **kwargs)
