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
"""Houses the static tables of brec: markers, type tags and the placeholder
values recorded for data we skip without understanding it. Everything here
is read-only after import."""
from enum import Enum

from ..bolt import register_sig_names
# no local imports beyond bolt, imported everywhere in brec

__all__ = ['SAVE_MAGIC', 'START_ACTOR', 'ZLIB_HEADER', 'END_OF_DATA',
           'COMPRESSED_START', 'COMPRESSED_DATA_END', 'MONEY_MARKERS',
           'STRING_SUB_HEADER', 'UTF_STRING_SUB_HEADER',
           'TYPE_15_LONG_SENTINEL', 'GAME_DATA', 'ACTOR_DATA',
           'SLOT_HEADERS', 'game_data_names', 'actor_data_names',
           'slot_header_index', 'BOOLEAN', 'INTEGER', 'STRING',
           'UTF_STRING', 'ARRAY_START', 'ARRAY', 'COMPRESSED_BLOB',
           'FULL_CIV', 'ARRAY_ELEMENT_MARKER', 'ARRAY_ELEMENT_END',
           'Opaque', 'opaque_skips']

# Control markers -------------------------------------------------------------
SAVE_MAGIC = b'CIV6'
START_ACTOR = bytes([0x58, 0xBA, 0x7F, 0x4C])
ZLIB_HEADER = bytes([0x78, 0x9C])
# Shows up at the end of Outback Tycoon saves, nothing after it is parsed
END_OF_DATA = bytes([0x01, 0xDB, 0x89, 0x32])
# Starts the compressed section and separates its 64KiB blocks
COMPRESSED_START = bytes([0x00, 0x00, 0x01, 0x00])
# Ends a sync-flushed deflate stream
COMPRESSED_DATA_END = bytes([0x00, 0x00, 0xFF, 0xFF])
MONEY_MARKERS = (
    bytes([0x21, 0xC9, 0xAF, 0x2F]),
    bytes([0x57, 0x73, 0x4A, 0x5A]),
    bytes([0xB7, 0xEA, 0xA0, 0xF1]),
)

# Sub-headers written after the length field of strings
STRING_SUB_HEADER = bytes([0x00, 0x21, 0x01, 0x00, 0x00, 0x00])
UTF_STRING_SUB_HEADER = bytes([0x00, 0x21, 0x02, 0x00, 0x00, 0x00])
# Type 0x15 payloads starting with this are 20 bytes long instead of 12
TYPE_15_LONG_SENTINEL = bytes([0x00, 0x00, 0x00, 0x80])

# Field markers ---------------------------------------------------------------
GAME_DATA = {
    'GAME_TURN': bytes([0x9D, 0x2C, 0xE6, 0xBD]),
    'GAME_SPEED': bytes([0x99, 0xB0, 0xD9, 0x05]),
    'MOD_BLOCK_1': bytes([0x5C, 0xAE, 0x27, 0x84]),
    'MOD_BLOCK_2': bytes([0xC8, 0xD1, 0x8C, 0x1B]),
    'MOD_BLOCK_3': bytes([0x44, 0x7F, 0xD4, 0xFE]),
    'MOD_ID': bytes([0x54, 0x5F, 0xC4, 0x04]),
    'MOD_TITLE': bytes([0x72, 0xE1, 0x34, 0x30]),
    'MAP_FILE': bytes([0x5A, 0x87, 0xD8, 0x63]),
    'MAP_SIZE': bytes([0x40, 0x5C, 0x83, 0x0B]),
}

ACTOR_DATA = {
    'ACTOR_NAME': bytes([0x2F, 0x5C, 0x5E, 0x9D]),
    'LEADER_NAME': bytes([0x5F, 0x5E, 0xCD, 0xE8]),
    'ACTOR_TYPE': bytes([0xBE, 0xAB, 0x55, 0xCA]),
    'PLAYER_NAME': bytes([0xFD, 0x6B, 0xB9, 0xDA]),
    'PLAYER_PASSWORD': bytes([0x6C, 0xD1, 0x7C, 0x6E]),
    'PLAYER_ALIVE': bytes([0xA6, 0xDF, 0xA7, 0x62]),
    'IS_CURRENT_TURN': bytes([0xCB, 0x21, 0xB0, 0x7A]),
    'ACTOR_AI_HUMAN': bytes([0x95, 0xB9, 0x42, 0xCE]), # 3 = Human, 1 = AI
    'ACTOR_DESCRIPTION': bytes([0x65, 0x19, 0x9B, 0xFF]),
}

# Player slots, in slot order
SLOT_HEADERS = (
    bytes([0xC8, 0x9B, 0x5F, 0x65]),
    bytes([0x5E, 0xAB, 0x58, 0x12]),
    bytes([0xE4, 0xFA, 0x51, 0x8B]),
    bytes([0x72, 0xCA, 0x56, 0xFC]),
    bytes([0xD1, 0x5F, 0x32, 0x62]),
    bytes([0x47, 0x6F, 0x35, 0x15]),
    bytes([0xFD, 0x3E, 0x3C, 0x8C]),
    bytes([0x6B, 0x0E, 0x3B, 0xFB]),
    bytes([0xFA, 0x13, 0x84, 0x6B]),
    bytes([0x6C, 0x23, 0x83, 0x1C]),
    bytes([0xF4, 0x14, 0x18, 0xAA]),
    bytes([0x62, 0x24, 0x1F, 0xDD]),
)

# Reverse lookups - marker -> field name / slot index
game_data_names = {v: k for k, v in GAME_DATA.items()}
actor_data_names = {v: k for k, v in ACTOR_DATA.items()}
slot_header_index = {v: i for i, v in enumerate(SLOT_HEADERS)}

register_sig_names(GAME_DATA)
register_sig_names(ACTOR_DATA)
register_sig_names({f'SLOT_HEADER_{i}': s for i, s in enumerate(SLOT_HEADERS)})
register_sig_names({'START_ACTOR': START_ACTOR, 'END_OF_DATA': END_OF_DATA,
                    'COMPRESSED_START': COMPRESSED_START})

# Type tags -------------------------------------------------------------------
BOOLEAN = 1
INTEGER = 2
STRING = 5
UTF_STRING = 6
ARRAY_START = 0x0A # only the array length, read like an INTEGER
ARRAY = 0x0B
COMPRESSED_BLOB = 0x18

# Types we can't interpret, but know the size of: tag -> bytes to skip after
# the marker and type tag. 0x15 is special cased in the parser
opaque_skips = {
    3: 12,
    0x0D: 16,
    0x14: 16,
}

# ACTOR_TYPE of actual players, as opposed to city states etc.
FULL_CIV = 'CIVILIZATION_LEVEL_FULL_CIV'
# First byte of every array element
ARRAY_ELEMENT_MARKER = 0x0A
# Value of the narrow string closing an array element
ARRAY_ELEMENT_END = '1'

class Opaque(Enum):
    """Placeholder values for records we skip without interpreting them."""
    SKIP = 'SKIP'
    UNKNOWN = 'UNKNOWN!'
    UNKNOWN_STRING = "Don't know what this kind of string is..."
    COMPRESSED = 'UNKNOWN COMPRESSED DATA'
    END_OF_DATA = 'UNKNOWN DATA AT END OF OUTBACK'

    def __repr__(self):
        return f'<{self.name}>'
