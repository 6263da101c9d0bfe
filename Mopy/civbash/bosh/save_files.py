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
"""Civilization VI save files: parsing the whole file into records, actors
and chunks, and writing the edited result back out."""
from __future__ import annotations

import os
import shutil

from .actors import Actor, assemble_actors
from .money import count_money_slots, read_money, write_money
from .save_compression import compress, decompress
from .. import bass
from ..bolt import deprint
from ..brec import COMPRESSED_START, GAME_DATA, SAVE_MAGIC, ChunkLedger, \
    SaveReader, SaveRecord, parse_record, simplify
from ..civtemp import TempFile
from ..exception import FormatError, SaveFileError, StateError

__all__ = ['ParseResult', 'SaveFile', 'parse']

class ParseResult(object):
    """Everything parse() found in a save buffer.

    chunks covers the whole input buffer: the bytes before the first game
    data marker, one chunk per top level record, then the compressed section
    and footer as a single raw chunk (or whatever trailing bytes could not be
    parsed). body is the inflated compressed section, None if the buffer had
    none."""
    __slots__ = ('in_name', 'chunks', 'records', 'actors', 'civs', 'fields',
                 'header', 'footer', 'body')

    def __init__(self, in_name=None):
        self.in_name = in_name
        self.chunks = ChunkLedger()
        self.records: list[SaveRecord] = []
        self.actors: list[Actor] = []
        self.civs: list[Actor] = []
        self.fields: dict[str, SaveRecord] = {}
        self.header = b''
        self.footer = b''
        self.body: bytearray | None = None

    # Record edits ------------------------------------------------------------
    def modify(self, record: SaveRecord, new_value):
        self.chunks.modify(record, new_value)

    def add(self, after: SaveRecord, marker: bytes, rec_type: int,
            value) -> SaveRecord:
        new_record = self.chunks.insert_after(after, marker, rec_type, value)
        self.records.insert(self.records.index(after) + 1, new_record)
        return new_record

    def delete(self, record: SaveRecord):
        self.chunks.delete(record)
        self.records.remove(record)

    # Money -------------------------------------------------------------------
    def _check_body(self):
        if self.body is None:
            raise StateError(f'{self.in_name}: save has no compressed '
                             f'section')

    def money_slots(self) -> int:
        self._check_body()
        return count_money_slots(self.body)

    def read_money(self, player_dex: int) -> int:
        self._check_body()
        return read_money(self.body, player_dex)

    def write_money(self, player_dex: int, money: int) -> bool:
        self._check_body()
        return write_money(self.body, player_dex, money)

    # Output ------------------------------------------------------------------
    def civ_names(self) -> list[str]:
        return [c.display_name for c in self.civs]

    def simplify(self) -> dict:
        """Plain python view of the parsed fields, actors and civs."""
        simple = {k: simplify(v) for k, v in self.fields.items()}
        simple['ACTORS'] = simplify(self.actors)
        simple['CIVS'] = simplify(self.civs)
        return simple

    def rebuild(self) -> bytes:
        """The edited save file - the reassembled chunks, with the
        compressed section rebuilt from body if there is one."""
        if self.body is not None:
            self.chunks.replace_tail(compress(self.body) + self.footer)
        return self.chunks.reassemble()

    def __repr__(self):
        return f'<ParseResult {self.in_name}: {len(self.records)} records, ' \
               f'{len(self.civs)} civs, {len(self.actors)} other actors>'

def parse(buffer, in_name=None) -> ParseResult:
    """Parse a whole save file buffer."""
    ins = SaveReader(buffer, in_name)
    if ins.next4 != SAVE_MAGIC:
        raise FormatError(in_name, ins.next4, SAVE_MAGIC)
    result = ParseResult(in_name)
    ledger = result.chunks
    if ins.scan_to(GAME_DATA['GAME_SPEED']) is None:
        raise SaveFileError(in_name, 'No game data found')
    ledger.append_raw(buffer[:ins.pos])
    debug_parse = bass.get_ini_setting('DebugParse')
    # every record is at least a marker and a type tag
    while ins.advance() is not None and ins.remaining() >= 8:
        if ins.next4 == COMPRESSED_START:
            result.body, result.header, result.footer = decompress(
                buffer, ins.pos, in_name)
            deprint(f'{in_name}: compressed section at {ins.pos}, '
                    f'{len(result.body)} bytes inflated')
            break
        rec_start = ins.pos
        record = parse_record(ins)
        ledger.append_record(record, buffer[rec_start:ins.pos])
        result.records.append(record)
        if debug_parse:
            deprint(record)
    # Whatever we did not parse (compressed section and footer, the data
    # after END_OF_DATA or a few stray bytes) is kept as is
    if not ins.atEnd():
        ledger.append_raw(buffer[ins.pos:])
    result.actors, result.civs, result.fields = assemble_actors(
        result.records)
    return result

class SaveFile(object):
    """A save file on disk. Read once, edited in memory, written once."""

    def __init__(self, abs_path):
        self.abs_path = os.fspath(abs_path)
        self.parsed: ParseResult | None = None

    def read_save(self) -> ParseResult:
        try:
            with open(self.abs_path, 'rb') as ins:
                buffer = ins.read()
        except OSError as e:
            err_msg = f'Failed to read {self.abs_path}'
            deprint(err_msg, traceback=True)
            raise SaveFileError(self.abs_path, err_msg) from e
        self.parsed = parse(buffer, in_name=self.abs_path)
        return self.parsed

    def _check_read(self):
        if self.parsed is None:
            raise StateError(f'{self.abs_path} has not been read yet')

    def write_save(self, out_path=None):
        """Write the edited save to out_path (defaults to the path we read
        from), backing up whatever is there first if so configured."""
        self._check_read()
        out_path = os.fspath(out_path or self.abs_path)
        save_data = self.parsed.rebuild()
        if bass.get_ini_setting('BackupSaves') and os.path.exists(out_path):
            backup_path = out_path + bass.get_ini_setting('BackupExt')
            shutil.copy2(out_path, backup_path)
            deprint(f'Backed up {out_path} to {backup_path}')
        with TempFile(temp_prefix='civsave',
                      base_dir=os.path.dirname(os.path.abspath(out_path))
                      ) as tmp_path:
            with open(tmp_path, 'wb') as out:
                out.write(save_data)
            os.replace(tmp_path, out_path)
        deprint(f'{out_path} rewritten.')

    def dump_body(self, out_path=None) -> str:
        """Write the inflated compressed section next to the save (or to
        out_path) for inspection in a hex editor."""
        self._check_read()
        if self.parsed.body is None:
            raise StateError(f'{self.abs_path}: save has no compressed '
                             f'section')
        out_path = os.fspath(out_path or self.abs_path + bass.get_ini_setting(
            'BodyDumpExt'))
        with open(out_path, 'wb') as out:
            out.write(self.parsed.body)
        return out_path

    def __repr__(self):
        return f'{type(self).__name__}({self.abs_path})'
