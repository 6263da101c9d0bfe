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
"""The chunk ledger: a save buffer split into an ordered list of immutable
byte chunks, one per parsed record plus the raw bytes around them. Edits
swap, insert or drop whole chunks, so no edit ever has to re-parse or shift
the bytes of any other record."""
from .basic_elements import dump_value
from .record_structs import SaveRecord
from ..bolt import decoder, encode_narrow
from ..exception import ArgumentError

__all__ = ['Chunk', 'ChunkLedger', 'modify_chunk', 'add_chunk',
           'delete_chunk', 'reassemble']

class Chunk(object):
    """A span of bytes, either raw (owner is None) or holding the bytes of
    the record owning it. Never mutated - edits replace the whole chunk."""
    __slots__ = ('data', 'owner')

    def __init__(self, data: bytes, owner: SaveRecord | None = None):
        self.data = bytes(data)
        self.owner = owner

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        owned = f'owner={self.owner!r}' if self.owner else 'raw'
        return f'<Chunk {len(self.data)} bytes, {owned}>'

def _as_written(value):
    """The value a re-parse of freshly written bytes would yield - narrow
    strings lose their diacritics when written."""
    if isinstance(value, (str, bytes)):
        return decoder(encode_narrow(value), 'ascii')
    return value

class ChunkLedger(object):
    """Ordered chunks whose concatenation is the (edited) buffer."""
    __slots__ = ('_chunks',)

    def __init__(self):
        self._chunks: list[Chunk] = []

    # Building ----------------------------------------------------------------
    def append_raw(self, data: bytes) -> Chunk:
        """Add raw bytes (not owned by any record) at the end."""
        new_chunk = Chunk(data)
        self._chunks.append(new_chunk)
        return new_chunk

    def append_record(self, record: SaveRecord, data: bytes) -> Chunk:
        """Add the bytes of a freshly parsed record at the end and make the
        record own them."""
        new_chunk = record.chunk = Chunk(data, record)
        self._chunks.append(new_chunk)
        return new_chunk

    # Lookup ------------------------------------------------------------------
    def index_of(self, record: SaveRecord) -> int:
        """Index of the chunk owned by record."""
        rec_chunk = record.chunk
        if rec_chunk is not None:
            for chunk_dex, chunk in enumerate(self._chunks):
                if chunk is rec_chunk:
                    return chunk_dex
        raise ArgumentError(f'{record!r} does not own a chunk in this '
                            f'ledger')

    def __len__(self):
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)

    def __getitem__(self, chunk_dex):
        return self._chunks[chunk_dex]

    # Editing -----------------------------------------------------------------
    def modify(self, record: SaveRecord, new_value):
        """Re-serialize record with new_value and swap in its chunk."""
        chunk_dex = self.index_of(record)
        # serialize first - on errors the ledger stays untouched
        new_data = dump_value(record.marker, record.rec_type, new_value,
                              template=record.chunk.data)
        self._chunks[chunk_dex] = record.chunk = Chunk(new_data, record)
        record.value = _as_written(new_value)

    def insert_after(self, after_record: SaveRecord, marker: bytes,
                     rec_type: int, value) -> SaveRecord:
        """Serialize a new record and put its chunk right after the chunk of
        after_record. Returns the new record, which can be edited further."""
        chunk_dex = self.index_of(after_record)
        new_data = dump_value(marker, rec_type, value)
        new_record = SaveRecord(marker, rec_type, _as_written(value))
        new_record.chunk = Chunk(new_data, new_record)
        self._chunks.insert(chunk_dex + 1, new_record.chunk)
        return new_record

    def delete(self, record: SaveRecord):
        """Drop the chunk owned by record."""
        del self._chunks[self.index_of(record)]
        record.chunk = None

    def replace_tail(self, data: bytes) -> Chunk:
        """Replace the last chunk with raw data - used to swap in a rebuilt
        compressed section."""
        if not self._chunks:
            raise ArgumentError('Cannot replace the tail of an empty ledger')
        tail_chunk = self._chunks[-1] = Chunk(data)
        return tail_chunk

    def reassemble(self) -> bytes:
        """The buffer with all edits applied."""
        return b''.join([c.data for c in self._chunks])

    def __repr__(self):
        return f'<ChunkLedger: {len(self._chunks)} chunks>'

# Functional API, mirrors the operations exposed to collaborators
def modify_chunk(ledger: ChunkLedger, record: SaveRecord, new_value):
    ledger.modify(record, new_value)

def add_chunk(ledger: ChunkLedger, after: SaveRecord, marker: bytes,
              rec_type: int, value) -> SaveRecord:
    return ledger.insert_after(after, marker, rec_type, value)

def delete_chunk(ledger: ChunkLedger, record: SaveRecord):
    ledger.delete(record)

def reassemble(ledger: ChunkLedger) -> bytes:
    return ledger.reassemble()
