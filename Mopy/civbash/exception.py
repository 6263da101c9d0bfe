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
"""This module contains all custom exceptions for Civ Bash."""

# NO LOCAL IMPORTS! This has to be importable from any module/package.

class BoltError(Exception):
    """Generic error with a string message."""
    def __init__(self, message):
        self.message = message
    def __str__(self):
        return self.message

# Code errors -----------------------------------------------------------------
class ArgumentError(BoltError):
    """Coding Error: Argument out of allowed range of values."""
    def __init__(self, message=u'Argument is out of allowed ranged of values.'):
        super(ArgumentError, self).__init__(message)

class StateError(BoltError):
    """Error: Object is corrupted."""
    def __init__(self, message=u'Object is in a bad state.'):
        super(StateError, self).__init__(message)

# Edit errors -----------------------------------------------------------------
class UnsupportedWriteError(BoltError):
    """The record writer does not know how to serialize this type. Raised
    before the chunk ledger is touched, so the edit can simply be dropped."""
    def __init__(self, rec_type, message=None):
        message = message or f"Don't know how to write type " \
                             f"0x{rec_type:X}"
        super(UnsupportedWriteError, self).__init__(message)
        self.rec_type = rec_type

# File exceptions -------------------------------------------------------------
class FileError(BoltError):
    """An error that occurred while handling a file."""
    def __init__(self, in_name, message):
        super(FileError, self).__init__(message)
        self._in_name = (in_name and '%s' % in_name) or 'Unknown File'

    def __str__(self):
        return f'{self._in_name}: {self.message}'

class SaveFileError(FileError):
    """Save File Error: File is corrupted."""
    pass

class FormatError(SaveFileError):
    """The file does not start with the expected save magic."""
    def __init__(self, in_name, actual_magic, expected_magic):
        super(FormatError, self).__init__(in_name,
            f'Not a Civilization 6 save file: magic is {actual_magic!r} '
            f'(expected {expected_magic!r})')

def _hex_marker(debug_str):
    if isinstance(debug_str, (bytes, bytearray)):
        from .bolt import sig_to_str # don't mind this we are in exception code
        debug_str = sig_to_str(bytes(debug_str))
    return debug_str

class SaveReadError(SaveFileError):
    """Save File Error: Attempt to read outside of buffer."""
    def __init__(self, in_name, debug_str, try_pos, max_pos):
        debug_str = _hex_marker(debug_str)
        if try_pos < 0:
            message = f'{debug_str}: Attempted to read before ({try_pos}) ' \
                      f'beginning of file/buffer.'
        else:
            message = f'{debug_str}: Attempted to read past ({try_pos}) end ' \
                      f'({max_pos}) of file/buffer.'
        super(SaveReadError, self).__init__(in_name, message)

class UnknownTypeError(SaveFileError):
    """A type tag we can't size was found - everything after it would be
    misaligned, so the parse has to stop."""
    def __init__(self, in_name, marker, rec_type, at_pos):
        super(UnknownTypeError, self).__init__(in_name,
            f'Error parsing at position {at_pos}: unknown type 0x'
            f'{rec_type:X} for marker {_hex_marker(marker)}')
        self.rec_type = rec_type
        self.at_pos = at_pos

class MalformedStringError(SaveFileError):
    """A string's sub-header matches none of the known string kinds."""
    def __init__(self, in_name, at_pos, sub_header):
        super(MalformedStringError, self).__init__(in_name,
            f'Error reading string at position {at_pos}: unexpected '
            f'sub-header {bytes(sub_header).hex(" ")}')
        self.at_pos = at_pos

class MalformedArrayError(SaveFileError):
    """An array element does not start with the element marker byte."""
    def __init__(self, in_name, at_pos, element_index, got_byte):
        super(MalformedArrayError, self).__init__(in_name,
            f'Error reading array element {element_index} at position '
            f'{at_pos}: expected 0x0A, but got 0x{got_byte:02X}')
        self.at_pos = at_pos

class CompressionError(SaveFileError):
    """The compressed section could not be inflated or deflated."""
    pass
