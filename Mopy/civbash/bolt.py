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
"""Low level helpers used all over Civ Bash: struct wrappers, text
encoding/decoding heuristics and debug printing."""

import io
import os
import struct
import sys
import traceback as _traceback
import unicodedata

try:
    import chardet
except ImportError:
    chardet = None # We will raise an error on boot in bash._import_deps

# structure aliases
struct_error = struct.error

# Unicode ---------------------------------------------------------------------
#--decode unicode strings
#  Narrow strings in saves are usually plain ASCII, but hand edited saves (and
#  some localized leader names) carry other single or multi byte encodings
encodingOrder = (
    u'ascii',    # Plain old ASCII (0-127)
    u'utf8',
    u'cp1252',   # English (extended ASCII)
    u'gbk',      # GBK (simplified Chinese + some)
    u'cp932',    # Japanese
    u'cp949',    # Korean
    u'UTF-16LE',
)

_encodingSwap = {
    # The encoding detector reports back some encodings that
    # are subsets of others.  Use the better encoding when
    # given the option
    # 'reported encoding':'actual encoding to use',
    u'GB2312': u'gbk',        # Simplified Chinese
    u'SHIFT_JIS': u'cp932',   # Japanese
    u'windows-1252': u'cp1252',
    u'windows-1251': u'cp1251',
    u'utf-8': u'utf8',
}

# Encodings that we can't use because Python doesn't even support them
_blocked_encodings = {u'EUC-TW'}

def getbestencoding(bitstream):
    """Tries to detect the encoding a bitstream was saved in.  Uses Mozilla's
       detection library to find the best match (heuristics)"""
    if not bitstream:
        # Default to UTF-8 if the stream we're given is empty and hence no
        # inference can be made (chardet returns None, which breaks when passed
        # to decode())
        return 'utf8', 1.0
    # If we're fed a really big stream, go through it 16 KB at a time so as to
    # not time out
    if len(bitstream) > 16384:
        bitstream_view = io.BytesIO(bitstream)
        result = result_sentinel = {
            'encoding': None,
            'confidence': 0.0,
            'language': None,
        }
        while block := bitstream_view.read(16384):
            result = chardet.detect(block)
            if result != result_sentinel:
                break
    else:
        result = chardet.detect(bitstream)
    encoding_, confidence = result[u'encoding'], result[u'confidence']
    encoding_ = _encodingSwap.get(encoding_,encoding_)
    return encoding_, confidence

def decoder(byte_str, encoding=None, avoidEncodings=()) -> str:
    """Decode a byte string to unicode, using heuristics on encoding."""
    if isinstance(byte_str, str) or byte_str is None: return byte_str
    # Try the user specified encoding first
    if encoding:
        try: return str(byte_str, encoding)
        except UnicodeDecodeError: pass
    # Try to detect the encoding next
    encoding, confidence = getbestencoding(byte_str)
    if encoding and confidence >= 0.55 and (
            encoding not in avoidEncodings or confidence == 1.0) and (
            encoding not in _blocked_encodings):
        try: return str(byte_str, encoding)
        except UnicodeDecodeError: pass
    # If even that fails, fall back to the old method, trial and error
    for encoding in encodingOrder:
        try: return str(byte_str, encoding)
        except UnicodeDecodeError: pass
    raise UnicodeError('Text could not be decoded using any method')

def remove_diacritics(text_str: str) -> str:
    """Strip combining marks, so that e.g. 'Pedro II de Alcântara' becomes
    'Pedro II de Alcantara'."""
    normalized = unicodedata.normalize('NFKD', text_str)
    return ''.join(c for c in normalized if not unicodedata.combining(c))

def encode_narrow(text_str: str) -> bytes:
    """Encode text for a narrow (single byte) save string. Lossy: diacritics
    are removed and anything that still isn't ASCII becomes '?'."""
    if isinstance(text_str, bytes): return text_str
    return remove_diacritics(text_str).encode('ascii', errors='replace')

# Markers ---------------------------------------------------------------------
class SigToStr(dict):
    """Turn opaque 4 byte markers into printable strings - the known ones are
    registered with their names, everything else becomes a hex dump."""
    __slots__ = ()

    def __missing__(self, key):
        return self.setdefault(key, bytes(key).hex(' ').upper())

_sig_to_str = SigToStr()
sig_to_str = _sig_to_str.__getitem__

def register_sig_names(name_to_sig: dict[str, bytes]):
    """Make sig_to_str print the name of each of the specified markers."""
    for sig_name, sig in name_to_sig.items():
        _sig_to_str[sig] = f'{sig_name} ({sig.hex(" ").upper()})'

# Structure wrappers ----------------------------------------------------------
class _StructsCache(dict):
    __slots__ = ()
    def __missing__(self, key):
        return self.setdefault(key, struct.Struct(key))

structs_cache = _StructsCache()

# Debug printing --------------------------------------------------------------
# Constants used for censoring the user's home directory (see below)
_USER_DIR = os.path.expanduser('~')
_CENSORED_DIR = os.path.join(os.path.split(_USER_DIR)[0], '*****')

def deprint(*args, traceback=False, trace=True, frame=1):
    """Prints message along with file and line location.
       Available keyword arguments:
       trace: (default True) - if a Truthy value, displays the module,
              line number, and function this was used from
       traceback: (default False) - if a Truthy value, prints any tracebacks
              for exceptions that have occurred.
       frame: (default 1) - With `trace`, determines the function caller's
              frame for getting the function name
    """
    if trace:
        # Warning: This may be CPython-only due to _getframe usage
        parent_frame = sys._getframe(frame)
        code_obj = parent_frame.f_code
        msg = f'{os.path.basename(code_obj.co_filename)} ' \
              f'{parent_frame.f_lineno:4d} {code_obj.co_name}: '
    else:
        msg = u''
    try:
        msg += ' '.join([f'{x}' for x in args]) # OK, even with unicode args
    except UnicodeError:
        # If the args failed to convert to unicode for some reason
        # we still want the message displayed any way we can
        for x in args:
            try:
                msg += f' {x}'
            except UnicodeError:
                msg += f' {x!r}'
    # Print to stdout by default, but change to stderr if we have an error
    target_stream = sys.stdout
    if traceback:
        target_stream = sys.stderr
        exc_fmt = _traceback.format_exc()
        msg += f'\n{exc_fmt}'
    # Censor the user's home directory, save paths live under it
    msg = msg.replace(_USER_DIR, _CENSORED_DIR)
    print(msg, flush=True, file=target_stream)
