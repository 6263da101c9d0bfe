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
"""Encapsulates Civ Bash's temporary file handling.

Generally, you want to use TempFile in a context handler. That way you
guarantee that the temporary file will get cleaned up, no matter how
complicated your flow of logic might get or even if an exception occurs.

If worst comes to worst, the atexit hook registered by bash.main should clean
up all leftover temp files when Civ Bash exits."""
import os
import shutil
import tempfile
from pathlib import Path as PPath

# *No other local imports!* This needs to be imported all over the place

# Internals -------------------------------------------------------------------
# The global temp folder we will be using, created on first use
_civtemp_dir: PPath | None = None
# Files in the global directory (or in a base_dir passed in by the caller)
# that we created and hence are safe to clean up by us as well
_our_temp_files: set[PPath] = set()

def _get_global_dir() -> PPath:
    """Get a base directory to use for generating unique temp files in."""
    global _civtemp_dir
    if _civtemp_dir is None:
        _civtemp_dir = PPath(tempfile.mkdtemp(prefix='CivBash_'))
    return _civtemp_dir

# API - Temporary Files -------------------------------------------------------
def new_temp_file(*, temp_prefix='', temp_suffix='.dat', base_dir='') -> str:
    """Create a new, unique, temporary file. The caller is responsible for
    cleaning it up via cleanup_temp_file once done.

    Use only when absolutely needed, TempFile is almost always a better
    choice."""
    ntf_fd, ntf = tempfile.mkstemp(dir=base_dir or _get_global_dir(),
        prefix=f'{temp_prefix}_' if temp_prefix else '', suffix=temp_suffix)
    _our_temp_files.add(PPath(ntf))
    os.close(ntf_fd)
    return ntf

def cleanup_temp_file(temp_file: str | os.PathLike) -> None:
    """Clean up a temporary file created via new_temp_file. Will raise an error
    if called on a file that wasn't created via new_temp_file or if it is
    called twice on the same file."""
    fixed_path = PPath(temp_file)
    try:
        _our_temp_files.remove(fixed_path)
    except KeyError:
        # 'from None' to drop the unhelpful KeyError traceback
        raise RuntimeError(
            f"Refusing to delete file that wasn't created by new_temp_file "
            f"or was already cleaned up (offending path: {temp_file})"
        ) from None
    try:
        os.remove(fixed_path)
    except FileNotFoundError:
        pass # Already cleaned up (e.g. by moving it somewhere else)

class TempFile:
    """Convenient and error-resistant way to create and clean up a unique
    temporary file with a context handler."""
    def __init__(self, *, temp_prefix='', temp_suffix='.dat', base_dir=''):
        self._temp_prefix = temp_prefix
        self._temp_suffix = temp_suffix
        self._base_dir = base_dir

    def __enter__(self):
        self._temp_file = new_temp_file(temp_prefix=self._temp_prefix,
            temp_suffix=self._temp_suffix, base_dir=self._base_dir)
        return self._temp_file

    def __exit__(self, exc_type, exc_val, exc_tb):
        cleanup_temp_file(self._temp_file)

# API - Misc ------------------------------------------------------------------
def cleanup_temp():
    """Remove all temp files and the global temp directory created by this
    instance of Civ Bash. To be called by an atexit hook."""
    global _civtemp_dir
    for otf in _our_temp_files:
        try:
            os.remove(otf)
        except FileNotFoundError:
            pass
    _our_temp_files.clear()
    if _civtemp_dir is not None:
        shutil.rmtree(_civtemp_dir, ignore_errors=True)
        _civtemp_dir = None
