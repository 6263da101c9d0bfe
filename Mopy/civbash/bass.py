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
"""This module just stores some data that all modules have to be able to access
without worrying about circular imports. Currently used to expose the parsed
ini settings and the application version."""

# no imports

AppVersion = '0.1.0'

#--Global dictionaries - do _not_ reassign !
# settings read from the civbash.ini file in initialization.init_options()
inisettings = {}

# Defaults for inisettings - keys in the ini carry a type prefix:
# 's' for strings, 'b' for booleans, 'i' for ints
inisettings_defaults = {
    'BackupSaves': True,
    'BackupExt': '.bak',
    'BodyDumpExt': '.bin',
    'DebugParse': False,
    'NarrowStringEncoding': 'utf-8',
}

def get_ini_setting(option_key):
    """Return the ini setting for option_key, falling back to its default
    if the ini was never read."""
    try:
        return inisettings[option_key]
    except KeyError:
        return inisettings_defaults[option_key]
