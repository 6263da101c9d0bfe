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
"""Functions for initializing Civ Bash settings from the civbash.ini file."""
import os
from configparser import ConfigParser

from . import bass
from .bolt import deprint

# Ini keys carry a prefix telling us the type of their value
_type_key = {str: 's', bool: 'b', int: 'i'}

def get_civ_ini(civ_ini_path) -> ConfigParser | None:
    """Read the civbash.ini at civ_ini_path, None if there is no such
    file."""
    civ_ini_parser = None
    if civ_ini_path is not None and os.path.exists(civ_ini_path):
        civ_ini_parser = ConfigParser()
        # civbash.ini is always compatible with UTF-8
        civ_ini_parser.read(civ_ini_path, encoding='utf-8')
    return civ_ini_parser

def init_options(civ_ini: ConfigParser | None):
    """Reset bass.inisettings to the defaults, then override them with the
    values from civ_ini (if any)."""
    bass.inisettings.clear()
    bass.inisettings.update(bass.inisettings_defaults)
    if not civ_ini: return
    default_options = {f'{_type_key[type(v)]}{k}'.lower(): k
                       for k, v in bass.inisettings_defaults.items()}
    for section in civ_ini.sections():
        for ini_key, ini_value in civ_ini.items(section):
            try:
                used_key = default_options[ini_key]
            except KeyError:
                deprint(f'Ignoring unknown setting {ini_key} in section '
                        f'[{section}]')
                continue
            setting_type = type(bass.inisettings_defaults[used_key])
            try:
                if setting_type is bool:
                    new_value = civ_ini.getboolean(section, ini_key)
                else:
                    new_value = setting_type(ini_value)
            except ValueError:
                deprint(f'Invalid value {ini_value!r} for {ini_key}, using '
                        f'the default')
                continue
            bass.inisettings[used_key] = new_value
