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
"""This module starts Civ Bash from the command line: reads the save, applies
the requested edits and writes it back out."""

import atexit
import json
import os
import sys

from . import bass, barg, civtemp, exception, initialization
from .bolt import deprint
from .bosh import SaveFile
from .brec import ACTOR_DATA, STRING

# Values of ACTOR_AI_HUMAN
_AI_PLAYER = 1
_HUMAN_PLAYER = 3

def _import_deps():
    """Check that the required dependencies are installed. Raises a
    StateError listing the missing ones."""
    deps_msg = ''
    try:
        import chardet
    except ImportError:
        deps_msg += '- chardet\n'
    if deps_msg:
        raise exception.StateError('The following dependencies could not be '
                                   'located or failed to load:\n\n' + deps_msg)

def _get_civ(parsed, slot):
    """The civ shown as number slot by --list."""
    if not 1 <= slot <= len(parsed.civs):
        raise exception.ArgumentError(f'Invalid slot {slot}: the save has '
                                      f'{len(parsed.civs)} civs')
    return parsed.civs[slot - 1]

def _get_field(civ, field_name):
    try:
        return civ[field_name]
    except KeyError:
        raise exception.ArgumentError(
            f'{civ.display_name} has no {field_name}') from None

def _list_civs(parsed):
    has_money = parsed.body is not None
    for slot, civ in enumerate(parsed.civs, start=1):
        civ_line = f'({slot}) {civ.display_name}'
        if (player_name := civ.field_value('PLAYER_NAME')) is not None:
            civ_line += f' [{player_name}]'
        if has_money:
            civ_line += f' - {parsed.read_money(slot - 1)} gold'
        print(civ_line)

def _apply_edits(opts, parsed):
    """Apply all edits requested on the command line. Returns True if
    anything was changed."""
    edited = False
    for slot, amount in opts.money:
        _get_civ(parsed, slot)
        if not parsed.write_money(slot - 1, amount):
            raise exception.ArgumentError(f'No gold found for slot {slot}')
        deprint(f'Set gold of slot {slot} to {amount}')
        edited = True
    for slot, player_name in opts.player_names:
        civ = _get_civ(parsed, slot)
        parsed.modify(_get_field(civ, 'PLAYER_NAME'), player_name)
        deprint(f'Set player name of {civ.display_name} to {player_name}')
        edited = True
    for slot, password in opts.passwords:
        civ = _get_civ(parsed, slot)
        if pw_record := civ.get('PLAYER_PASSWORD'):
            if password:
                parsed.modify(pw_record, password)
            else:
                parsed.delete(pw_record)
                del civ['PLAYER_PASSWORD']
        elif password:
            # No password record yet, put one right after the player name
            name_record = _get_field(civ, 'PLAYER_NAME')
            civ['PLAYER_PASSWORD'] = parsed.add(name_record,
                ACTOR_DATA['PLAYER_PASSWORD'], STRING, password)
        else:
            continue
        deprint(f'Changed password of {civ.display_name}')
        edited = True
    for slot_list, ai_value in ((opts.ai_slots, _AI_PLAYER),
                                (opts.human_slots, _HUMAN_PLAYER)):
        for slot in slot_list:
            civ = _get_civ(parsed, slot)
            parsed.modify(_get_field(civ, 'ACTOR_AI_HUMAN'), ai_value)
            deprint(f'Set ACTOR_AI_HUMAN of {civ.display_name} to '
                    f'{ai_value}')
            edited = True
    return edited

def _civ_ini_path(opts):
    if os.path.isabs(opts.ini) or os.path.exists(opts.ini):
        return opts.ini
    # fall back to the ini next to the save
    return os.path.join(os.path.dirname(os.path.abspath(opts.save_path)),
                        opts.ini)

# Main ------------------------------------------------------------------------
def main(sys_argv=None):
    """Run Civ Bash on the save named on the command line.

    :return: The exit status - 0 on success, 1 if anything went wrong."""
    opts = barg.parse(sys_argv)
    initialization.init_options(
        initialization.get_civ_ini(_civ_ini_path(opts)))
    if opts.no_backup:
        bass.inisettings['BackupSaves'] = False
    if opts.debug:
        bass.inisettings['DebugParse'] = True
    deprint(f'Civ Bash {bass.AppVersion}')
    atexit.register(civtemp.cleanup_temp)
    try:
        _import_deps()
        _main(opts)
    except exception.BoltError as e:
        deprint(f'Civ Bash encountered an error: {e}')
        return 1
    return 0

def _main(opts):
    """Does the actual work - call main() from the outside, which handles
    errors."""
    save_file = SaveFile(opts.save_path)
    parsed = save_file.read_save()
    deprint(parsed)
    if opts.simple:
        print(json.dumps(parsed.simplify(), indent=2))
    if opts.list_civs:
        _list_civs(parsed)
    if opts.dump_body:
        deprint(f'Body written to {save_file.dump_body()}')
    if _apply_edits(opts, parsed):
        save_file.write_save(opts.output)
    elif opts.output:
        deprint('Nothing to edit, not writing the save')

if __name__ == '__main__':
    sys.exit(main())
