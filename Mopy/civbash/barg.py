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
"""This module parses the command line that was used to start Civ Bash."""

import argparse

def _slot_value(arg_str):
    """SLOT=VALUE, SLOT being the 1-based position of a civ in the list."""
    slot_str, sep, value = arg_str.partition('=')
    if not sep:
        raise argparse.ArgumentTypeError(f'expected SLOT=VALUE, got '
                                         f'{arg_str!r}')
    try:
        return int(slot_str), value
    except ValueError:
        raise argparse.ArgumentTypeError(f'{slot_str!r} is not a valid '
                                         f'slot number') from None

def _slot_amount(arg_str):
    slot, amount = _slot_value(arg_str)
    try:
        return slot, int(amount)
    except ValueError:
        raise argparse.ArgumentTypeError(f'{amount!r} is not a valid '
                                         f'amount') from None

def parse(sys_argv=None):
    """Helper function to define commandline arguments"""
    parser = argparse.ArgumentParser(prog='civbash',
        description='Inspect and edit Civilization VI save files.')
    parser.add_argument('save_path', metavar='SAVE',
                        help='The .Civ6Save file to work on.')

    #### Groups ####
    def arg(group, dashed, descr, dest, action='store', dflt=None, **kwargs):
        group.add_argument(dashed, descr, dest=dest, action=action,
                           default=dflt, help=h, **kwargs)

    ### Edit Group ###
    editGroup = parser.add_argument_group('Edit Arguments',
        'Slots are the numbers shown by --list, starting at 1. All edit '
        'arguments may be repeated. The save is only written if at least one '
        'edit was requested.')
    # money #
    h = 'Set the gold of the civ in SLOT to AMOUNT.'
    arg(editGroup, '-m', '--money', dest='money', action='append', dflt=[],
        type=_slot_amount, metavar='SLOT=AMOUNT')
    # player name #
    h = 'Set the player name of the civ in SLOT.'
    arg(editGroup, '-n', '--player-name', dest='player_names',
        action='append', dflt=[], type=_slot_value, metavar='SLOT=NAME')
    # password #
    h = ('Set the password of the civ in SLOT. An empty password removes '
         'it.')
    arg(editGroup, '-p', '--password', dest='passwords', action='append',
        dflt=[], type=_slot_value, metavar='SLOT=PASSWORD')
    # ai / human #
    h = 'Hand the civ in SLOT over to the AI.'
    arg(editGroup, '-a', '--ai', dest='ai_slots', action='append', dflt=[],
        type=int, metavar='SLOT')
    h = 'Make the civ in SLOT human controlled.'
    arg(editGroup, '-u', '--human', dest='human_slots', action='append',
        dflt=[], type=int, metavar='SLOT')

    ### Output Group ###
    outputGroup = parser.add_argument_group('Output Arguments')
    h = ('Where to write the edited save. Defaults to overwriting SAVE '
         '(after backing it up, unless disabled in civbash.ini or with '
         '--no-backup).')
    arg(outputGroup, '-o', '--output', dest='output')
    h = 'List the civs in the save along with their gold.'
    arg(outputGroup, '-l', '--list', dest='list_civs', action='store_true',
        dflt=False)
    h = 'Print the parsed fields, actors and civs as json.'
    arg(outputGroup, '-s', '--simple', dest='simple', action='store_true',
        dflt=False)
    h = 'Write the decompressed body of the save next to it.'
    arg(outputGroup, '-b', '--dump-body', dest='dump_body',
        action='store_true', dflt=False)

    #### Individual Arguments ####
    parser.add_argument('-i', '--ini', dest='ini', default='civbash.ini',
                        help='Path to the civbash.ini to read settings '
                             'from.')
    parser.add_argument('--no-backup', action='store_true',
                        dest='no_backup',
                        help='Do not back up the save before overwriting '
                             'it.')
    parser.add_argument('-d', '--debug', action='store_true', dest='debug',
                        help='Print every record while parsing.')
    return parser.parse_args(sys_argv)
