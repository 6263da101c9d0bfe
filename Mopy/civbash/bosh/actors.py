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
"""Groups the flat record stream of a save into actors - one per player slot,
city state, free city etc. - and picks out the actual civilizations."""
from ..bolt import deprint
from ..brec import ACTOR_DATA, FULL_CIV, SLOT_HEADERS, START_ACTOR, \
    actor_data_names, game_data_names, slot_header_index

__all__ = ['Actor', 'assemble_actors']

_actor_description = ACTOR_DATA['ACTOR_DESCRIPTION']

class Actor(dict):
    """Maps field names (ACTOR_NAME, PLAYER_NAME, SLOT_HEADER, ...) to the
    records that supplied them. The records are the same objects as in the
    flat record stream, so edits through the chunk ledger show up here."""
    __slots__ = ('slot_index',)

    def __init__(self, slot_index: int | None = None):
        super().__init__()
        self.slot_index = slot_index

    def field_value(self, field_name, default=None):
        try:
            return self[field_name].value
        except KeyError:
            return default

    @property
    def actor_name(self) -> str | None:
        return self.field_value('ACTOR_NAME')

    @property
    def display_name(self) -> str:
        """ACTOR_NAME minus its CIVILIZATION_ prefix."""
        act_name = self.actor_name
        if not isinstance(act_name, str):
            return '<unknown>'
        return act_name.removeprefix('CIVILIZATION_')

    @property
    def is_full_civ(self) -> bool:
        return (self.field_value('ACTOR_TYPE') == FULL_CIV and
                'ACTOR_NAME' in self)

    def __repr__(self):
        return f'<Actor slot={self.slot_index} {dict.__repr__(self)}>'

def assemble_actors(records):
    """Single pass over the records.

    :return: A tuple of the actors that are not civs (discovery order), the
        civs (slot order) and the top level game data fields (name ->
        record)."""
    actors: list[Actor] = []
    fields = {}
    cur_actor = None
    for record in records:
        marker = record.marker
        if (slot_dex := slot_header_index.get(marker)) is not None:
            # a slot header always starts a new actor
            cur_actor = Actor(slot_dex)
            cur_actor['SLOT_HEADER'] = record
            actors.append(cur_actor)
        elif cur_actor is None and marker == START_ACTOR:
            cur_actor = Actor()
            cur_actor['START_ACTOR'] = record
            actors.append(cur_actor)
        elif marker == _actor_description:
            if cur_actor is not None:
                cur_actor['ACTOR_DESCRIPTION'] = record
            cur_actor = None
        else:
            if field_name := game_data_names.get(marker):
                fields[field_name] = record
            if cur_actor is not None and (
                    field_name := actor_data_names.get(marker)):
                cur_actor[field_name] = record
    civs = []
    for slot_dex in range(len(SLOT_HEADERS)):
        for actor in actors:
            if actor.slot_index == slot_dex and actor.is_full_civ:
                civs.append(actor)
                actors.remove(actor)
                break
    # Anything without a type and name is a false match, not a player
    real_actors = [a for a in actors if 'ACTOR_TYPE' in a and
                   'ACTOR_NAME' in a]
    if dropped := len(actors) - len(real_actors):
        deprint(f'Dropped {dropped} actor(s) without ACTOR_TYPE or '
                f'ACTOR_NAME')
    return real_actors, civs, fields
