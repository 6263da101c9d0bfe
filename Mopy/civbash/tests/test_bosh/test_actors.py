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
from .. import TEST_MARKER, civ_records, int_record, string_record
from ...bosh import Actor, assemble_actors
from ...brec import ACTOR_DATA, GAME_DATA, SLOT_HEADERS, START_ACTOR, \
    SaveReader, parse_record, simplify

def _records(*rec_bytes):
    buf = b''.join(rec_bytes)
    ins = SaveReader(buf)
    records = []
    while not ins.atEnd():
        records.append(parse_record(ins))
    return records

class TestAssembleActors(object):
    def test_civs_in_slot_order(self):
        """Civs are listed by slot, not by where they show up in the
        save."""
        actors, civs, _fields = assemble_actors(_records(
            civ_records(2, 'FRANCE', 'Two'),
            civ_records(0, 'RUSSIA', 'Zero'),
            civ_records(1, 'EGYPT', 'One')))
        assert [c.display_name for c in civs] == ['RUSSIA', 'EGYPT', 'FRANCE']
        assert [c.slot_index for c in civs] == [0, 1, 2]
        assert [c.field_value('PLAYER_NAME') for c in civs] == [
            'Zero', 'One', 'Two']
        assert actors == []

    def test_city_states_stay_actors(self):
        actors, civs, _fields = assemble_actors(_records(
            civ_records(0, 'KOREA'),
            civ_records(1, 'GENEVA',
                        actor_type='CIVILIZATION_LEVEL_CITY_STATE')))
        assert [c.display_name for c in civs] == ['KOREA']
        assert [a.display_name for a in actors] == ['GENEVA']
        assert not actors[0].is_full_civ

    def test_actor_fields(self):
        _actors, (civ,), _fields = assemble_actors(_records(
            civ_records(3, 'ZULU', 'Shaka', ai_human=1, password='pw')))
        assert isinstance(civ, Actor)
        assert civ.slot_index == 3
        assert set(civ) == {'SLOT_HEADER', 'ACTOR_NAME', 'LEADER_NAME',
                            'ACTOR_TYPE', 'PLAYER_NAME', 'PLAYER_PASSWORD',
                            'ACTOR_AI_HUMAN', 'ACTOR_DESCRIPTION'}
        assert civ.actor_name == 'CIVILIZATION_ZULU'
        assert civ.field_value('ACTOR_AI_HUMAN') == 1
        assert civ.field_value('IS_CURRENT_TURN', 'missing') == 'missing'

    def test_game_data_fields(self):
        _actors, _civs, fields = assemble_actors(_records(
            int_record(GAME_DATA['GAME_TURN'], 12),
            civ_records(0, 'ROME'),
            string_record(GAME_DATA['MAP_SIZE'], 'MAPSIZE_HUGE')))
        assert simplify(fields) == {'GAME_TURN': 12,
                                    'MAP_SIZE': 'MAPSIZE_HUGE'}

    def test_start_actor(self):
        """START_ACTOR opens an actor only if none is open yet."""
        actors, civs, _fields = assemble_actors(_records(
            int_record(START_ACTOR, 0),
            string_record(ACTOR_DATA['ACTOR_NAME'],
                          'CIVILIZATION_FREE_CITIES'),
            string_record(ACTOR_DATA['ACTOR_TYPE'], 'CIVILIZATION_LEVEL_FREE_'
                                                    'CITIES'),
            int_record(START_ACTOR, 0),
            string_record(ACTOR_DATA['ACTOR_DESCRIPTION'], 'LOC_FREE_CITIES'),
        ))
        assert civs == []
        actor, = actors
        assert actor.slot_index is None
        assert actor.display_name == 'FREE_CITIES'
        assert 'ACTOR_DESCRIPTION' in actor

    def test_slot_header_starts_new_actor(self):
        """A slot header closes whatever actor was still open."""
        _actors, civs, _fields = assemble_actors(_records(
            int_record(SLOT_HEADERS[0], 1),
            string_record(ACTOR_DATA['ACTOR_NAME'], 'CIVILIZATION_SPAIN'),
            string_record(ACTOR_DATA['ACTOR_TYPE'],
                          'CIVILIZATION_LEVEL_FULL_CIV'),
            civ_records(1, 'PERSIA')))
        assert [c.display_name for c in civs] == ['SPAIN', 'PERSIA']
        assert 'ACTOR_DESCRIPTION' not in civs[0]

    def test_fields_outside_actors(self):
        """Actor fields after a description belong to nobody."""
        actors, civs, _fields = assemble_actors(_records(
            civ_records(0, 'CHINA', 'First'),
            string_record(ACTOR_DATA['PLAYER_NAME'], 'Stray')))
        assert civs[0].field_value('PLAYER_NAME') == 'First'
        assert actors == []

    def test_incomplete_actors_dropped(self):
        actors, civs, _fields = assemble_actors(_records(
            int_record(SLOT_HEADERS[4], 1),
            int_record(TEST_MARKER, 5),
            string_record(ACTOR_DATA['ACTOR_DESCRIPTION'], 'LOC_NOBODY')))
        assert actors == civs == []

    def test_duplicate_slot(self):
        """Only the first full civ of a slot is picked."""
        actors, civs, _fields = assemble_actors(_records(
            civ_records(0, 'AZTEC'),
            civ_records(0, 'MAYA')))
        assert [c.display_name for c in civs] == ['AZTEC']
        assert [a.display_name for a in actors] == ['MAYA']
