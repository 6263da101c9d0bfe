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
"""Civ Bash: reads, inspects and edits Civilization VI save files.

brec knows the record layer (markers, type tags, the chunk ledger), bosh the
save level (compressed section, money, actors, reading and writing files),
bash.py ties them together for the command line."""
