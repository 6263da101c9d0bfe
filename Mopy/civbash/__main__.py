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
"""Allows running Civ Bash via python -m civbash."""
import sys

from .bash import main

sys.exit(main())
