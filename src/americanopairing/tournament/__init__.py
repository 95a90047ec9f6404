"""Results, standings and medal tables for Americano tournaments."""

# Americano Pairing
# Copyright (C) 2025  Americano Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from americanopairing.tournament.medals import (
    MedalRow,
    aggregate_group_medals,
    aggregate_medals,
)
from americanopairing.tournament.result_recorder import ResultRecorder
from americanopairing.tournament.standings import (
    StandingsCalculator,
    StandingsRow,
    compute_standings,
    top_three,
)

__all__ = [
    "MedalRow",
    "ResultRecorder",
    "StandingsCalculator",
    "StandingsRow",
    "aggregate_group_medals",
    "aggregate_medals",
    "compute_standings",
    "top_three",
]
