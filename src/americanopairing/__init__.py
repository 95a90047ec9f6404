"""Americano Pairing: doubles schedules, validation, standings and medals.

Typical use::

    from americanopairing import compute_standings, generate_schedule

    schedule = generate_schedule(["ann", "bob", "cid", "dan"])
"""

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

from americanopairing.models import Match, Player, TournamentConfig
from americanopairing.pairing import generate_schedule
from americanopairing.tournament import (
    MedalRow,
    ResultRecorder,
    StandingsRow,
    aggregate_group_medals,
    aggregate_medals,
    compute_standings,
    top_three,
)
from americanopairing.validation import ValidationReport, validate_schedule

__version__ = "0.1.0"

__all__ = [
    "Match",
    "MedalRow",
    "Player",
    "ResultRecorder",
    "StandingsRow",
    "TournamentConfig",
    "ValidationReport",
    "aggregate_group_medals",
    "aggregate_medals",
    "compute_standings",
    "generate_schedule",
    "top_three",
    "validate_schedule",
]
