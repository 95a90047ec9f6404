"""Schedule construction for Americano tournaments."""

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

from americanopairing.pairing.base import ScheduleStrategy, count_meetings, cross_pairs
from americanopairing.pairing.fixed_pattern import FIXED_TABLES, FixedPattern
from americanopairing.pairing.greedy_search import GreedySearch, circle_factorization
from americanopairing.pairing.scheduler import generate_schedule, select_strategy
from americanopairing.pairing.universe import (
    PairingUniverse,
    all_pairs,
    check_player_ids,
    pair_key,
)

__all__ = [
    "FIXED_TABLES",
    "FixedPattern",
    "GreedySearch",
    "PairingUniverse",
    "ScheduleStrategy",
    "all_pairs",
    "check_player_ids",
    "circle_factorization",
    "count_meetings",
    "cross_pairs",
    "generate_schedule",
    "pair_key",
    "select_strategy",
]
