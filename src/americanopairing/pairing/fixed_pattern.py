"""
Fixed Americano Pattern Tables

This module implements Americano schedules from precomputed cyclic tables
(whist tables). It supports tournaments with 4, 8, 12 and 16 players.

Each table is stored as a single base round over the positions
``0 .. n-2`` plus a fixed position ``n-1``. Round ``r`` is obtained by adding
``r`` (mod ``n-1``) to every position except the fixed one. The base rounds
are chosen so that after developing all ``n-1`` rounds:
- Each player partners every other player exactly once
- Each player faces every other player exactly twice
- Every player plays in every round

Example:
    >>> pattern = FixedPattern()
    >>> rounds = pattern.build_rounds(["A", "B", "C", "D"], random.Random(1))
    >>> len(rounds)
    3
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

import random
from typing import Dict, List, Sequence, Tuple

from americanopairing.constants import STRATEGY_FIXED
from americanopairing.exceptions import InvalidPlayerCountError
from americanopairing.pairing.base import ScheduleStrategy
from americanopairing.type_hints import PatternMatch, PlayerId, RoundPairings
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)

# Type aliases for clarity
PatternRound = Tuple[PatternMatch, ...]
PatternTable = Tuple[PatternRound, ...]


# Base rounds of the cyclic tables.
#
# Positions 0 .. n-2 are developed mod n-1, position n-1 stays fixed.
# Format: each tuple is one match, ((team1 positions), (team2 positions)).
WHIST_BASE_ROUNDS: Dict[int, PatternRound] = {
    4: (((3, 0), (1, 2)),),
    8: (
        ((7, 0), (1, 3)),
        ((2, 6), (4, 5)),
    ),
    12: (
        ((11, 0), (1, 4)),
        ((9, 10), (5, 7)),
        ((2, 6), (3, 8)),
    ),
    16: (
        ((15, 0), (5, 10)),
        ((1, 2), (4, 8)),
        ((6, 13), (7, 9)),
        ((11, 14), (3, 12)),
    ),
}


def develop_base_round(base_round: PatternRound, player_count: int) -> PatternTable:
    """Expand a base round into the full table of ``player_count - 1`` rounds.

    Args:
        base_round: Matches of round one in table positions
        player_count: Number of players the table is for

    Returns:
        One tuple of matches per round
    """
    modulus = player_count - 1
    fixed = player_count - 1

    def shift(position: int, offset: int) -> int:
        return position if position == fixed else (position + offset) % modulus

    table = []
    for offset in range(modulus):
        table.append(
            tuple(
                (
                    (shift(t1[0], offset), shift(t1[1], offset)),
                    (shift(t2[0], offset), shift(t2[1], offset)),
                )
                for t1, t2 in base_round
            )
        )
    return tuple(table)


FIXED_TABLES: Dict[int, PatternTable] = {
    count: develop_base_round(base, count) for count, base in WHIST_BASE_ROUNDS.items()
}


class FixedPattern(ScheduleStrategy):
    """Schedule from a precomputed, hand-verified rotation table.

    The player list is mapped onto table positions in order, so callers
    shuffle it first when they want a different draw.
    """

    name = STRATEGY_FIXED

    def __init__(self, tables: Dict[int, PatternTable] = FIXED_TABLES) -> None:
        self.tables = tables

    def supports(self, player_count: int) -> bool:
        return player_count in self.tables

    def build_rounds(
        self, player_ids: Sequence[PlayerId], rng: random.Random
    ) -> List[RoundPairings]:
        """Map ``player_ids`` onto the table for their count.

        Raises:
            InvalidPlayerCountError: If no table exists for the player count
        """
        count = len(player_ids)
        table = self.tables.get(count)
        if table is None:
            logger.error("No fixed table for %d players", count)
            raise InvalidPlayerCountError(
                count, f"fixed tables exist for {sorted(self.tables)} players"
            )

        logger.info("Using %d player fixed table", count)
        rounds: List[RoundPairings] = []
        for pattern_round in table:
            rounds.append(
                [
                    (
                        (player_ids[t1[0]], player_ids[t1[1]]),
                        (player_ids[t2[0]], player_ids[t2[1]]),
                    )
                    for t1, t2 in pattern_round
                ]
            )
        return rounds
