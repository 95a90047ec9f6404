"""Common interface of the schedule construction strategies."""

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
from abc import ABC, abstractmethod
from collections import Counter
from typing import Iterable, List, Sequence, Tuple

from americanopairing.pairing.universe import pair_key
from americanopairing.type_hints import PairKey, PlayerId, RoundPairings, Team


def cross_pairs(team1: Team, team2: Team) -> List[PairKey]:
    """The four opponent pairs of a match."""
    return [pair_key(a, b) for a in team1 for b in team2]


def count_meetings(
    rounds: Iterable[RoundPairings],
) -> Tuple["Counter[PairKey]", "Counter[PairKey]"]:
    """Count partnerships and opponent meetings over built rounds.

    Returns:
        Tuple of (partner counts, opponent counts) keyed by pair
    """
    partners: "Counter[PairKey]" = Counter()
    opponents: "Counter[PairKey]" = Counter()
    for round_pairings in rounds:
        for team1, team2 in round_pairings:
            partners[pair_key(*team1)] += 1
            partners[pair_key(*team2)] += 1
            opponents.update(cross_pairs(team1, team2))
    return partners, opponents


class ScheduleStrategy(ABC):
    """A way of turning a player list into rounds of matches.

    Implementations return one list of ``(team1, team2)`` tuples per round,
    rounds in play order, every player appearing once per round.
    """

    name: str = ""

    @abstractmethod
    def supports(self, player_count: int) -> bool:
        """Whether this strategy can schedule ``player_count`` players."""

    @abstractmethod
    def build_rounds(
        self, player_ids: Sequence[PlayerId], rng: random.Random
    ) -> List[RoundPairings]:
        """Build all rounds for ``player_ids``.

        Args:
            player_ids: Already validated (and shuffled) player ids
            rng: Random source for any choice the strategy makes

        Returns:
            Rounds in play order
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
