"""Enumeration of the partner pairs available to a player group."""

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

from itertools import combinations
from typing import List, Sequence, Tuple

from americanopairing.constants import MATCH_SIZE, MIN_PLAYERS
from americanopairing.exceptions import DuplicatePlayerError, InvalidPlayerCountError
from americanopairing.type_hints import PairKey, PlayerId, Team


def pair_key(a: PlayerId, b: PlayerId) -> PairKey:
    """Unordered key for a pair of players."""
    return frozenset((a, b))


def check_player_ids(player_ids: Sequence[PlayerId]) -> None:
    """Validate a player list for Americano scheduling.

    Raises:
        InvalidPlayerCountError: If the count is below 4 or not a multiple of 4
        DuplicatePlayerError: If an id is listed twice
    """
    count = len(player_ids)
    if count < MIN_PLAYERS or count % MATCH_SIZE != 0:
        raise InvalidPlayerCountError(count)
    if len(set(player_ids)) != count:
        duplicates = sorted({p for p in player_ids if player_ids.count(p) > 1})
        raise DuplicatePlayerError(f"Duplicate player ids: {', '.join(duplicates)}")


class PairingUniverse:
    """All unordered player pairs of a player group.

    Pairs are produced in input order: ``(p0, p1), (p0, p2), ..., (p1, p2), ...``.
    """

    def __init__(self, player_ids: Sequence[PlayerId]) -> None:
        check_player_ids(player_ids)
        self.player_ids: Tuple[PlayerId, ...] = tuple(player_ids)

    def __len__(self) -> int:
        n = len(self.player_ids)
        return n * (n - 1) // 2

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, frozenset) or len(key) != 2:
            return False
        return all(p in self.player_ids for p in key)

    def pairs(self) -> List[Team]:
        """Return every unordered pair exactly once."""
        return list(combinations(self.player_ids, 2))

    def keys(self) -> List[PairKey]:
        """Return every pair as a :func:`pair_key`."""
        return [pair_key(a, b) for a, b in self.pairs()]


def all_pairs(player_ids: Sequence[PlayerId]) -> List[Team]:
    """Return the C(n, 2) unordered pairs of ``player_ids``."""
    return PairingUniverse(player_ids).pairs()
