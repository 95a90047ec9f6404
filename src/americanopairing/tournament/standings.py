"""Standings calculation for Americano tournaments.

This module turns confirmed match results into a ranked leaderboard.
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

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from americanopairing.models.match import Match, players_in_schedule
from americanopairing.type_hints import PlayerId
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class StandingsRow:
    """One player's line in the leaderboard."""

    player: PlayerId
    games_played: int = 0
    wins: int = 0
    point_differential: int = 0
    total_points: int = 0

    @property
    def sort_key(self):
        """Descending ranking key: points, then differential, then wins."""
        return (-self.total_points, -self.point_differential, -self.wins)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "games_played": self.games_played,
            "wins": self.wins,
            "point_differential": self.point_differential,
            "total_points": self.total_points,
        }


class StandingsCalculator:
    """Calculates the leaderboard of one tournament.

    Only confirmed matches count. Per player and confirmed match:
    - games played goes up by one
    - own points are added to total points
    - own minus opponent points are added to the differential
    - a win is counted when own points beat the opponents' points

    Rows are ranked by total points, point differential and wins, all
    descending; rows still tied keep the order of the player list.

    A confirmed match without a score can only come from malformed stored
    data. It is logged and counted as a 0-0 game.
    """

    def calculate(
        self,
        schedule: Iterable[Match],
        player_ids: Optional[Sequence[PlayerId]] = None,
    ) -> List[StandingsRow]:
        """Build the ranked rows for ``schedule``.

        Args:
            schedule: Matches of the tournament, in any state
            player_ids: Players to rank; inferred from the schedule when omitted

        Returns:
            One row per player, best first
        """
        matches = list(schedule)
        if player_ids is None:
            player_ids = players_in_schedule(matches)

        rows: Dict[PlayerId, StandingsRow] = {p: StandingsRow(p) for p in player_ids}
        confirmed = [m for m in matches if m.confirmed]
        for match in confirmed:
            if not match.has_score:
                logger.warning(
                    "Round %s: confirmed match %s vs %s has no score, counted as 0-0",
                    match.round,
                    match.team1,
                    match.team2,
                )
            for player_id in match.players:
                row = rows.get(player_id)
                if row is None:
                    # Player missing from the given list
                    logger.debug("Ignoring result of unlisted player %s", player_id)
                    continue
                self._add_result(row, match, player_id)

        ranked = sorted(rows.values(), key=lambda r: r.sort_key)
        logger.debug(
            "Standings over %d confirmed of %d matches", len(confirmed), len(matches)
        )
        return ranked

    @staticmethod
    def _add_result(row: StandingsRow, match: Match, player_id: PlayerId) -> None:
        own, opp = match.score_for(player_id)
        row.games_played += 1
        row.total_points += own
        row.point_differential += own - opp
        if own > opp:
            row.wins += 1


def compute_standings(
    schedule: Iterable[Match], player_ids: Optional[Sequence[PlayerId]] = None
) -> List[StandingsRow]:
    """Return the ranked standings of a schedule."""
    return StandingsCalculator().calculate(schedule, player_ids)


def top_three(
    schedule: Iterable[Match], player_ids: Optional[Sequence[PlayerId]] = None
) -> List[PlayerId]:
    """Ids of the best three players with at least one confirmed game."""
    rows = compute_standings(schedule, player_ids)
    return [r.player for r in rows if r.games_played > 0][:3]
