"""Medal tables over several tournaments."""

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
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from americanopairing.constants import MEDALS
from americanopairing.models.match import Match
from americanopairing.tournament.standings import StandingsRow, compute_standings
from americanopairing.type_hints import PlayerId
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)

TournamentStandings = Tuple[str, Sequence[StandingsRow]]


@dataclass
class MedalRow:
    """Medal count of one player."""

    player: PlayerId
    gold: int = 0
    silver: int = 0
    bronze: int = 0

    @property
    def total(self) -> int:
        return self.gold + self.silver + self.bronze

    def award(self, medal: str) -> None:
        setattr(self, medal, getattr(self, medal) + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "gold": self.gold,
            "silver": self.silver,
            "bronze": self.bronze,
        }


def aggregate_medals(
    per_tournament_standings: Iterable[TournamentStandings],
) -> List[MedalRow]:
    """Fold the top three of each tournament into one medal table.

    Args:
        per_tournament_standings: ``(tournament_id, ranked rows)`` pairs

    Returns:
        Rows sorted by gold, silver and bronze, descending; ties keep the
        order in which players first won a medal
    """
    table: Dict[PlayerId, MedalRow] = {}
    for tournament_id, rows in per_tournament_standings:
        podium = [r for r in rows if r.games_played > 0][: len(MEDALS)]
        if not podium:
            logger.debug("Tournament %s has no confirmed games", tournament_id)
            continue
        for row, medal in zip(podium, MEDALS):
            table.setdefault(row.player, MedalRow(row.player)).award(medal)

    return sorted(table.values(), key=lambda r: (-r.gold, -r.silver, -r.bronze))


def aggregate_group_medals(
    tournaments: Iterable[Mapping[str, Any]], group_id: str
) -> List[MedalRow]:
    """Medal table of the tournaments belonging to one group.

    Each tournament record holds ``id``, ``group_id``, ``matches`` (``Match``
    objects or persisted rows) and optionally ``players``.
    """
    standings: List[TournamentStandings] = []
    for record in tournaments:
        if record.get("group_id") != group_id:
            continue
        matches = [
            m if isinstance(m, Match) else Match.from_dict(m)
            for m in record.get("matches", [])
        ]
        players = record.get("players")
        standings.append((str(record.get("id")), compute_standings(matches, players)))

    logger.debug("Group %s: %d tournament(s)", group_id, len(standings))
    return aggregate_medals(standings)
