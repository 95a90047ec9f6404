"""Data model for a single doubles match."""

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
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from americanopairing.constants import MATCH_SIZE, TEAM_SIZE
from americanopairing.exceptions import InvalidMatchError
from americanopairing.type_hints import MaybeScore, PlayerId, Score, Team


def _as_team(players: Sequence[PlayerId], label: str) -> Team:
    team = tuple(players)
    if len(team) != TEAM_SIZE:
        raise InvalidMatchError(
            f"{label} must hold exactly {TEAM_SIZE} players, got {len(team)}"
        )
    return team  # type: ignore[return-value]


def _as_score(score: Optional[Sequence[int]]) -> MaybeScore:
    if score is None:
        return None
    values = tuple(score)
    if len(values) != 2:
        raise InvalidMatchError(f"Score must hold two values, got {values!r}")
    return int(values[0]), int(values[1])


@dataclass
class Match:
    """Represents one two-versus-two match of an Americano schedule.

    Attributes:
        round: Round number (1-indexed)
        team1: The two player ids of the first team
        team2: The two player ids of the second team
        score: (team1 score, team2 score), or None until a result is entered
        confirmed: Whether the result counts towards the standings
    """

    round: int
    team1: Team
    team2: Team
    score: MaybeScore = None
    confirmed: bool = False

    def __post_init__(self):
        self.team1 = _as_team(self.team1, "team1")
        self.team2 = _as_team(self.team2, "team2")
        self.score = _as_score(self.score)
        if self.round < 1:
            raise InvalidMatchError(f"Round must be positive, got {self.round}")
        if len(set(self.players)) != MATCH_SIZE:
            raise InvalidMatchError(
                f"Round {self.round}: players must be distinct, got {self.players}"
            )

    @property
    def players(self) -> Tuple[PlayerId, ...]:
        """All four player ids, team1 first."""
        return self.team1 + self.team2

    @property
    def has_score(self) -> bool:
        return self.score is not None

    def has_player(self, player_id: PlayerId) -> bool:
        return player_id in self.team1 or player_id in self.team2

    def partner_of(self, player_id: PlayerId) -> PlayerId:
        """Return the teammate of ``player_id``."""
        for team in (self.team1, self.team2):
            if player_id in team:
                return team[1] if team[0] == player_id else team[0]
        raise KeyError(player_id)

    def opponents_of(self, player_id: PlayerId) -> Team:
        """Return the team facing ``player_id``."""
        if player_id in self.team1:
            return self.team2
        if player_id in self.team2:
            return self.team1
        raise KeyError(player_id)

    def score_for(self, player_id: PlayerId) -> Score:
        """Return (own score, opponent score) for ``player_id``.

        An unset score reads as (0, 0).
        """
        s1, s2 = self.score if self.score is not None else (0, 0)
        if player_id in self.team1:
            return s1, s2
        if player_id in self.team2:
            return s2, s1
        raise KeyError(player_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to the persisted row layout."""
        score1, score2 = self.score if self.score is not None else (None, None)
        return {
            "round": self.round,
            "team1_player1": self.team1[0],
            "team1_player2": self.team1[1],
            "team2_player1": self.team2[0],
            "team2_player2": self.team2[1],
            "score1": score1,
            "score2": score2,
            "confirmed": self.confirmed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from a persisted row.

        Rows using ``team1``/``team2`` lists and a ``score`` pair are read as well.
        """
        if "team1" in data:
            team1 = data["team1"]
            team2 = data["team2"]
            score = data.get("score")
        else:
            team1 = (data["team1_player1"], data["team1_player2"])
            team2 = (data["team2_player1"], data["team2_player2"])
            score1 = data.get("score1")
            score2 = data.get("score2")
            score = None if score1 is None or score2 is None else (score1, score2)
        return cls(
            round=int(data["round"]),
            team1=team1,
            team2=team2,
            score=score,
            confirmed=bool(data.get("confirmed", False)),
        )


def matches_by_round(schedule: Iterable[Match]) -> Dict[int, List[Match]]:
    """Group matches by round number, keeping schedule order inside a round."""
    rounds: Dict[int, List[Match]] = {}
    for match in schedule:
        rounds.setdefault(match.round, []).append(match)
    return dict(sorted(rounds.items()))


def players_in_schedule(schedule: Iterable[Match]) -> List[PlayerId]:
    """Distinct player ids in order of first appearance."""
    seen: Dict[PlayerId, None] = {}
    for match in schedule:
        for player_id in match.players:
            seen.setdefault(player_id, None)
    return list(seen)
