"""Data model for tournament configuration."""

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
from typing import Any, Dict, Optional

from americanopairing.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_RESTARTS,
    DEFAULT_OPPONENT_THRESHOLD,
    DEFAULT_POINTS_PER_MATCH,
    DEFAULT_STRATEGY,
    STRATEGIES,
)
from americanopairing.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Configuration settings for an Americano tournament.

    Attributes
    ----------
    name : str
        Tournament name.
    points_per_match : int
        Total points played in every match; both scores must add up to it.
    opponent_threshold : int
        Opponent meetings above this count are reported by the validator.
    strategy : str
        Schedule strategy: ``"auto"``, ``"greedy"`` or ``"fixed"``.
    seed : int or None
        Seed for the schedule random source, None for an unseeded one.
    max_attempts : int
        Sub-step budget of one greedy construction run.
    max_restarts : int
        Reshuffled construction runs before the builder gives up.
    """

    name: str = "Americano"
    points_per_match: int = DEFAULT_POINTS_PER_MATCH
    opponent_threshold: int = DEFAULT_OPPONENT_THRESHOLD
    strategy: str = DEFAULT_STRATEGY
    seed: Optional[int] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_restarts: int = DEFAULT_MAX_RESTARTS

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise InvalidConfigurationException(
                f"Unknown strategy '{self.strategy}', expected one of {STRATEGIES}"
            )
        if self.points_per_match < 1:
            raise InvalidConfigurationException(
                f"points_per_match must be positive, got {self.points_per_match}"
            )
        if self.opponent_threshold < 1:
            raise InvalidConfigurationException(
                f"opponent_threshold must be positive, got {self.opponent_threshold}"
            )
        if self.max_attempts < 1 or self.max_restarts < 1:
            raise InvalidConfigurationException(
                "max_attempts and max_restarts must be positive"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "points_per_match": self.points_per_match,
            "opponent_threshold": self.opponent_threshold,
            "strategy": self.strategy,
            "seed": self.seed,
            "max_attempts": self.max_attempts,
            "max_restarts": self.max_restarts,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Americano"),
            points_per_match=data.get("points_per_match", DEFAULT_POINTS_PER_MATCH),
            opponent_threshold=data.get(
                "opponent_threshold", DEFAULT_OPPONENT_THRESHOLD
            ),
            strategy=data.get("strategy", DEFAULT_STRATEGY),
            seed=data.get("seed"),
            max_attempts=data.get("max_attempts", DEFAULT_MAX_ATTEMPTS),
            max_restarts=data.get("max_restarts", DEFAULT_MAX_RESTARTS),
        )
