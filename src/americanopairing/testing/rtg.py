"""Random Tournament Generator (RTG) - Internal testing system for Americano schedules.

This module generates complete tournaments (players, schedule, simulated
scores, standings and validation) for exercising the scheduler and the
standings engine end to end.
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

import json
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from americanopairing.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_RESTARTS,
    DEFAULT_OPPONENT_THRESHOLD,
    DEFAULT_POINTS_PER_MATCH,
    DEFAULT_STRATEGY,
)
from americanopairing.models.match import Match
from americanopairing.models.player import Player, player_ids
from americanopairing.models.tournament_config import TournamentConfig
from americanopairing.pairing.scheduler import generate_schedule
from americanopairing.tournament.medals import aggregate_medals
from americanopairing.tournament.result_recorder import ResultRecorder
from americanopairing.tournament.standings import compute_standings
from americanopairing.type_hints import Score
from americanopairing.utils import setup_logger
from americanopairing.validation.schedule_validator import validate_schedule

logger = setup_logger(__name__)

PLAYER_NAMES = [
    "Anna",
    "Erik",
    "Sara",
    "Johan",
    "Maja",
    "Lars",
    "Elin",
    "Oskar",
    "Ida",
    "Nils",
    "Karin",
    "Per",
    "Linnea",
    "Gustav",
    "Frida",
    "Axel",
]


class ResultPattern(Enum):
    """Score generation patterns for tournaments."""

    REALISTIC = "realistic"  # stronger team wins more points
    BALANCED = "balanced"  # close games
    PREDICTABLE = "predictable"  # stronger team nearly always wins
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    name: str = "RTG"
    points_per_match: int = DEFAULT_POINTS_PER_MATCH
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    strategy: str = DEFAULT_STRATEGY
    opponent_threshold: int = DEFAULT_OPPONENT_THRESHOLD
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_restarts: int = DEFAULT_MAX_RESTARTS
    confirm_rate: float = 1.0  # share of scored matches that get confirmed
    score_rate: float = 1.0  # share of matches that get a score at all
    skill_range: tuple = (1, 10)

    def tournament_config(self, name: Optional[str] = None) -> TournamentConfig:
        return TournamentConfig(
            name=name or self.name,
            points_per_match=self.points_per_match,
            opponent_threshold=self.opponent_threshold,
            strategy=self.strategy,
            seed=self.seed,
            max_attempts=self.max_attempts,
            max_restarts=self.max_restarts,
        )


class PlayerFactory:
    """Factory for creating tournament players with a hidden skill level."""

    def __init__(self, config: RTGConfig, rng: random.Random):
        self.config = config
        self.random = rng

    def create_players(self) -> List[Player]:
        players = []
        for i in range(self.config.num_players):
            base = PLAYER_NAMES[i % len(PLAYER_NAMES)]
            name = base if i < len(PLAYER_NAMES) else f"{base}-{i // len(PLAYER_NAMES) + 1}"
            players.append(Player(name=name, id=f"p{i + 1:03d}"))
        logger.info("Created %s players", len(players))
        return players

    def assign_skills(self, players: List[Player]) -> Dict[str, int]:
        low, high = self.config.skill_range
        return {p.id: self.random.randint(low, high) for p in players}


class ResultSimulator:
    """Simulates match scores that add up to the points per match."""

    def __init__(self, config: RTGConfig, rng: random.Random):
        self.config = config
        self.random = rng

    def simulate_score(self, strength1: float, strength2: float) -> Score:
        """Return (team1 score, team2 score)."""
        total = self.config.points_per_match
        pattern = self.config.result_pattern
        if pattern == ResultPattern.RANDOM:
            score1 = self.random.randint(0, total)
        elif pattern == ResultPattern.BALANCED:
            half = total // 2
            spread = max(1, total // 8)
            score1 = max(0, min(total, half + self.random.randint(-spread, spread)))
        else:
            share = strength1 / (strength1 + strength2)
            if pattern == ResultPattern.PREDICTABLE:
                share = 0.9 if share > 0.5 else 0.1 if share < 0.5 else 0.5
            score1 = sum(1 for _ in range(total) if self.random.random() < share)
        return score1, total - score1


class RandomTournamentGenerator:
    """Main tournament generator orchestrating players, schedule and results."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.player_factory = PlayerFactory(config, self.random)
        self.result_simulator = ResultSimulator(config, self.random)
        self.recorder = ResultRecorder(config.points_per_match)

    def generate_complete_tournament(
        self, name: Optional[str] = None
    ) -> Dict[str, Any]:
        """Generate a complete tournament with players, schedule and results."""
        name = name or self.config.name
        logger.info(
            "Generating tournament: %s players, %s pattern",
            self.config.num_players,
            self.config.result_pattern.value,
        )
        players = self.player_factory.create_players()
        skills = self.player_factory.assign_skills(players)
        ids = player_ids(players)

        schedule = generate_schedule(
            ids, self.config.tournament_config(name), rng=self.random
        )
        self._play(schedule, skills)

        report = validate_schedule(schedule, ids, self.config.opponent_threshold)
        standings = compute_standings(schedule, ids)
        logger.info("Tournament generation complete")
        return {
            "name": name,
            "config": self.config,
            "players": players,
            "skills": skills,
            "schedule": schedule,
            "standings": standings,
            "validation": report,
        }

    def generate_series(self, count: int, group_id: str = "rtg") -> Dict[str, Any]:
        """Generate ``count`` tournaments of the same group and their medal table."""
        tournaments = []
        for index in range(1, count + 1):
            tournament = self.generate_complete_tournament(name=f"{group_id}-{index}")
            tournament["id"] = f"{group_id}-{index}"
            tournament["group_id"] = group_id
            tournaments.append(tournament)
        medals = aggregate_medals((t["id"], t["standings"]) for t in tournaments)
        return {"group_id": group_id, "tournaments": tournaments, "medals": medals}

    def _play(self, schedule: List[Match], skills: Dict[str, int]) -> None:
        for match in schedule:
            if self.random.random() >= self.config.score_rate:
                continue
            strength1 = sum(skills[p] for p in match.team1)
            strength2 = sum(skills[p] for p in match.team2)
            score1, score2 = self.result_simulator.simulate_score(strength1, strength2)
            self.recorder.record_score(match, score1, score2)
            if self.random.random() < self.config.confirm_rate:
                self.recorder.confirm(match)

    def export_json_format(self, tournament_data: Dict[str, Any]) -> str:
        export_data = {
            "tournament_config": {
                "name": tournament_data["name"],
                "num_players": self.config.num_players,
                "points_per_match": self.config.points_per_match,
                "result_pattern": self.config.result_pattern.value,
                "strategy": self.config.strategy,
                "seed": self.config.seed,
            },
            "players": [p.to_dict() for p in tournament_data["players"]],
            "matches": [m.to_dict() for m in tournament_data["schedule"]],
            "standings": [r.to_dict() for r in tournament_data["standings"]],
            "validation": tournament_data["validation"].to_dict(),
        }
        return json.dumps(export_data, indent=2)


def create_small_tournament(
    num_players: int = 8, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create small tournament for testing."""
    config = RTGConfig(num_players=num_players, seed=seed)
    return RandomTournamentGenerator(config)


def create_large_tournament(
    num_players: int = 24, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create large tournament that needs the greedy builder."""
    config = RTGConfig(num_players=num_players, seed=seed)
    return RandomTournamentGenerator(config)
