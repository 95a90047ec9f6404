"""Turn a player list into a complete Americano schedule."""

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
from typing import List, Optional, Sequence

from americanopairing.constants import STRATEGY_AUTO, STRATEGY_FIXED, STRATEGY_GREEDY
from americanopairing.exceptions import (
    InvalidConfigurationException,
    ScheduleIncompleteError,
)
from americanopairing.models.match import Match
from americanopairing.models.tournament_config import TournamentConfig
from americanopairing.pairing.base import ScheduleStrategy, count_meetings
from americanopairing.pairing.fixed_pattern import FixedPattern
from americanopairing.pairing.greedy_search import GreedySearch
from americanopairing.pairing.universe import PairingUniverse, check_player_ids
from americanopairing.type_hints import PlayerId, RoundPairings, Team
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)


def select_strategy(config: TournamentConfig, player_count: int) -> ScheduleStrategy:
    """Return the strategy ``config`` asks for.

    ``"auto"`` uses a fixed table when one exists for ``player_count`` and
    the greedy builder otherwise.
    """
    greedy = GreedySearch(
        max_attempts=config.max_attempts,
        max_restarts=config.max_restarts,
        opponent_threshold=config.opponent_threshold,
    )
    if config.strategy == STRATEGY_GREEDY:
        return greedy
    fixed = FixedPattern()
    if config.strategy == STRATEGY_FIXED:
        return fixed
    if config.strategy == STRATEGY_AUTO:
        return fixed if fixed.supports(player_count) else greedy
    raise InvalidConfigurationException(f"Unknown strategy '{config.strategy}'")


def _missing_partnerships(
    rounds: List[RoundPairings], player_ids: Sequence[PlayerId]
) -> int:
    partners, _ = count_meetings(rounds)
    return sum(1 for key in PairingUniverse(player_ids).keys() if partners[key] != 1)


def _check_complete(rounds: List[RoundPairings], player_ids: Sequence[PlayerId]) -> None:
    """Raise unless every pair partners once and every round seats everyone."""
    missing = _missing_partnerships(rounds, player_ids)
    if missing:
        raise ScheduleIncompleteError(missing, len(rounds))
    everyone = set(player_ids)
    for number, round_pairings in enumerate(rounds, start=1):
        seated = [p for team1, team2 in round_pairings for p in team1 + team2]
        if len(seated) != len(everyone) or set(seated) != everyone:
            logger.error("Round %d does not seat every player once", number)
            unseated = len(everyone - set(seated))
            raise ScheduleIncompleteError(unseated, len(rounds))


def _shuffle_team(team: Team, rng: random.Random) -> Team:
    if rng.random() < 0.5:
        return team[1], team[0]
    return team


def _display_shuffle(
    rounds: List[RoundPairings], rng: random.Random
) -> List[RoundPairings]:
    """Randomize match order, sides and seat order without changing who meets whom."""
    shuffled = []
    for round_pairings in rounds:
        matches = []
        for team1, team2 in round_pairings:
            team1 = _shuffle_team(team1, rng)
            team2 = _shuffle_team(team2, rng)
            if rng.random() < 0.5:
                team1, team2 = team2, team1
            matches.append((team1, team2))
        rng.shuffle(matches)
        shuffled.append(matches)
    return shuffled


def generate_schedule(
    player_ids: Sequence[PlayerId],
    config: Optional[TournamentConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """Generate the full round-robin-of-partners schedule for ``player_ids``.

    Args:
        player_ids: Distinct player ids, a positive multiple of four
        config: Tournament settings, defaults to ``TournamentConfig()``
        rng: Random source; when omitted one is seeded from ``config.seed``

    Returns:
        Unscored, unconfirmed matches ordered by round

    Raises:
        InvalidPlayerCountError: If the count is not a positive multiple of 4
        DuplicatePlayerError: If an id is repeated
        ScheduleIncompleteError: If no complete schedule could be built
    """
    config = config or TournamentConfig()
    check_player_ids(player_ids)
    if rng is None:
        rng = random.Random(config.seed) if config.seed is not None else random.Random()

    order = list(player_ids)
    rng.shuffle(order)

    strategy = select_strategy(config, len(order))
    logger.debug("Scheduling %d players with %r", len(order), strategy)
    rounds = strategy.build_rounds(order, rng)
    _check_complete(rounds, order)
    rounds = _display_shuffle(rounds, rng)

    schedule = [
        Match(round=number, team1=team1, team2=team2)
        for number, round_pairings in enumerate(rounds, start=1)
        for team1, team2 in round_pairings
    ]
    _, opponents = count_meetings(rounds)
    logger.info(
        "Generated %d matches over %d rounds for %d players (%s, max opponent meetings %d)",
        len(schedule),
        len(rounds),
        len(order),
        strategy.name,
        max(opponents.values(), default=0),
    )
    return schedule
