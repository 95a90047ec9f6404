"""Greedy Americano schedule construction."""

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
from collections import Counter
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Set, Tuple

from americanopairing.constants import (
    DEFAULT_BALANCE_PASSES,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_RESTARTS,
    DEFAULT_OPPONENT_THRESHOLD,
    STRATEGY_GREEDY,
)
from americanopairing.exceptions import ScheduleIncompleteError
from americanopairing.pairing.base import ScheduleStrategy, count_meetings, cross_pairs
from americanopairing.pairing.universe import PairingUniverse, pair_key
from americanopairing.type_hints import PairKey, PlayerId, RoundPairings, Team
from americanopairing.utils import setup_logger

logger = setup_logger(__name__)

# Extra cost per meeting above the opponent threshold
OVER_THRESHOLD_PENALTY = 50


def circle_factorization(player_ids: Sequence[PlayerId]) -> List[List[Team]]:
    """Split all pairs of ``player_ids`` into rounds of disjoint pairs.

    Circle method: the last player stays put and meets position ``r``, the
    others pair up symmetrically around ``r``. Every pair appears in exactly
    one of the ``n - 1`` rounds and every player once per round.
    """
    hub = player_ids[-1]
    ring = player_ids[:-1]
    size = len(ring)
    factors = []
    for r in range(size):
        factor = [(hub, ring[r])]
        for offset in range(1, len(player_ids) // 2):
            factor.append((ring[(r + offset) % size], ring[(r - offset) % size]))
        factors.append(factor)
    return factors


def binary_factorization(player_ids: Sequence[PlayerId]) -> List[List[Team]]:
    """Pair positions ``i`` and ``i ^ r`` in round ``r``.

    Only defined when the number of players is a power of two.
    """
    size = len(player_ids)
    return [
        [(player_ids[i], player_ids[i ^ r]) for i in range(size) if i < i ^ r]
        for r in range(1, size)
    ]


def halving_factorization(
    player_ids: Sequence[PlayerId], rng: random.Random
) -> List[List[Team]]:
    """Split the players in two halves and factorize the parts separately.

    Rounds inside the halves combine one circle round of each half; the
    remaining rounds pair every player with someone from the other half.
    """
    half = len(player_ids) // 2
    left, right = list(player_ids[:half]), list(player_ids[half:])
    left_rounds = circle_factorization(left)
    right_rounds = circle_factorization(right)
    rng.shuffle(right_rounds)
    factors = [a + b for a, b in zip(left_rounds, right_rounds)]
    for shift in range(half):
        factors.append([(left[i], right[(i + shift) % half]) for i in range(half)])
    return factors


def _mates(factor: List[Team]) -> Dict[PlayerId, PlayerId]:
    mates = {}
    for a, b in factor:
        mates[a] = b
        mates[b] = a
    return mates


def _pairs_of(mates: Dict[PlayerId, PlayerId]) -> List[Team]:
    pairs = []
    seen: Set[PlayerId] = set()
    for player, mate in mates.items():
        if player not in seen:
            seen.update((player, mate))
            pairs.append((player, mate))
    return pairs


def switch_factors(factors: List[List[Team]], rng: random.Random, count: int) -> None:
    """Trade pairs between random rounds of a factorization, in place.

    The pairs of two rounds form alternating cycles. Swapping the pairs of
    one cycle between the two rounds keeps every pair in exactly one round
    and every player once per round.
    """
    if len(factors) < 2:
        return
    for _ in range(count):
        a, b = rng.sample(range(len(factors)), 2)
        mates_a = _mates(factors[a])
        mates_b = _mates(factors[b])
        start = rng.choice(list(mates_a))
        cycle = []
        player = start
        while True:
            cycle.append(player)
            cycle.append(mates_a[player])
            player = mates_b[mates_a[player]]
            if player == start:
                break
        for player in cycle:
            mates_a[player], mates_b[player] = mates_b[player], mates_a[player]
        factors[a] = _pairs_of(mates_a)
        factors[b] = _pairs_of(mates_b)


def exposure_order(
    candidates: Sequence[Team], opponent_counts: "Counter[PairKey]"
) -> List[Team]:
    """Sort partner pairs by the opponent meetings touching either player.

    A meeting between the two partners counts once. Ties keep input order.
    """
    totals: "Counter[PlayerId]" = Counter()
    for key, count in opponent_counts.items():
        for player_id in key:
            totals[player_id] += count

    def exposure(pair: Team) -> int:
        a, b = pair
        return totals[a] + totals[b] - opponent_counts[pair_key(a, b)]

    return sorted(candidates, key=exposure)


def meeting_cost(count: int, threshold: int) -> int:
    """Convex cost of a pair having met ``count`` times."""
    return count * count + OVER_THRESHOLD_PENALTY * max(0, count - threshold)


class _ScheduleRun:
    """State of one construction run.

    Holds the remaining partner pool, the opponent counter and the used
    partnerships so that nothing is shared between runs.
    """

    def __init__(
        self,
        player_ids: Sequence[PlayerId],
        factors: List[List[Team]],
        rng: random.Random,
        max_attempts: int,
        threshold: int,
        balance_passes: int,
    ) -> None:
        self.player_ids = list(player_ids)
        self.rng = rng
        self.max_attempts = max_attempts
        self.threshold = threshold
        self.balance_passes = balance_passes

        self.factors = list(factors)
        self.rng.shuffle(self.factors)
        self.remaining: Set[PairKey] = set(PairingUniverse(self.player_ids).keys())
        self.opponent_counts: "Counter[PairKey]" = Counter()
        self.used_partners: Set[PairKey] = set()
        self.rounds: List[RoundPairings] = []
        self.attempts = 0

    # --- construction ---

    def run(self) -> List[RoundPairings]:
        """Build rounds until the partner pool is empty or the budget is spent."""
        while self.remaining and self.attempts < self.max_attempts:
            self.attempts += 1
            candidates = self._next_candidates()
            if not candidates:
                break
            round_pairings = self._build_round(candidates)
            if not round_pairings:
                break
            self.rounds.append(round_pairings)

        if self.remaining:
            logger.debug(
                "Run stopped with %d partnerships left after %d attempts",
                len(self.remaining),
                self.attempts,
            )
        return self.rounds

    def _next_candidates(self) -> List[Team]:
        while self.factors:
            factor = self.factors.pop()
            candidates = [p for p in factor if pair_key(*p) in self.remaining]
            if candidates:
                return candidates
        return []

    def _encounters(self, team1: Team, team2: Team) -> Tuple[int, int]:
        counts = [self.opponent_counts[key] for key in cross_pairs(team1, team2)]
        return sum(counts), max(counts)

    def _build_round(self, candidates: List[Team]) -> RoundPairings:
        """Greedily group the round's partner pairs into matches.

        Pairs with the least opponent exposure are scanned first; each is
        matched with the remaining pair it has met least. A pair with no
        valid opponent is deferred.
        """
        pool = exposure_order(candidates, self.opponent_counts)
        placed: Set[PlayerId] = set()
        round_pairings: RoundPairings = []

        i = 0
        while i < len(pool):
            team1 = pool[i]
            key = pair_key(*team1)
            if team1[0] in placed or team1[1] in placed or key in self.used_partners:
                i += 1
                continue

            best_index = -1
            best_score: Optional[Tuple[int, int]] = None
            for j, team2 in enumerate(pool):
                if j == i or team2[0] in placed or team2[1] in placed:
                    continue
                if set(team1) & set(team2):
                    continue
                if pair_key(*team2) in self.used_partners:
                    continue
                score = self._encounters(team1, team2)
                if best_score is None or score < best_score:
                    best_score = score
                    best_index = j

            if best_index == -1:
                # Defer to a later round
                i += 1
                continue

            team2 = pool[best_index]
            self._commit(team1, team2, placed)
            round_pairings.append((team1, team2))
            for index in sorted((i, best_index), reverse=True):
                del pool[index]
            if best_index < i:
                i -= 1

        return round_pairings

    def _commit(self, team1: Team, team2: Team, placed: Set[PlayerId]) -> None:
        placed.update(team1)
        placed.update(team2)
        for team in (team1, team2):
            key = pair_key(*team)
            self.remaining.discard(key)
            self.used_partners.add(key)
        self.opponent_counts.update(cross_pairs(team1, team2))

    # --- balancing ---

    def balance(self) -> int:
        """Regroup partner pairs inside rounds while it lowers opponent repeats.

        Two matches ``P1-P2`` and ``P3-P4`` of one round can be played as
        ``P1-P3, P2-P4`` or ``P1-P4, P2-P3`` without touching partnerships.

        Returns:
            Number of regroupings applied
        """
        moves = 0
        for _ in range(self.balance_passes):
            improved = False
            for round_pairings in self.rounds:
                for x, y in combinations(range(len(round_pairings)), 2):
                    if self._try_regroup(round_pairings, x, y):
                        improved = True
                        moves += 1
            if not improved:
                break
        return moves

    def _regroup_delta(
        self, old: List[Tuple[Team, Team]], new: List[Tuple[Team, Team]]
    ) -> int:
        change: Dict[PairKey, int] = {}
        for team1, team2 in old:
            for key in cross_pairs(team1, team2):
                change[key] = change.get(key, 0) - 1
        for team1, team2 in new:
            for key in cross_pairs(team1, team2):
                change[key] = change.get(key, 0) + 1
        delta = 0
        for key, diff in change.items():
            if diff:
                count = self.opponent_counts[key]
                delta += meeting_cost(count + diff, self.threshold) - meeting_cost(
                    count, self.threshold
                )
        return delta

    def _try_regroup(self, round_pairings: RoundPairings, x: int, y: int) -> bool:
        p1, p2 = round_pairings[x]
        p3, p4 = round_pairings[y]
        old = [(p1, p2), (p3, p4)]
        best_delta = 0
        best_new = None
        for new in ([(p1, p3), (p2, p4)], [(p1, p4), (p2, p3)]):
            delta = self._regroup_delta(old, new)
            if delta < best_delta:
                best_delta = delta
                best_new = new
        if best_new is None:
            return False

        for team1, team2 in old:
            self.opponent_counts.subtract(cross_pairs(team1, team2))
        for team1, team2 in best_new:
            self.opponent_counts.update(cross_pairs(team1, team2))
        round_pairings[x], round_pairings[y] = best_new
        return True

    # --- search ---

    def search(self) -> bool:
        """Regroup every round by depth-first search within the threshold.

        Partner pairs stay in their rounds; one match is placed per step and
        the search stops after ``max_attempts`` steps, leaving the run as it
        was.

        Returns:
            True if a grouping within the threshold replaced the rounds
        """
        teams = [[team for match in rp for team in match] for rp in self.rounds]
        counts: "Counter[PairKey]" = Counter()
        grouped: List[RoundPairings] = [[] for _ in teams]
        steps = 0

        def place(index: int, open_teams: List[Team]) -> bool:
            nonlocal steps
            if not open_teams:
                if index + 1 == len(teams):
                    return True
                return place(index + 1, teams[index + 1])
            team1, rest = open_teams[0], open_teams[1:]
            options = sorted(
                rest, key=lambda t: sum(counts[k] for k in cross_pairs(team1, t))
            )
            for team2 in options:
                cross = cross_pairs(team1, team2)
                if any(counts[key] >= self.threshold for key in cross):
                    continue
                steps += 1
                if steps > self.max_attempts:
                    return False
                counts.update(cross)
                grouped[index].append((team1, team2))
                if place(index, [t for t in rest if t != team2]):
                    return True
                counts.subtract(cross)
                grouped[index].pop()
            return False

        if not teams or not place(0, teams[0]):
            logger.debug("Regrouping search gave up after %d steps", steps)
            return False
        self.rounds = grouped
        self.opponent_counts = +counts
        return True

    # --- summary ---

    @property
    def complete(self) -> bool:
        return not self.remaining

    @property
    def max_opponent_meetings(self) -> int:
        return max(self.opponent_counts.values(), default=0)


class GreedySearch(ScheduleStrategy):
    """Greedy round-by-round construction with bounded reshuffled retries.

    Partner pairs of each round come from a factorization of the shuffled
    players into rounds, so every run places every partnership; the greedy
    step, the balancing pass and, when needed, a bounded search decide who
    plays whom. Runs that end over the opponent threshold are retried with a
    new shuffle and a different factorization, and the best run is kept.
    """

    name = STRATEGY_GREEDY

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_restarts: int = DEFAULT_MAX_RESTARTS,
        opponent_threshold: int = DEFAULT_OPPONENT_THRESHOLD,
        balance_passes: int = DEFAULT_BALANCE_PASSES,
    ) -> None:
        self.max_attempts = max_attempts
        self.max_restarts = max_restarts
        self.opponent_threshold = opponent_threshold
        self.balance_passes = balance_passes

    def supports(self, player_count: int) -> bool:
        return True

    @staticmethod
    def factorize(
        player_ids: Sequence[PlayerId], rng: random.Random, attempt: int
    ) -> List[List[Team]]:
        """Partner rounds for one run.

        The first run uses the circle method. When the player count minus one
        is prime, any two circle rounds form a single cycle and switching
        cannot change it, so later runs start from the binary factorization
        (every other run, for power-of-two counts) or from a switched halving
        factorization.
        """
        if attempt == 1:
            return circle_factorization(player_ids)
        size = len(player_ids)
        if attempt % 2 == 0 and size & (size - 1) == 0:
            return binary_factorization(player_ids)
        factors = halving_factorization(player_ids, rng)
        switch_factors(factors, rng, size)
        return factors

    def build_rounds(
        self, player_ids: Sequence[PlayerId], rng: random.Random
    ) -> List[RoundPairings]:
        """Run the greedy builder until a run stays within the threshold.

        Raises:
            ScheduleIncompleteError: If no run placed every partnership
        """
        order = list(player_ids)
        best: Optional[_ScheduleRun] = None
        missing = len(PairingUniverse(order))

        for attempt in range(1, self.max_restarts + 1):
            if attempt > 1:
                rng.shuffle(order)
            run = _ScheduleRun(
                order,
                self.factorize(order, rng, attempt),
                rng,
                max_attempts=self.max_attempts,
                threshold=self.opponent_threshold,
                balance_passes=self.balance_passes,
            )
            run.run()
            if not run.complete:
                missing = min(missing, len(run.remaining))
                logger.warning(
                    "Greedy run %d/%d stalled with %d partnerships unscheduled",
                    attempt,
                    self.max_restarts,
                    len(run.remaining),
                )
                continue

            moves = run.balance()
            if run.max_opponent_meetings > self.opponent_threshold and run.search():
                logger.debug("Greedy run %d regrouped by search", attempt)
            logger.debug(
                "Greedy run %d: max opponent meetings %d after %d regroupings",
                attempt,
                run.max_opponent_meetings,
                moves,
            )
            if best is None or run.max_opponent_meetings < best.max_opponent_meetings:
                best = run
            if best.max_opponent_meetings <= self.opponent_threshold:
                break

        if best is None:
            raise ScheduleIncompleteError(missing, self.max_restarts)

        if best.max_opponent_meetings > self.opponent_threshold:
            logger.warning(
                "Best schedule for %d players has pairs meeting %d times (threshold %d)",
                len(order),
                best.max_opponent_meetings,
                self.opponent_threshold,
            )
        _, opponents = count_meetings(best.rounds)
        logger.info(
            "Greedy schedule for %d players: %d rounds, max opponent meetings %d",
            len(order),
            len(best.rounds),
            max(opponents.values(), default=0),
        )
        return best.rounds
