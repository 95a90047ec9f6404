"""Type hints used in Americano Pairing."""

from typing import FrozenSet, List, Optional, Tuple

# Opaque player identifier
PlayerId = str
# Two players on the same side of the net
Team = Tuple[PlayerId, PlayerId]
# Unordered pair of players, used as a counter key
PairKey = FrozenSet[PlayerId]
# (team1 score, team2 score)
Score = Tuple[int, int]
MaybeScore = Optional[Score]
# Matches of one round as (team1, team2)
RoundPairings = List[Tuple[Team, Team]]
# Table positions for one match: (team1 positions, team2 positions)
PatternMatch = Tuple[Tuple[int, int], Tuple[int, int]]

#  LocalWords:  PairKey RoundPairings
