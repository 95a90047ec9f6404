"""Plain data records exchanged with the storage and UI collaborators."""

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

from americanopairing.models.match import Match, matches_by_round, players_in_schedule
from americanopairing.models.player import Player, player_ids
from americanopairing.models.tournament_config import TournamentConfig

__all__ = [
    "Match",
    "Player",
    "TournamentConfig",
    "matches_by_round",
    "player_ids",
    "players_in_schedule",
]
