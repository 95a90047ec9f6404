"""Data model for a tournament player."""

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

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List


@dataclass(frozen=True, eq=False)
class Player:
    """A player taking part in Americano tournaments.

    Attributes
    ----------
    name : str
        Display name, used for presentation only.
    id : str
        Opaque identifier. Identity and equality use the id alone.
    """

    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(name=data.get("name", ""), id=str(data["id"]))


def player_ids(players: Iterable[Player]) -> List[str]:
    """Return the ids of ``players`` in order."""
    return [p.id for p in players]
