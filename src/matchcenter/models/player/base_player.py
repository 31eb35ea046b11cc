"""A racquet-sport player registered for a tournament."""

# Match Center
# Copyright (C) 2025  Match Center developers
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
from typing import Any, Dict


def generate_id() -> str:
    """Return a new opaque identifier."""
    return uuid.uuid4().hex


@dataclass(eq=False)
class Player:
    """
    A registered player.

    Identity is by ``id`` only: two players may share a name.

    Attributes
    ----------
    name : str
        Display name, never empty.
    handicap : int
        Organiser-assigned handicap. Reset to 0 when a tournament is
        created without handicaps.
    id : str
        Unique opaque identifier.

    Examples
    --------
    Creating a player::

        player = Player(name="Ana", handicap=1)
    """

    name: str
    handicap: int = 0
    id: str = field(default_factory=generate_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"id": self.id, "name": self.name, "handicap": self.handicap}
