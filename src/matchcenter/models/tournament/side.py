"""Match sides: registered teams and transient player pairs."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, Tuple

from matchcenter.constants import (
    BYE_TEAM_ID,
    BYE_TEAM_NAME,
    TEAM_ID_PREFIX,
    TEAM_NAME_SEPARATOR,
)
from matchcenter.models.player import Player


def join_names(players: Tuple[Player, ...]) -> str:
    """Display name for a group of players, e.g. ``"Ana & Bea"``."""
    return TEAM_NAME_SEPARATOR.join(p.name for p in players)


@dataclass(eq=False)
class Team:
    """A registered team.

    Real teams always hold exactly two distinct players. The only exception
    is the BYE sentinel used internally by the round-robin generator, which
    holds none.

    Attributes
    ----------
    id : str
        Unique team identifier.
    name : str
        Display name.
    players : tuple of Player
        Ordered team members.
    """

    id: str
    name: str
    players: Tuple[Player, ...] = field(default_factory=tuple)

    @classmethod
    def from_players(cls, team_id: str, player_a: Player, player_b: Player) -> "Team":
        """Build a team named after its two players."""
        members = (player_a, player_b)
        return cls(id=team_id, name=join_names(members), players=members)

    @property
    def key(self) -> Hashable:
        return self.id

    @property
    def is_bye(self) -> bool:
        return self.id == BYE_TEAM_ID

    @property
    def player_ids(self) -> FrozenSet[str]:
        return frozenset(p.id for p in self.players)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Team):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
        }


@dataclass(frozen=True, eq=False)
class PlayerPair:
    """Two players sharing a side without forming a registered team.

    Used by formats where partners change from match to match.
    """

    player_a: Player
    player_b: Player

    @property
    def players(self) -> Tuple[Player, Player]:
        return (self.player_a, self.player_b)

    @property
    def key(self) -> Hashable:
        return self.player_ids

    @property
    def name(self) -> str:
        return join_names(self.players)

    @property
    def player_ids(self) -> FrozenSet[str]:
        return frozenset((self.player_a.id, self.player_b.id))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerPair):
            return NotImplemented
        return self.player_ids == other.player_ids

    def __hash__(self) -> int:
        return hash(self.player_ids)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pair to dictionary."""
        return {"name": self.name, "players": [p.to_dict() for p in self.players]}


def make_bye_team() -> Team:
    """Sentinel team standing for "no opponent"."""
    return Team(id=BYE_TEAM_ID, name=BYE_TEAM_NAME, players=())


def team_id_for(counter: int) -> str:
    """Team identifier for a running counter value, e.g. ``team3``."""
    return f"{TEAM_ID_PREFIX}{counter}"
