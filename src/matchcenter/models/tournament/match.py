"""Data model for a single scheduled match."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from matchcenter.models.player import Player
from matchcenter.type_hints import MaybeSide, Score


class MatchState(Enum):
    """Lifecycle of a match: sides assigned, then a score entered."""

    NEEDS_TEAMS = "needs_teams"
    READY = "ready"
    COMPLETED = "completed"


@dataclass(eq=False)
class Match:
    """One match on the schedule.

    Attributes
    ----------
    round : int
        1-based round number, used for display order.
    court : int
        1-based court number.
    team_a : Team, PlayerPair or None
        Side A; None while a bracket slot is still empty.
    team_b : Team, PlayerPair or None
        Side B.
    score : SetsScore, PointsScore or None
        None until a result is recorded. Once set the match is completed and
        counts towards the ranking.
    """

    round: int
    court: int
    team_a: MaybeSide = None
    team_b: MaybeSide = None
    score: Optional[Score] = None

    @property
    def is_completed(self) -> bool:
        return self.score is not None

    @property
    def has_both_sides(self) -> bool:
        return self.team_a is not None and self.team_b is not None

    @property
    def state(self) -> MatchState:
        if self.score is not None:
            return MatchState.COMPLETED
        if self.has_both_sides:
            return MatchState.READY
        return MatchState.NEEDS_TEAMS

    @property
    def lone_side(self) -> MaybeSide:
        """The only assigned side, or None when zero or two are assigned."""
        if self.team_a is not None and self.team_b is None:
            return self.team_a
        if self.team_b is not None and self.team_a is None:
            return self.team_b
        return None

    def get_side(self, side: str) -> MaybeSide:
        return self.team_a if side == "A" else self.team_b

    def set_side(self, side: str, value: MaybeSide) -> None:
        if side == "A":
            self.team_a = value
        else:
            self.team_b = value

    def winner(self) -> MaybeSide:
        """Side that won the recorded score; None if unplayed or tied."""
        if self.score is None:
            return None
        winning = self.score.winner()
        if winning is None:
            return None
        return self.get_side(winning)

    @property
    def players(self) -> List[Player]:
        """Every player on either side."""
        result: List[Player] = []
        for side in (self.team_a, self.team_b):
            if side is not None:
                result.extend(side.players)
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "round": self.round,
            "court": self.court,
            "team_a": self.team_a.to_dict() if self.team_a is not None else None,
            "team_b": self.team_b.to_dict() if self.team_b is not None else None,
            "score": self.score.to_dict() if self.score is not None else None,
            "state": self.state.value,
        }
