"""Score value objects for set-based and point-based scoring."""

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
from typing import Any, Dict, Tuple

from matchcenter.type_hints import SetGames, WinningSide


def _compare(value_a: int, value_b: int) -> WinningSide:
    if value_a > value_b:
        return "A"
    if value_b > value_a:
        return "B"
    return None


@dataclass(frozen=True)
class SetsScore:
    """Games per set, one ``(games_a, games_b)`` tuple per set played.

    Attributes
    ----------
    sets : tuple of (int, int)
        Sets in the order they were played. ``(0, 0)`` sets are never stored.
    """

    sets: Tuple[SetGames, ...]

    def sets_won(self) -> Tuple[int, int]:
        """Number of sets won by each side."""
        won_a = sum(1 for a, b in self.sets if a > b)
        won_b = sum(1 for a, b in self.sets if b > a)
        return won_a, won_b

    def games(self) -> Tuple[int, int]:
        """Total games won by each side over all sets."""
        return sum(a for a, _ in self.sets), sum(b for _, b in self.sets)

    def winner(self) -> WinningSide:
        """The side that won strictly more sets, None when level."""
        return _compare(*self.sets_won())

    def to_dict(self) -> Dict[str, Any]:
        return {"sets": [list(s) for s in self.sets]}


@dataclass(frozen=True)
class PointsScore:
    """Americano points; both sides always add up to the configured total."""

    points_a: int
    points_b: int

    @property
    def total(self) -> int:
        return self.points_a + self.points_b

    def games(self) -> Tuple[int, int]:
        """Points double as games for the ranking counters."""
        return self.points_a, self.points_b

    def winner(self) -> WinningSide:
        """The side with more points, None for a tie."""
        return _compare(self.points_a, self.points_b)

    def to_dict(self) -> Dict[str, Any]:
        return {"points": [self.points_a, self.points_b]}
