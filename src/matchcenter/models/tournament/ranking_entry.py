"""Standings row produced by the ranking engines."""

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
from typing import Any, Dict, Hashable


@dataclass
class RankingEntry:
    """Aggregated statistics for one team or player.

    ``points`` is the ranking score of player-based and ladder standings.
    ``total_points`` holds americano points including the win/tie bonus.
    """

    key: Hashable
    name: str
    matches: int = 0
    wins: int = 0
    losses: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    games_won: int = 0
    games_lost: int = 0
    total_points: int = 0
    points: int = 0

    @property
    def set_diff(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def game_diff(self) -> int:
        return self.games_won - self.games_lost

    @property
    def avg_points(self) -> float:
        """Americano points per match played, 0 before the first match."""
        if self.matches == 0:
            return 0.0
        return self.total_points / self.matches

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": sorted(self.key) if isinstance(self.key, frozenset) else self.key,
            "name": self.name,
            "matches": self.matches,
            "wins": self.wins,
            "losses": self.losses,
            "sets_won": self.sets_won,
            "sets_lost": self.sets_lost,
            "set_diff": self.set_diff,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "game_diff": self.game_diff,
            "total_points": self.total_points,
            "points": self.points,
            "avg_points": round(self.avg_points, 2),
        }
