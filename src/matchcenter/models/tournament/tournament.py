"""Tournament aggregate root."""

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
from typing import Any, Dict, Iterator, List, Optional, Tuple

from matchcenter.constants import FORMAT_PLAYOFF
from matchcenter.exceptions import MatchNotFoundException
from matchcenter.models.player import Player
from matchcenter.type_hints import Schedule, TournamentFormat

from .match import Match
from .ranking_entry import RankingEntry
from .side import Team, team_id_for
from .tournament_config import TournamentConfig


@dataclass
class Tournament:
    """State of one tournament.

    The aggregate is plain data. It is created by the orchestrator and every
    mutation goes through the orchestrator's operations, which leave players,
    teams, schedule and scores mutually consistent.

    Attributes
    ----------
    tournament_format : str
        One of ``match``, ``fixed``, ``rotating``, ``free``, ``ladder`` or
        ``playoff``.
    config : TournamentConfig
        Scoring and court settings.
    players : dict
        Registered players by id, in registration order.
    teams : dict
        Registered teams by id (empty for formats without fixed teams).
    league_team_ids : list of str
        Match and fixed only: ids of the teams the round robin was drawn
        between. Teams registered later by manual matches are not listed.
    schedule : list of rounds
        Each round is a list of matches.
    unassigned_players : list of Player
        Playoff only: players not yet placed in a bracket team.
    assigned_players : list of Player
        Playoff only: players already in a bracket team.
    next_team_id : int
        Counter used to mint team ids.
    ranking : list of RankingEntry or None
        Last computed standings; None when the last computation failed.
    """

    tournament_format: TournamentFormat
    config: TournamentConfig = field(default_factory=TournamentConfig)
    players: Dict[str, Player] = field(default_factory=dict)
    teams: Dict[str, Team] = field(default_factory=dict)
    league_team_ids: List[str] = field(default_factory=list)
    schedule: Schedule = field(default_factory=list)
    unassigned_players: List[Player] = field(default_factory=list)
    assigned_players: List[Player] = field(default_factory=list)
    next_team_id: int = 0
    ranking: Optional[List[RankingEntry]] = field(default_factory=list)

    @property
    def is_playoff(self) -> bool:
        return self.tournament_format == FORMAT_PLAYOFF

    @property
    def tournament_over(self) -> bool:
        """Is the tournament over?"""
        return self.config.tournament_over

    @property
    def league_teams(self) -> List[Team]:
        return [self.teams[team_id] for team_id in self.league_team_ids]

    def mint_team_id(self) -> str:
        """Reserve the next free team id."""
        self.next_team_id += 1
        team_id = team_id_for(self.next_team_id)
        while team_id in self.teams:
            self.next_team_id += 1
            team_id = team_id_for(self.next_team_id)
        return team_id

    def get_match(self, round_index: int, match_index: int) -> Match:
        """Look up a match by its position in the schedule.

        Raises:
            MatchNotFoundException: If either index is out of range
        """
        if not 0 <= round_index < len(self.schedule):
            raise MatchNotFoundException(f"No round at index {round_index}")
        matches = self.schedule[round_index]
        if not 0 <= match_index < len(matches):
            raise MatchNotFoundException(
                f"No match at index {match_index} in round {round_index}"
            )
        return matches[match_index]

    def iter_matches(self) -> Iterator[Tuple[int, int, Match]]:
        """Yield ``(round_index, match_index, match)`` in schedule order."""
        for round_index, matches in enumerate(self.schedule):
            for match_index, match in enumerate(matches):
                yield round_index, match_index, match

    def completed_matches(self) -> List[Match]:
        return [m for _, _, m in self.iter_matches() if m.is_completed]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "format": self.tournament_format,
            "config": self.config.to_dict(),
            "players": [p.to_dict() for p in self.players.values()],
            "teams": [t.to_dict() for t in self.teams.values()],
            "league_team_ids": list(self.league_team_ids),
            "schedule": [[m.to_dict() for m in matches] for matches in self.schedule],
            "unassigned_players": [p.id for p in self.unassigned_players],
            "assigned_players": [p.id for p in self.assigned_players],
            "next_team_id": self.next_team_id,
            "ranking": (
                [entry.to_dict() for entry in self.ranking]
                if self.ranking is not None
                else None
            ),
        }
