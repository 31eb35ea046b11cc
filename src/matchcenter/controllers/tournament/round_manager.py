"""Schedule mutation: manual matches, deletion and second legs."""

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

from typing import List, Sequence

from matchcenter.constants import FORMAT_FIXED, FORMAT_ROTATING, MANUAL_FORMATS
from matchcenter.controllers.scheduling import generate_round_robin
from matchcenter.exceptions import InvalidPlayerDataException, TournamentStateException
from matchcenter.models.player import Player
from matchcenter.models.tournament import Match, PlayerPair, Team, Tournament
from matchcenter.type_hints import Side
from matchcenter.utils import setup_logger
from matchcenter.utils.validation import validate_side_selection

logger = setup_logger(__name__)


class RoundManager:
    """Manages changes to a tournament's schedule after generation.

    This class is responsible for:
    - Appending manually chosen matches, each in its own round
    - Deleting matches and collapsing rounds left empty
    - Appending the second leg of a fixed-partner round robin
    """

    def _uses_player_pairs(self, tournament: Tournament) -> bool:
        return (
            tournament.tournament_format == FORMAT_ROTATING
            or tournament.tournament_format in MANUAL_FORMATS
            or tournament.config.is_americano
        )

    def _find_team(self, tournament: Tournament, players: Sequence[Player]) -> Team:
        """Registered team made of exactly these players, or a new one."""
        wanted = frozenset(p.id for p in players)
        for team in tournament.teams.values():
            if team.player_ids == wanted:
                return team

        team = Team.from_players(tournament.mint_team_id(), players[0], players[1])
        tournament.teams[team.id] = team
        logger.info(f"Registered new team {team.name} ({team.id})")
        return team

    def _side_for(self, tournament: Tournament, players: Sequence[Player]) -> Side:
        if self._uses_player_pairs(tournament):
            return PlayerPair(players[0], players[1])
        return self._find_team(tournament, players)

    def add_match(
        self,
        tournament: Tournament,
        side_a_players: Sequence[Player],
        side_b_players: Sequence[Player],
    ) -> Match:
        """Append a match between two hand-picked pairs of players.

        The match gets its own round. Rotating, free, ladder and americano
        tournaments store the pairs as they are; set-scored team formats
        reuse the registered team with the same two players, or register a
        new one.

        Args:
            tournament: Tournament to modify
            side_a_players: Two players for side A
            side_b_players: Two players for side B

        Returns:
            The new match

        Raises:
            TournamentStateException: For playoff brackets
            IncompleteTeamException: If a side does not have two players
            DuplicatePlayerException: If a player is picked twice
            InvalidPlayerDataException: If a player is not registered
        """
        if tournament.is_playoff:
            raise TournamentStateException(
                "Matches cannot be added to a playoff bracket"
            )
        validate_side_selection(
            [p.id for p in side_a_players], [p.id for p in side_b_players]
        )
        for player in list(side_a_players) + list(side_b_players):
            if player.id not in tournament.players:
                raise InvalidPlayerDataException(
                    f"{player.name} is not registered in this tournament"
                )

        match = Match(
            round=len(tournament.schedule) + 1,
            court=1,
            team_a=self._side_for(tournament, side_a_players),
            team_b=self._side_for(tournament, side_b_players),
        )
        tournament.schedule.append([match])
        logger.info(
            f"Added match {match.team_a.name} vs {match.team_b.name} "
            f"as round {match.round}"
        )
        return match

    def delete_match(
        self, tournament: Tournament, round_index: int, match_index: int
    ) -> Match:
        """Remove a match, dropping its round when it becomes empty.

        Raises:
            TournamentStateException: For playoff brackets
            MatchNotFoundException: If the indices do not point at a match
        """
        if tournament.is_playoff:
            raise TournamentStateException(
                "Matches cannot be deleted from a playoff bracket"
            )
        match = tournament.get_match(round_index, match_index)

        matches = tournament.schedule[round_index]
        del matches[match_index]
        if not matches:
            del tournament.schedule[round_index]
        logger.info(f"Deleted round {match.round} court {match.court} match")
        return match

    def add_second_round(self, tournament: Tournament) -> List[List[Match]]:
        """Append a second round robin between the teams of the first one.

        Teams registered later by manual matches are left out. Round numbers
        continue after the current schedule.

        Returns:
            The appended rounds

        Raises:
            TournamentStateException: If the tournament is not fixed-partner
        """
        if tournament.tournament_format != FORMAT_FIXED:
            raise TournamentStateException(
                "A second round is only available for fixed-partner tournaments"
            )
        second_leg = generate_round_robin(
            tournament.league_teams,
            tournament.config.courts,
            round_offset=len(tournament.schedule),
        )
        tournament.schedule.extend(second_leg)
        logger.info(f"Added second round: {len(second_leg)} more rounds")
        return second_leg
