"""Score validation and recording.

Scores are checked against the tournament's scoring mode before the match is
touched, so a rejected score leaves the tournament unchanged.
"""

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

from typing import Any, List, Optional, Sequence

from matchcenter.exceptions import InvalidScoreException, MatchNotReadyException
from matchcenter.models.tournament import (
    Match,
    PointsScore,
    SetsScore,
    TournamentConfig,
)
from matchcenter.type_hints import Score, SetGames
from matchcenter.utils import setup_logger

logger = setup_logger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


class ResultRecorder:
    """Validates raw score input and writes it onto matches.

    This class is responsible for:
    - Turning organiser input into SetsScore / PointsScore values
    - Enforcing the best-of limit and the americano point total
    - Refusing scores for matches that still miss a side
    """

    def parse_score(self, raw: Any, config: TournamentConfig) -> Score:
        """Build a score value from raw input.

        Args:
            raw: For set scoring, a sequence of ``(games_a, games_b)`` pairs.
                For americano, side A's points as an int, or a one or two
                element sequence where side B may be missing or None.
                Ready-made score objects are validated as well.
            config: Tournament configuration

        Returns:
            Validated score

        Raises:
            InvalidScoreException: If the input does not fit the scoring mode
        """
        if config.is_americano:
            if isinstance(raw, SetsScore):
                raise InvalidScoreException("Americano matches take a points score")
            if isinstance(raw, PointsScore):
                raw = (raw.points_a, raw.points_b)
            return self._parse_points(raw, config.americano_points)

        if isinstance(raw, PointsScore):
            raise InvalidScoreException("Set-scored matches take a list of sets")
        if isinstance(raw, SetsScore):
            raw = raw.sets
        return self._parse_sets(raw, config.sets_to_play)

    def _parse_sets(self, raw: Any, sets_to_play: int) -> SetsScore:
        if not _is_sequence(raw):
            raise InvalidScoreException(f"Expected a list of sets, got {raw!r}")

        sets: List[SetGames] = []
        for entry in raw:
            if not _is_sequence(entry) or len(entry) != 2:
                raise InvalidScoreException(f"A set needs two game counts: {entry!r}")
            games_a, games_b = entry
            if not (_is_int(games_a) and _is_int(games_b)):
                raise InvalidScoreException(f"Game counts must be integers: {entry!r}")
            if games_a < 0 or games_b < 0:
                raise InvalidScoreException(
                    f"Game counts cannot be negative: {entry!r}"
                )
            # a 0-0 set was not played
            if games_a == 0 and games_b == 0:
                continue
            sets.append((games_a, games_b))

        if not sets:
            raise InvalidScoreException("At least one set must be entered")
        if len(sets) > sets_to_play:
            raise InvalidScoreException(
                f"Best of {sets_to_play} allows at most {sets_to_play} sets, "
                f"got {len(sets)}"
            )
        return SetsScore(sets=tuple(sets))

    def _parse_points(self, raw: Any, total: int) -> PointsScore:
        points_b: Optional[int] = None
        if _is_int(raw):
            points_a = raw
        elif _is_sequence(raw) and 1 <= len(raw) <= 2:
            points_a = raw[0]
            if len(raw) == 2:
                points_b = raw[1]
        else:
            raise InvalidScoreException(f"Expected americano points, got {raw!r}")

        if not _is_int(points_a) or not 0 <= points_a <= total:
            raise InvalidScoreException(
                f"Points must be an integer between 0 and {total}, got {points_a!r}"
            )
        if points_b is None:
            points_b = total - points_a
        elif not _is_int(points_b) or points_a + points_b != total:
            raise InvalidScoreException(
                f"Points must add up to {total}, got {points_a!r} and {points_b!r}"
            )
        return PointsScore(points_a=points_a, points_b=points_b)

    def record(self, match: Match, raw: Any, config: TournamentConfig) -> Score:
        """Validate and store a score on a match.

        Raises:
            MatchNotReadyException: If the match does not have both sides
            InvalidScoreException: If the score is malformed
        """
        if not match.has_both_sides:
            raise MatchNotReadyException(
                f"Round {match.round} court {match.court} is missing a side"
            )
        score = self.parse_score(raw, config)

        if match.is_completed:
            logger.warning(
                f"Round {match.round} court {match.court} already has a score, "
                "overwriting it"
            )
        match.score = score
        logger.debug(
            f"Recorded {score.to_dict()} for "
            f"{match.team_a.name} vs {match.team_b.name}"
        )
        return score

    def reset(self, match: Match) -> bool:
        """Clear a match's score.

        Returns:
            False if the match had no score
        """
        if match.score is None:
            logger.warning(
                f"Round {match.round} court {match.court} has no score to reset"
            )
            return False
        match.score = None
        return True
