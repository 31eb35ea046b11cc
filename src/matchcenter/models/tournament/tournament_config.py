"""TournamentConfig data class."""

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
from typing import Any, Dict

from matchcenter.constants import (
    DEFAULT_AMERICANO_POINTS,
    DEFAULT_COURTS,
    DEFAULT_SETS_TO_PLAY,
    PLAYOFF_MANUAL,
    PLAYOFF_MODES,
    SCORING_AMERICANO,
    SCORING_MODES,
    SCORING_SETS,
)
from matchcenter.exceptions import InvalidConfigurationException
from matchcenter.type_hints import PlayoffMode, ScoringMode
from matchcenter.utils.validation import validate_positive, validate_sets_to_play


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    scoring_mode : str
        ``"sets"`` or ``"americano"``.
    sets_to_play : int
        Best-of count for set scoring (1, 3 or 5).
    americano_points : int
        Fixed point total per match for americano scoring.
    courts : int
        Number of courts available (at least 1).
    use_handicap : bool
        Keep player handicaps; when False they are reset to 0.
    playoff_mode : str
        ``"manual"`` (empty bracket filled by hand) or ``"seeded"``.
    tournament_over : bool
        Indicates whether the tournament is complete.
    """

    scoring_mode: ScoringMode = SCORING_SETS
    sets_to_play: int = DEFAULT_SETS_TO_PLAY
    americano_points: int = DEFAULT_AMERICANO_POINTS
    courts: int = DEFAULT_COURTS
    use_handicap: bool = False
    playoff_mode: PlayoffMode = PLAYOFF_MANUAL
    # Is the tournament complete?
    tournament_over: bool = False

    @property
    def is_americano(self) -> bool:
        return self.scoring_mode == SCORING_AMERICANO

    def validate(self) -> None:
        """Check every setting.

        Raises:
            InvalidConfigurationException: On the first invalid setting
        """
        if self.scoring_mode not in SCORING_MODES:
            raise InvalidConfigurationException(
                f"Unknown scoring mode: {self.scoring_mode}"
            )
        if self.playoff_mode not in PLAYOFF_MODES:
            raise InvalidConfigurationException(
                f"Unknown playoff mode: {self.playoff_mode}"
            )
        for result in (
            validate_positive(self.courts, "Courts"),
            validate_positive(self.americano_points, "Americano points"),
            validate_sets_to_play(self.sets_to_play),
        ):
            if not result:
                raise InvalidConfigurationException(result.error_message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "scoring_mode": self.scoring_mode,
            "sets_to_play": self.sets_to_play,
            "americano_points": self.americano_points,
            "courts": self.courts,
            "use_handicap": self.use_handicap,
            "playoff_mode": self.playoff_mode,
            "tournament_over": self.tournament_over,
        }
