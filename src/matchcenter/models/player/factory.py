"""Factory helpers for creating Player objects with validation.

This module provides a single point of entry for creating players, including
bulk import from a pasted list of names.
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

import re
from typing import Iterable, List, Optional

from matchcenter.exceptions import InvalidPlayerDataException
from matchcenter.models.player.base_player import Player
from matchcenter.utils import setup_logger
from matchcenter.utils.validation import validate_handicap, validate_name_strict

logger = setup_logger(__name__)

# "1. Ana", "2) Bea", "3 - Cris", "4: Dani"
_LIST_NUMBERING = re.compile(r"^\d+\s*[.)\-:]?\s*")
_NAME_SEPARATORS = re.compile(r"[,\n]+")


def create_player(
    name: str, handicap: int = 0, player_id: Optional[str] = None
) -> Player:
    """Create a validated player.

    Args:
        name: Player's name (surrounding whitespace is stripped)
        handicap: Integer handicap
        player_id: Explicit ID, a random one is generated when omitted

    Returns:
        New Player

    Raises:
        InvalidPlayerDataException: If the name is empty or the handicap not an integer
    """
    clean_name = validate_name_strict(name)
    handicap_result = validate_handicap(handicap)
    if not handicap_result:
        raise InvalidPlayerDataException(handicap_result.error_message)

    if player_id is None:
        return Player(name=clean_name, handicap=handicap)
    return Player(name=clean_name, handicap=handicap, id=player_id)


def parse_player_list(text: str, existing: Iterable[Player] = ()) -> List[Player]:
    """Create players from a pasted list of names.

    Names are separated by commas or line breaks. Leading list numbering is
    dropped, and names already registered (case-insensitive) are skipped.

    Args:
        text: Raw text as pasted by the organiser
        existing: Players already registered

    Returns:
        Newly created players, in input order
    """
    known = {p.name.lower() for p in existing}
    created: List[Player] = []

    for chunk in _NAME_SEPARATORS.split(text or ""):
        name = _LIST_NUMBERING.sub("", chunk.strip()).strip()
        if not name or name.lower() in known:
            continue
        known.add(name.lower())
        created.append(create_player(name))

    logger.info(f"Imported {len(created)} players from list")
    return created
