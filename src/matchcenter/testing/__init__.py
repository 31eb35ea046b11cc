"""Testing module for Match Center.

This module provides development testing functionality including:
- Random Tournament Generator (RTG)
- Structural schedule checks
- Benchmarking

Use the unified CLI: matchcenter-test
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

from matchcenter.testing.checks import CheckResult, run_checks
from matchcenter.testing.rtg import RandomTournamentGenerator, ResultPattern, RTGConfig

__all__ = [
    "CheckResult",
    "RandomTournamentGenerator",
    "RTGConfig",
    "ResultPattern",
    "run_checks",
]
