"""Shared utilities for Match Center."""

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

import logging
import os

from matchcenter.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

_ROOT_LOGGER_NAME = "matchcenter"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> logging.Logger:
    """Attach a single stream handler to the package root logger."""
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)

    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    root.setLevel(level)
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the Match Center root logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Configured logger
    """
    _configure_root_logger()
    return logging.getLogger(name)


__all__ = ["setup_logger"]
