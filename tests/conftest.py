import random

import pytest

from matchcenter.models.player import create_player
from matchcenter.models.tournament import Team, team_id_for
from matchcenter.tournament import TournamentOrchestrator


@pytest.fixture
def make_players():
    def _make(count, prefix="P"):
        return [create_player(f"{prefix}{i:02d}") for i in range(1, count + 1)]

    return _make


@pytest.fixture
def make_teams(make_players):
    def _make(count):
        players = make_players(2 * count)
        return [
            Team.from_players(team_id_for(i + 1), players[2 * i], players[2 * i + 1])
            for i in range(count)
        ]

    return _make


@pytest.fixture
def orchestrator():
    return TournamentOrchestrator(rng=random.Random(7))
