from collections import Counter
from itertools import combinations

import pytest

from matchcenter.controllers.scheduling import circle_rounds, generate_round_robin
from matchcenter.testing.checks import check_concurrent_players, check_courts


def _pairings(schedule):
    return Counter(
        frozenset((m.team_a.id, m.team_b.id)) for matches in schedule for m in matches
    )


def test_four_teams_one_court(make_teams):
    teams = make_teams(4)
    schedule = generate_round_robin(teams, courts=1)

    # three circle rounds of two matches, one match per court round
    assert len(circle_rounds(teams)) == 3
    assert all(len(matches) == 1 for matches in schedule)
    assert len(schedule) == 6
    appearances = Counter(
        side.id
        for matches in schedule
        for m in matches
        for side in (m.team_a, m.team_b)
    )
    assert set(appearances.values()) == {3}


def test_four_teams_two_courts_keeps_circle_rounds(make_teams):
    schedule = generate_round_robin(make_teams(4), courts=2)

    assert len(schedule) == 3
    assert [[m.court for m in matches] for matches in schedule] == [[1, 2]] * 3
    assert check_concurrent_players(schedule).passed


@pytest.mark.parametrize("num_teams", range(2, 10))
def test_every_pair_meets_exactly_once(make_teams, num_teams):
    teams = make_teams(num_teams)
    schedule = generate_round_robin(teams, courts=2)

    seen = _pairings(schedule)
    expected = {frozenset((a.id, b.id)) for a, b in combinations(teams, 2)}
    assert set(seen) == expected
    assert set(seen.values()) == {1}
    assert sum(len(r) for r in schedule) == num_teams * (num_teams - 1) // 2
    assert check_courts(schedule, 2).passed


def test_odd_count_never_schedules_the_bye(make_teams):
    schedule = generate_round_robin(make_teams(5), courts=3)

    for matches in schedule:
        for match in matches:
            assert not match.team_a.is_bye
            assert not match.team_b.is_bye


def test_round_numbers_are_sequential(make_teams):
    schedule = generate_round_robin(make_teams(6), courts=2)

    assert [matches[0].round for matches in schedule] == list(
        range(1, len(schedule) + 1)
    )
    for matches in schedule:
        assert len({m.round for m in matches}) == 1


def test_round_offset_continues_numbering(make_teams):
    schedule = generate_round_robin(make_teams(4), courts=1, round_offset=6)

    assert schedule[0][0].round == 7
    assert schedule[-1][0].round == 12


def test_fewer_than_two_teams_yields_nothing(make_teams):
    assert generate_round_robin(make_teams(1), courts=1) == []
    assert generate_round_robin([], courts=1) == []


def test_circle_rounds_skips_none():
    rounds = circle_rounds(["a", "b", "c", None])

    assert len(rounds) == 3
    assert all(len(pairs) == 1 for pairs in rounds)
    flat = [frozenset(p) for pairs in rounds for p in pairs]
    assert set(flat) == {frozenset("ab"), frozenset("ac"), frozenset("bc")}
