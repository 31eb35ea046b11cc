import pytest

from matchcenter.constants import (
    AMERICANO_TIE_BONUS,
    AMERICANO_WIN_BONUS,
    MATCH_WIN_POINTS,
    SCORING_AMERICANO,
)
from matchcenter.controllers.tournament import RankingCalculator
from matchcenter.exceptions import InvalidConfigurationException
from matchcenter.models.player import create_player
from matchcenter.models.tournament import (
    Match,
    PlayerPair,
    PointsScore,
    SetsScore,
    Tournament,
    TournamentConfig,
)


@pytest.fixture
def calculator():
    return RankingCalculator()


def _match(side_a, side_b, score):
    return Match(round=1, court=1, team_a=side_a, team_b=side_b, score=score)


def _by_key(ranking):
    return {entry.key: entry for entry in ranking}


def test_team_ranking_orders_by_wins_then_differences(calculator, make_teams):
    a, b, c = make_teams(3)
    schedule = [
        [_match(a, b, SetsScore(((6, 4), (6, 4))))],
        [_match(c, b, SetsScore(((6, 0), (6, 0))))],
        [_match(a, c, SetsScore(((6, 3), (3, 6))))],
    ]

    ranking = calculator.team_ranking(schedule, [a, b, c], americano=False)

    # a and c have one win and equal set difference; c has more games
    assert [e.key for e in ranking] == [c.id, a.id, b.id]
    entries = _by_key(ranking)
    assert (entries[c.id].sets_won, entries[c.id].sets_lost) == (3, 1)
    assert entries[b.id].losses == 2
    assert entries[a.id].matches == 2


def test_unplayed_teams_have_zero_rows(calculator, make_teams):
    a, b, c = make_teams(3)
    schedule = [[_match(a, b, SetsScore(((6, 1),)))], [Match(round=2, court=1)]]

    ranking = calculator.team_ranking(schedule, [a, b, c], americano=False)

    assert len(ranking) == 3
    newcomer = _by_key(ranking)[c.id]
    assert newcomer.matches == 0
    assert newcomer.avg_points == 0.0


def test_pair_counts_for_matching_team(calculator, make_teams):
    a, b = make_teams(2)
    pair = PlayerPair(*a.players)
    schedule = [[_match(pair, b, PointsScore(14, 10))]]

    ranking = calculator.team_ranking(schedule, [a, b], americano=True)

    assert [e.key for e in ranking] == [a.id, b.id]
    assert ranking[0].wins == 1


def test_americano_bonus(calculator, make_players):
    p = make_players(4)
    side_a, side_b = PlayerPair(p[0], p[1]), PlayerPair(p[2], p[3])
    schedule = [[_match(side_a, side_b, PointsScore(15, 9))]]

    ranking = calculator.player_ranking(schedule, p, americano=True)

    entries = _by_key(ranking)
    assert entries[p[0].id].total_points == 15 + AMERICANO_WIN_BONUS
    assert entries[p[2].id].total_points == 9
    assert entries[p[0].id].wins == 1 and entries[p[2].id].losses == 1
    assert [e.key for e in ranking[:2]] == [p[0].id, p[1].id]


def test_americano_tie_bonus(calculator, make_players):
    p = make_players(4)
    schedule = [
        [_match(PlayerPair(p[0], p[1]), PlayerPair(p[2], p[3]), PointsScore(12, 12))]
    ]

    ranking = calculator.player_ranking(schedule, p, americano=True)

    assert {e.total_points for e in ranking} == {12 + AMERICANO_TIE_BONUS}
    assert all(e.wins == 0 and e.losses == 0 for e in ranking)
    # level on everything else, so names decide
    assert [e.name for e in ranking] == ["P01", "P02", "P03", "P04"]


def test_player_sets_points_per_win(calculator, make_players):
    p = make_players(4)
    schedule = [
        [_match(PlayerPair(p[0], p[1]), PlayerPair(p[2], p[3]), SetsScore(((6, 2),)))],
        [_match(PlayerPair(p[0], p[2]), PlayerPair(p[1], p[3]), SetsScore(((6, 4),)))],
    ]

    ranking = calculator.player_ranking(schedule, p, americano=False)

    entries = _by_key(ranking)
    assert entries[p[0].id].points == 2 * MATCH_WIN_POINTS
    assert entries[p[3].id].points == 0
    assert ranking[0].key == p[0].id
    assert ranking[-1].key == p[3].id
    # p1 and p2 both have one win; p1 has the better game difference
    assert [ranking[1].key, ranking[2].key] == [p[1].id, p[2].id]


def test_ladder_orders_by_points_then_wins(calculator, make_players):
    p = make_players(4)
    schedule = [
        [_match(PlayerPair(p[0], p[1]), PlayerPair(p[2], p[3]), PointsScore(11, 13))],
    ]

    tournament = Tournament(
        tournament_format="ladder",
        config=TournamentConfig(scoring_mode=SCORING_AMERICANO),
        players={player.id: player for player in p},
        schedule=schedule,
    )
    ranking = calculator.compute(tournament)

    assert [e.points for e in ranking] == [15, 15, 11, 11]
    assert {ranking[0].key, ranking[1].key} == {p[2].id, p[3].id}


def test_ranking_is_deterministic_with_shared_names(calculator):
    twins = [create_player("Sam"), create_player("Sam"), create_player("sam")]
    ranking = calculator.player_ranking([], twins, americano=False)
    again = calculator.player_ranking([], list(reversed(twins)), americano=False)

    assert [e.key for e in ranking] == [e.key for e in again]
    assert len({e.key for e in ranking}) == 3


def test_playoff_has_no_table(calculator):
    assert calculator.compute(Tournament(tournament_format="playoff")) == []


def test_unknown_format_is_rejected(calculator):
    with pytest.raises(InvalidConfigurationException):
        calculator.compute(Tournament(tournament_format="swiss"))
