"""Tests for the scoring ledger and showdown."""
import random
from dataclasses import replace

from mus.config import DEFAULT_RULES, RulesConfig
from mus.constants import Phase, Team
from mus.scoring import (
    Ledger,
    TeamScore,
    add_units,
    award_game,
    award_units,
    new_match,
    phase_winner,
    tournament_won,
)
from tables import PLAIN_HANDS, hand, table


def test_unit_conversion_is_lossless():
    rng = random.Random(9)
    score = TeamScore()
    for _ in range(30):
        score = add_units(score, rng.randint(0, 4), DEFAULT_RULES)
        assert score.units < 5
        assert score.units + 5 * score.match_points == score.units_awarded


def test_match_won_at_eight_points():
    ledger = Ledger(a=TeamScore(units=3, match_points=7))
    award = award_units(ledger, Team.A, 1, DEFAULT_RULES)
    assert not award.match_won
    award = award_units(award.ledger, Team.A, 1, DEFAULT_RULES)
    assert award.match_won
    assert award.ledger.a.match_points == 8
    assert award.ledger.b == TeamScore()


def test_adentro_flag():
    score = add_units(TeamScore(), 34, DEFAULT_RULES)
    assert not score.adentro
    score = add_units(score, 1, DEFAULT_RULES)
    assert score.adentro


def test_games_survive_new_match():
    ledger = award_game(Ledger(a=TeamScore(units=2, match_points=5)), Team.A)
    ledger = new_match(ledger)
    assert ledger.a == TeamScore(games=1)
    assert not tournament_won(ledger, Team.A, DEFAULT_RULES)
    ledger = award_game(award_game(ledger, Team.A), Team.A)
    assert tournament_won(ledger, Team.A, DEFAULT_RULES)


def test_custom_conversion_threshold():
    rules = RulesConfig(units_per_match_point=3, match_points_to_win=2)
    award = award_units(Ledger(), Team.B, 6, rules)
    assert award.match_won
    assert award.ledger.b.match_points == 2 and award.ledger.b.units == 0


def test_phase_winner_and_tie():
    state = table(PLAIN_HANDS)
    assert phase_winner(state.players, Phase.HIGH) is Team.B
    assert phase_winner(state.players, Phase.LOW) is None  # aces on both teams
    assert phase_winner(state.players, Phase.POINT) is Team.B
    assert phase_winner(state.players, Phase.PAIRS) is None


def test_team_without_eligible_player_loses():
    state = table(["AO AC 5O 7O", "2C 4C 5C 6C", "AE 4E 6E 7E", "3B 4B 5B 6B"])
    # Only seat 0 (team A) has pairs.
    assert phase_winner(state.players, Phase.PAIRS) is Team.A
    players = (replace(state.players[0], hand=hand("AO 4O 5O 7O")),) + state.players[1:]
    assert phase_winner(players, Phase.PAIRS) is None
