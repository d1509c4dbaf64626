"""Tests for table rule configuration."""
import pytest

from mus.config import DEFAULT_RULES, RulesConfig


def test_defaults():
    assert DEFAULT_RULES.units_per_match_point == 5
    assert DEFAULT_RULES.match_points_to_win == 8
    assert DEFAULT_RULES.games_to_win_tournament == 3
    assert DEFAULT_RULES.all_in_amount == 40
    assert DEFAULT_RULES.units_per_match == 40


def test_from_dict_and_back():
    rules = RulesConfig.from_dict({"match_points_to_win": 4, "signals_enabled": False})
    assert rules.match_points_to_win == 4
    assert not rules.signals_enabled
    assert RulesConfig.from_dict(rules.to_dict()) == rules


def test_unknown_key_rejected():
    with pytest.raises(ValueError):
        RulesConfig.from_dict({"vacas": 3})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"units_per_match_point": 0},
        {"pass_reward": -1},
        {"default_raise": 40},
        {"log_capacity": 0},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        RulesConfig(**kwargs)
