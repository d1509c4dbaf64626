"""
Scoring ledger and showdown.

Raw units (piedras) roll over into match points (amarracos) every
``units_per_match_point``; ``match_points_to_win`` wins the match and one game
marker (vaca); ``games_to_win_tournament`` vacas win the tournament.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, NamedTuple

from .config import RulesConfig
from .constants import Phase, Team
from .evaluation import is_eligible, phase_score


@dataclass(frozen=True)
class TeamScore:
    units: int = 0            # raw units not yet converted
    match_points: int = 0
    games: int = 0            # tournament markers, survive a new match
    units_awarded: int = 0    # every raw unit awarded in the current match
    adentro: bool = False

    def match_units(self, rules: RulesConfig) -> int:
        return self.match_points * rules.units_per_match_point + self.units


@dataclass(frozen=True)
class Ledger:
    a: TeamScore = field(default_factory=TeamScore)
    b: TeamScore = field(default_factory=TeamScore)

    def get(self, team: Team) -> TeamScore:
        return self.a if team is Team.A else self.b

    def with_score(self, team: Team, score: TeamScore) -> "Ledger":
        if team is Team.A:
            return replace(self, a=score)
        return replace(self, b=score)


class Award(NamedTuple):
    ledger: Ledger
    match_won: bool


def add_units(score: TeamScore, units: int, rules: RulesConfig) -> TeamScore:
    """Add raw units and convert every full batch into a match point."""
    if units < 0:
        raise ValueError("Cannot award negative units")
    raw = score.units + units
    points = score.match_points + raw // rules.units_per_match_point
    raw = raw % rules.units_per_match_point
    updated = replace(
        score,
        units=raw,
        match_points=points,
        units_awarded=score.units_awarded + units,
    )
    return replace(updated, adentro=updated.match_units(rules) >= rules.adentro_threshold)


def award_units(ledger: Ledger, team: Team, units: int, rules: RulesConfig) -> Award:
    score = add_units(ledger.get(team), units, rules)
    return Award(
        ledger=ledger.with_score(team, score),
        match_won=score.match_points >= rules.match_points_to_win,
    )


def award_game(ledger: Ledger, team: Team) -> Ledger:
    """One more tournament marker (vaca) for ``team``."""
    score = ledger.get(team)
    return ledger.with_score(team, replace(score, games=score.games + 1))


def tournament_won(ledger: Ledger, team: Team, rules: RulesConfig) -> bool:
    return ledger.get(team).games >= rules.games_to_win_tournament


def new_match(ledger: Ledger) -> Ledger:
    """Clear units and match points, keep the tournament markers."""
    return Ledger(a=TeamScore(games=ledger.a.games), b=TeamScore(games=ledger.b.games))


# ---- Showdown ----


def team_best(players: Iterable, team: Team, phase: Phase) -> int | None:
    """Best phase score among ``team``'s eligible players, or None if none is eligible."""
    scores = [
        phase_score(phase, p.hand)
        for p in players
        if p.team is team and is_eligible(phase, p.hand)
    ]
    return max(scores) if scores else None


def phase_winner(players: Iterable, phase: Phase) -> Team | None:
    """
    Team with the higher best score for ``phase``. A team without eligible
    players loses to one with any; a tie (or nobody eligible) gives None.
    """
    players = list(players)
    best_a = team_best(players, Team.A, phase)
    best_b = team_best(players, Team.B, phase)
    if best_a is None and best_b is None:
        return None
    if best_b is None or (best_a is not None and best_a > best_b):
        return Team.A
    if best_a is None or best_b > best_a:
        return Team.B
    return None
