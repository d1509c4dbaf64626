"""
Rule constants for one table.

Mus is played with many house variants; every number that differs between
them lives here so a table can be configured without touching the engine.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class RulesConfig:
    # Ledger: raw units (piedras) -> match points (amarracos) -> games (vacas)
    units_per_match_point: int = 5
    match_points_to_win: int = 8
    games_to_win_tournament: int = 3
    # Flag a team "adentro" once it holds this many raw units in the match.
    adentro_threshold: int = 35

    # Betting
    all_in_amount: int = 40
    pass_reward: int = 1
    deje_reward: int = 1
    default_raise: int = 2
    raise_again_increment: int = 2

    # Narrative log and companion signals
    log_capacity: int = 8
    signal_duration: float = 3.0
    signals_enabled: bool = True

    def __post_init__(self) -> None:
        positive = (
            "units_per_match_point",
            "match_points_to_win",
            "games_to_win_tournament",
            "all_in_amount",
            "default_raise",
            "raise_again_increment",
            "log_capacity",
        )
        for name in positive:
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.pass_reward < 0 or self.deje_reward < 0:
            raise ValueError("rewards cannot be negative")
        if self.default_raise >= self.all_in_amount:
            raise ValueError("default_raise must be below all_in_amount")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RulesConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown rule keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def units_per_match(self) -> int:
        """Raw units a team needs to win a match on points."""
        return self.units_per_match_point * self.match_points_to_win


DEFAULT_RULES = RulesConfig()
