"""
Bot personality profiles.

Each trait is an integer 0..10:
- boldness: willingness to go all-in and to accept big stakes
- bluffing: how often the hand is talked up beyond its real value
- luck: reliance on luck; adds upward variance to every read
- cut_tendency: inclination to cut the mus instead of asking for cards
- signal_reading: how much a partner's companion signal is trusted
- deliberation: thinking before acting; reduces random noise
- fairness: clean play; damps bluffing
- aggression_high: appetite for betting High, Pairs and Game
- aggression_low: appetite for betting Low and Point
"""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass, fields
from typing import Dict

TRAIT_MIN = 0
TRAIT_MAX = 10


@dataclass(frozen=True)
class Personality:
    boldness: int = 5
    bluffing: int = 5
    luck: int = 5
    cut_tendency: int = 5
    signal_reading: int = 5
    deliberation: int = 5
    fairness: int = 5
    aggression_high: int = 5
    aggression_low: int = 5

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not TRAIT_MIN <= value <= TRAIT_MAX:
                raise ValueError(f"Trait {f.name}={value} outside {TRAIT_MIN}..{TRAIT_MAX}")

    def traits(self) -> Dict[str, int]:
        return asdict(self)


PRESET_PERSONALITIES: Dict[str, Personality] = {
    "reckless": Personality(
        boldness=8, bluffing=6, luck=5, cut_tendency=3, signal_reading=2,
        deliberation=2, fairness=3, aggression_high=6, aggression_low=4,
    ),
    "prudent": Personality(
        boldness=5, bluffing=3, luck=6, cut_tendency=9, signal_reading=8,
        deliberation=9, fairness=9, aggression_high=8, aggression_low=3,
    ),
    "bluffer": Personality(
        boldness=9, bluffing=8, luck=6, cut_tendency=4, signal_reading=5,
        deliberation=4, fairness=2, aggression_high=7, aggression_low=4,
    ),
    "steady": Personality(
        boldness=6, bluffing=3, luck=6, cut_tendency=6, signal_reading=5,
        deliberation=6, fairness=7, aggression_high=6, aggression_low=5,
    ),
    "lucky": Personality(
        boldness=7, bluffing=4, luck=9, cut_tendency=6, signal_reading=5,
        deliberation=6, fairness=10, aggression_high=8, aggression_low=2,
    ),
    "daring": Personality(
        boldness=9, bluffing=9, luck=7, cut_tendency=7, signal_reading=4,
        deliberation=3, fairness=5, aggression_high=9, aggression_low=1,
    ),
    "careful": Personality(
        boldness=4, bluffing=2, luck=4, cut_tendency=8, signal_reading=7,
        deliberation=8, fairness=10, aggression_high=7, aggression_low=3,
    ),
    "watchful": Personality(
        boldness=5, bluffing=4, luck=5, cut_tendency=9, signal_reading=10,
        deliberation=7, fairness=9, aggression_high=8, aggression_low=4,
    ),
}


def random_personality(rng: random.Random) -> Personality:
    """An erratic character: every trait drawn uniformly from 1..10."""
    return Personality(**{f.name: rng.randint(1, TRAIT_MAX) for f in fields(Personality)})
