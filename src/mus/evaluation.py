"""
Hand evaluator: one comparable integer per betting phase, higher is better.

All functions are pure and work on any sequence of 1..4 cards. A hand that is
not eligible for a phase (no pairs, no game, or game when scoring point)
scores 0, which is below every eligible score.
"""
from __future__ import annotations

from collections import Counter
from typing import Sequence

from .constants import PairsCategory, Phase
from .deck import Card
from .errors import HandSizeError

# chica: higher transformed value wins, so the lowest card wins.
LOW_CONSTANT = 11

GAME_THRESHOLD = 31

# Game totals from best to worst. 31 and 32 are the top two, then 40, then the rest downwards.
GAME_RANKING = (31, 32, 40, 39, 38, 37, 36, 35, 34, 33)

_PAIRS_BASE = {
    PairsCategory.PARES: 100,
    PairsCategory.MEDIAS: 200,
    PairsCategory.DUPLES: 300,
}


def _strengths(hand: Sequence[Card]) -> list[int]:
    if not 1 <= len(hand) <= 4:
        raise HandSizeError(f"Hand must hold 1..4 cards, got {len(hand)}")
    return [c.strength for c in hand]


def point_total(hand: Sequence[Card]) -> int:
    """Sum of strengths; the basis of both game and point."""
    return sum(_strengths(hand))


def has_game(hand: Sequence[Card]) -> bool:
    return point_total(hand) >= GAME_THRESHOLD


def high_score(hand: Sequence[Card]) -> int:
    return max(_strengths(hand))


def low_score(hand: Sequence[Card]) -> int:
    return LOW_CONSTANT - min(_strengths(hand))


def pairs_groups(hand: Sequence[Card]) -> tuple[PairsCategory, tuple[int, ...]]:
    """
    Category plus the strengths that make it, highest first.
    Four equal strengths count as duples of that value twice.
    """
    counts = Counter(_strengths(hand))
    repeated = sorted((v for v, n in counts.items() if n >= 2), reverse=True)
    if not repeated:
        return PairsCategory.NONE, ()
    if len(repeated) == 2:
        return PairsCategory.DUPLES, (repeated[0], repeated[1])
    value = repeated[0]
    n = counts[value]
    if n == 4:
        return PairsCategory.DUPLES, (value, value)
    if n == 3:
        return PairsCategory.MEDIAS, (value,)
    return PairsCategory.PARES, (value,)


def pairs_category(hand: Sequence[Card]) -> PairsCategory:
    return pairs_groups(hand)[0]


def has_pairs(hand: Sequence[Card]) -> bool:
    return pairs_category(hand) is not PairsCategory.NONE


def pairs_score(hand: Sequence[Card]) -> int:
    """
    100 + v for pares, 200 + v for medias, 300 + 11*hi + lo for duples.
    Strengths never exceed 10, so categories never overlap.
    """
    category, values = pairs_groups(hand)
    if category is PairsCategory.NONE:
        return 0
    if category is PairsCategory.DUPLES:
        return _PAIRS_BASE[category] + 11 * values[0] + values[1]
    return _PAIRS_BASE[category] + values[0]


def game_score(hand: Sequence[Card]) -> int:
    """Rank in GAME_RANKING mapped to 10 (31) .. 1 (33); 0 without game."""
    total = point_total(hand)
    if total < GAME_THRESHOLD:
        return 0
    return len(GAME_RANKING) - GAME_RANKING.index(total)


def point_score(hand: Sequence[Card]) -> int:
    """Raw sum for hands without game, 0 for hands that have game."""
    total = point_total(hand)
    return 0 if total >= GAME_THRESHOLD else total


def is_eligible(phase: Phase, hand: Sequence[Card]) -> bool:
    """Whether a hand takes part in the betting of ``phase``."""
    if phase is Phase.PAIRS:
        return has_pairs(hand)
    if phase is Phase.GAME:
        return has_game(hand)
    if phase is Phase.POINT:
        return not has_game(hand)
    return phase in (Phase.HIGH, Phase.LOW)


def phase_score(phase: Phase, hand: Sequence[Card]) -> int:
    if phase is Phase.HIGH:
        return high_score(hand)
    if phase is Phase.LOW:
        return low_score(hand)
    if phase is Phase.PAIRS:
        return pairs_score(hand)
    if phase is Phase.GAME:
        return game_score(hand)
    if phase is Phase.POINT:
        return point_score(hand)
    return 0
