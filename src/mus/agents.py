"""
Policies that play a seat from ``mus.env`` observations.

Anything with ``act(obs, legal_actions_mask) -> action_index`` can sit at the
table through ``simulate.play_tournament``:

- ``RandomAgent``: uniform over the legal actions; the usual sparring partner.
- ``TopCardsAgent``: reads its own hand from the observation and plays the
  kings-and-aces rule of thumb.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .deck import RANKS, STRENGTH_BY_RANK
from .env import (
    BID_ACTION_OFFSET,
    DISCARD_ACTION_OFFSET,
    MUS_ACTION_OFFSET,
    MUS_COUNT_INDEX,
    NUM_CARDS,
)


class Policy(Protocol):
    def act(self, obs: Sequence[float], legal_actions_mask: Sequence[bool]) -> int:
        """Index of the action to play; must be one where ``legal_actions_mask`` is true."""


def _legal(mask: Sequence[bool]) -> List[int]:
    legal = [i for i, ok in enumerate(mask) if ok]
    if not legal:
        raise ValueError("No legal action in mask")
    return legal


@dataclass
class RandomAgent:
    """
    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(obs, legal_actions_mask)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, obs: Sequence[float], legal_actions_mask: Sequence[bool]) -> int:
        return self._rng.choice(_legal(legal_actions_mask))


def hand_strengths_from_obs(obs: Sequence[float]) -> List[int]:
    """Mus strengths of the cards set in the hand bits of an observation."""
    return [
        STRENGTH_BY_RANK[RANKS[i % len(RANKS)]]
        for i in range(NUM_CARDS)
        if obs[i] > 0.5
    ]


# Observation action indices used below.
_MUS, _CUT = MUS_ACTION_OFFSET, MUS_ACTION_OFFSET + 1
_PASS, _RAISE, _ACCEPT, _DECLINE = (BID_ACTION_OFFSET + i for i in (0, 1, 4, 5))
_KEEP_ALL = DISCARD_ACTION_OFFSET
_DISCARD_ALL = DISCARD_ACTION_OFFSET + 0b1111


@dataclass
class TopCardsAgent:
    """
    Counts kings (strength 10) and aces (strength 1) in its hand: two or more
    "top cards" is a good hand. Good hands cut, raise and accept; weak hands
    ask for mus, pass and decline. Cuts anyway after ``patience`` mus rounds.
    """

    patience: int = 2

    def top_cards(self, obs: Sequence[float]) -> int:
        return sum(1 for s in hand_strengths_from_obs(obs) if s in (1, 10))

    def act(self, obs: Sequence[float], legal_actions_mask: Sequence[bool]) -> int:
        legal = _legal(legal_actions_mask)
        good = self.top_cards(obs) >= 2
        mus_rounds = round(obs[MUS_COUNT_INDEX] * 10)

        if _CUT in legal:
            return _CUT if good or mus_rounds >= self.patience else _MUS
        if _KEEP_ALL in legal:
            if not good and _DISCARD_ALL in legal:
                return _DISCARD_ALL
            return _KEEP_ALL
        preferences = (_RAISE, _ACCEPT, _PASS, _DECLINE) if good else (_PASS, _DECLINE, _ACCEPT)
        for action in preferences:
            if action in legal:
                return action
        return legal[0]


__all__ = ["Policy", "RandomAgent", "TopCardsAgent", "hand_strengths_from_obs"]
