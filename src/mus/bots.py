"""
Rule-based bot: reads its own hand, bends the read through its personality
and answers with the same inputs a human gives (mus/cut, discards, bids).

All randomness comes from the ``random.Random`` handed to the bot, so a seeded
bot replays the same decisions for the same views.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Sequence

from .actions import Accept, AllIn, BidAction, Decline, Pass, Raise, RaiseAgain
from .constants import BidKind, MusChoice, PairsCategory, Phase, SignalKind
from .deck import Card
from .evaluation import LOW_CONSTANT, game_score, pairs_groups, point_score
from .personalities import Personality
from .views import PlayerView

logger = logging.getLogger("mus.bots")

# Phases played with the aggression_high trait; the rest use aggression_low.
_HIGH_APPETITE = (Phase.HIGH, Phase.PAIRS, Phase.GAME)


# ---- Hand reading (0..10 per phase) ----


def phase_strength(hand: Sequence[Card], phase: Phase) -> float:
    """How good ``hand`` is for ``phase`` on a 0..10 scale."""
    values = [c.strength for c in hand]
    if phase is Phase.HIGH:
        kings = values.count(10)
        if kings == 0:
            return max(values) / 2.0
        return min(10.0, 5.5 + 1.5 * kings)
    if phase is Phase.LOW:
        aces = values.count(1)
        if aces == 0:
            return (LOW_CONSTANT - min(values)) / 2.0
        return min(10.0, 5.5 + 1.5 * aces)
    if phase is Phase.PAIRS:
        category, groups = pairs_groups(hand)
        if category is PairsCategory.NONE:
            return 0.0
        base = {PairsCategory.PARES: 3.0, PairsCategory.MEDIAS: 6.0, PairsCategory.DUPLES: 8.0}[category]
        return min(10.0, base + groups[0] / 5.0)
    if phase is Phase.GAME:
        rank = game_score(hand)
        if rank == 0:
            return 0.0
        if rank == 10:   # 31
            return 10.0
        if rank == 9:    # 32
            return 8.5
        return 2.0 + 0.6 * rank
    if phase is Phase.POINT:
        return point_score(hand) / 3.0
    return 0.0


def general_strength(hand: Sequence[Card]) -> float:
    """Overall 0..10 read used for the mus decision; pairs and game weigh most."""
    high = phase_strength(hand, Phase.HIGH)
    low = phase_strength(hand, Phase.LOW)
    pairs = phase_strength(hand, Phase.PAIRS)
    game = phase_strength(hand, Phase.GAME) or phase_strength(hand, Phase.POINT) / 2.0
    return (high + low + 2 * pairs + 3 * game) / 7.0


# ---- Discards ----


def card_keep_scores(hand: Sequence[Card]) -> List[int]:
    """
    Keep-value of each card: mid cards alone are worth little, kings and aces
    help High and Low, and cards that already match are worth keeping.
    """
    values = [c.strength for c in hand]
    scores: List[int] = []
    for v in values:
        score = 0
        same = values.count(v)
        if 4 <= v <= 6 and same == 1:
            score -= 2
        if v == 10:
            score += 2
        if v == 1:
            score += 2
        if same > 1:
            score += same
        scores.append(score)
    return scores


# Cards scoring this much are part of a kept group and are never thrown.
_KEEP_ALWAYS = 4


def choose_discards(hand: Sequence[Card], rng: random.Random, max_discards: int = 3) -> List[int]:
    """Indices of the lowest-valued 1..max_discards cards (fewer if the rest are worth keeping)."""
    scores = card_keep_scores(hand)
    order = sorted(range(len(hand)), key=lambda i: (scores[i], i))
    count = min(rng.randint(1, max_discards), len(hand))
    return sorted(i for i in order[:count] if scores[i] < _KEEP_ALWAYS)


# ---- Bot ----


@dataclass
class MusBot:
    """
    Personality-driven player.

    Usage:
        bot = MusBot(PRESET_PERSONALITIES["steady"], rng=random.Random(7))
        choice = bot.decide_mus(view)
    """

    personality: Personality = field(default_factory=Personality)
    rng: random.Random = field(default_factory=random.Random)

    # -- mus --

    def decide_mus(self, view: PlayerView) -> MusChoice:
        t = self.personality
        hand = view.hand
        strong = (
            phase_strength(hand, Phase.PAIRS) >= 6
            or phase_strength(hand, Phase.GAME) >= 8.5
            or (phase_strength(hand, Phase.HIGH) >= 8.5 and phase_strength(hand, Phase.LOW) >= 8.5)
        )
        if strong:
            choice = MusChoice.CUT if self.rng.random() < 0.7 + t.cut_tendency * 0.02 else MusChoice.MUS
        else:
            noise = (self.rng.random() - 0.5) * 0.4 * (2 - t.deliberation / 10)
            chance = (
                t.cut_tendency / 20
                + general_strength(hand) * 0.06
                + view.mus_count * 0.05
                + noise
            )
            choice = MusChoice.CUT if chance > 0.6 else MusChoice.MUS
        logger.debug("%s mus decision: %s", view.player_id, choice.value)
        return choice

    # -- discards --

    def select_discards(self, view: PlayerView) -> List[int]:
        indices = choose_discards(view.hand, self.rng)
        logger.debug("%s discards %s", view.player_id, indices)
        return indices

    # -- bids --

    def read_hand(self, view: PlayerView) -> float:
        """Phase strength bent by luck, bluffing, deliberation, appetite and the partner's signal."""
        t = self.personality
        rng = self.rng
        value = phase_strength(view.hand, view.phase)
        value += rng.random() * t.luck / 5
        bluff_chance = t.bluffing / 10 * (1 - t.fairness / 20)
        if rng.random() < bluff_chance:
            value += rng.random() * 2
        value += (rng.random() - 0.5) * (10 - t.deliberation) / 10
        appetite = t.aggression_high if view.phase in _HIGH_APPETITE else t.aggression_low
        value += (appetite - 5) / 5
        if view.partner_signal is not None:
            trust = t.signal_reading / 10 * 1.5
            if view.partner_signal is SignalKind.GOOD:
                value += trust
            elif view.partner_signal is SignalKind.BAD:
                value -= trust
        return value

    def decide_bid(self, view: PlayerView) -> BidAction:
        if not view.legal_bids:
            raise ValueError(f"{view.player_id} has no legal bid")
        if view.awaiting_response:
            action = self._respond(view)
        else:
            action = self._open(view)
        if action.kind not in view.legal_bids:
            action = Decline() if view.awaiting_response else Pass()
        logger.debug("%s %s bid: %s", view.player_id, view.phase.value, action)
        return action

    def _open(self, view: PlayerView) -> BidAction:
        t = self.personality
        rng = self.rng
        value = self.read_hand(view) + (rng.random() - 0.5) * 3 * (1 - t.deliberation / 20)
        all_in_at = 10.5 - t.boldness * 0.25
        if view.opponent_score.adentro and not view.own_score.adentro:
            all_in_at -= 1.5
        if value >= all_in_at and rng.random() < 0.3 + t.boldness * 0.04:
            return AllIn()
        if value >= 6 and rng.random() < 0.8:
            return Raise(amount=view.rules.default_raise)
        if value >= 4 and rng.random() < 0.4:
            return Raise(amount=view.rules.default_raise)
        return Pass()

    def _respond(self, view: PlayerView) -> BidAction:
        t = self.personality
        rng = self.rng
        value = self.read_hand(view) + (rng.random() - 0.5) * 2

        if view.bid_is_all_in:
            chance = (value - 5) / 5 + (t.boldness - 5) / 20
            if view.opponent_score.adentro:
                chance += 0.2
            chance = max(0.0, min(1.0, chance))
            return Accept() if rng.random() < chance else Decline()

        value -= max(0, view.bid_amount - view.rules.default_raise) * 0.15
        if value >= 9.5 and t.boldness >= 7 and rng.random() < 0.3:
            return AllIn()
        if value >= 8 and rng.random() < 0.6 and BidKind.RAISE_AGAIN in view.legal_bids:
            return RaiseAgain()
        if value >= 4 and rng.random() < 0.7:
            return Accept()
        return Decline()
