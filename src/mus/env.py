"""
Observation / action encoding for Mus.

Turns a ``PlayerView`` into a flat list of floats plus a legal-action mask over
one global action space, so any policy with the ``act(obs, mask)`` contract
(see ``agents.py``) can sit at a seat:

- 0..1   : mus decision (MUS, CUT)
- 2..7   : bids (PASS, RAISE, RAISE_AGAIN, ALL_IN, ACCEPT, DECLINE)
- 8..23  : discards, one action per 4-bit mask of hand positions
           (8 + 0 keeps the whole hand)

The module stays free of numpy so the engine keeps no runtime dependencies.
"""
from __future__ import annotations

from typing import Iterable, List

from .actions import bid_from_kind
from .constants import BidKind, MusChoice, Phase, SignalKind, SubPhase
from .deal import HAND_SIZE, NUM_PLAYERS
from .deck import DECK_SIZE, RANKS, Card
from .engine import MusEngine
from .views import PlayerView


NUM_CARDS: int = DECK_SIZE
NUM_MUS_ACTIONS: int = 2
NUM_BID_ACTIONS: int = 6
NUM_DISCARD_ACTIONS: int = 1 << HAND_SIZE  # 16
NUM_ACTIONS: int = NUM_MUS_ACTIONS + NUM_BID_ACTIONS + NUM_DISCARD_ACTIONS  # 24

MUS_ACTION_OFFSET: int = 0
BID_ACTION_OFFSET: int = NUM_MUS_ACTIONS
DISCARD_ACTION_OFFSET: int = NUM_MUS_ACTIONS + NUM_BID_ACTIONS

MUS_CHOICES = (MusChoice.MUS, MusChoice.CUT)
BID_KINDS = (
    BidKind.PASS,
    BidKind.RAISE,
    BidKind.RAISE_AGAIN,
    BidKind.ALL_IN,
    BidKind.ACCEPT,
    BidKind.DECLINE,
)
_PHASES = list(Phase)
_SUB_PHASES = list(SubPhase)
_SIGNALS = list(SignalKind)

# 40 hand + 8 phase + 6 sub-phase + 4 seat + 4 mano seat + 6 flags
# + 1 bid + 6 score + 3 partner signal + 1 mus count
OBS_SIZE: int = 79
MUS_COUNT_INDEX: int = OBS_SIZE - 1


def _one_hot(index: int | None, size: int) -> List[int]:
    vec = [0] * size
    if index is None:
        return vec
    if 0 <= index < size:
        vec[index] = 1
    return vec


def card_index(card: Card) -> int:
    """Stable index 0..39, suit-major then rank, matching make_deck_40()."""
    return int(card.suit) * len(RANKS) + RANKS.index(card.rank)


def encode_hand(hand: Iterable[Card]) -> List[int]:
    """Binary 40-dim vector: 1 if the card is in the hand."""
    vec = [0] * NUM_CARDS
    for c in hand:
        vec[card_index(c)] = 1
    return vec


def discard_action(indices: Iterable[int]) -> int:
    mask = 0
    for i in indices:
        mask |= 1 << i
    return DISCARD_ACTION_OFFSET + mask


def discard_indices(action: int) -> List[int]:
    mask = action - DISCARD_ACTION_OFFSET
    return [i for i in range(HAND_SIZE) if mask & (1 << i)]


def encode_observation(view: PlayerView) -> List[float]:
    """
    Flat observation for one seat:

    - 40 card bits: own hand
    - 8 + 6 bits: phase and sub-phase
    - 4 + 4 bits: own seat and mano seat
    - 6 flags: is mano, my turn, eligible, awaiting response, responder, all-in pending
    - bid on the table / all-in amount
    - own and opponent units, match points and games, each scaled to its target
    - 3 bits: partner signal
    - mus rounds so far (capped at 10) / 10
    """
    rules = view.rules
    vec: List[float] = [float(x) for x in encode_hand(view.hand)]
    vec.extend(_one_hot(_PHASES.index(view.phase), len(_PHASES)))
    vec.extend(_one_hot(_SUB_PHASES.index(view.sub_phase), len(_SUB_PHASES)))
    vec.extend(_one_hot(view.seat, NUM_PLAYERS))
    vec.extend(_one_hot(view.mano_seat, NUM_PLAYERS))
    vec.extend(
        float(flag)
        for flag in (
            view.is_mano,
            view.is_my_turn,
            view.eligible,
            view.awaiting_response,
            view.is_responder,
            view.bid_is_all_in,
        )
    )
    vec.append(view.bid_amount / rules.all_in_amount)
    for score in (view.own_score, view.opponent_score):
        vec.append(score.units / rules.units_per_match_point)
        vec.append(score.match_points / rules.match_points_to_win)
        vec.append(score.games / rules.games_to_win_tournament)
    signal_idx = _SIGNALS.index(view.partner_signal) if view.partner_signal is not None else None
    vec.extend(_one_hot(signal_idx, len(_SIGNALS)))
    vec.append(min(view.mus_count, 10) / 10)

    assert len(vec) == OBS_SIZE
    return [float(x) for x in vec]


def legal_action_mask(view: PlayerView) -> List[bool]:
    """Legal actions for this seat right now; all False when it is not its turn."""
    mask = [False] * NUM_ACTIONS
    if not view.is_my_turn:
        return mask
    if view.sub_phase is SubPhase.MUS_DECISION:
        for i in range(NUM_MUS_ACTIONS):
            mask[MUS_ACTION_OFFSET + i] = True
    elif view.sub_phase is SubPhase.DISCARDING:
        usable = (1 << len(view.hand)) - 1
        for m in range(NUM_DISCARD_ACTIONS):
            if m & ~usable == 0:
                mask[DISCARD_ACTION_OFFSET + m] = True
    elif view.sub_phase is SubPhase.BETTING:
        for i, kind in enumerate(BID_KINDS):
            if kind in view.legal_bids:
                mask[BID_ACTION_OFFSET + i] = True
    return mask


def apply_action_index(engine: MusEngine, player_id: str, action: int) -> bool:
    """Play a global action index for ``player_id``. Returns False if the engine ignored it."""
    if not 0 <= action < NUM_ACTIONS:
        raise ValueError(f"Action index {action} out of range 0..{NUM_ACTIONS - 1}")
    if action < BID_ACTION_OFFSET:
        return engine.process_mus_decision(player_id, MUS_CHOICES[action - MUS_ACTION_OFFSET])
    if action < DISCARD_ACTION_OFFSET:
        kind = BID_KINDS[action - BID_ACTION_OFFSET]
        bid = bid_from_kind(kind, amount=engine.get_state().rules.default_raise)
        return engine.place_bet(player_id, bid)
    return engine.discard_cards(player_id, discard_indices(action))


__all__ = [
    "NUM_CARDS",
    "NUM_ACTIONS",
    "NUM_MUS_ACTIONS",
    "NUM_BID_ACTIONS",
    "NUM_DISCARD_ACTIONS",
    "OBS_SIZE",
    "MUS_COUNT_INDEX",
    "MUS_ACTION_OFFSET",
    "BID_ACTION_OFFSET",
    "DISCARD_ACTION_OFFSET",
    "card_index",
    "encode_hand",
    "discard_action",
    "discard_indices",
    "encode_observation",
    "legal_action_mask",
    "apply_action_index",
]
