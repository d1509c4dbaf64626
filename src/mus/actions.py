"""
Closed sets of actions.

Bid actions are what a player says during a betting phase; engine actions are
everything the reducer in ``game.py`` understands. Both are small frozen
dataclasses so they can be compared, logged and replayed in tests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple, Union

from .constants import BidKind, MusChoice, SignalKind


# ---- Bids ----


@dataclass(frozen=True)
class Pass:
    kind: ClassVar[BidKind] = BidKind.PASS


@dataclass(frozen=True)
class Raise:
    """Envido: open a bid of ``amount``, or raise an active one by ``amount``."""
    amount: int = 2
    kind: ClassVar[BidKind] = BidKind.RAISE


@dataclass(frozen=True)
class RaiseAgain:
    """Echo más: answer a pending bid by adding the fixed increment."""
    kind: ClassVar[BidKind] = BidKind.RAISE_AGAIN


@dataclass(frozen=True)
class AllIn:
    """Órdago: stake the whole match."""
    kind: ClassVar[BidKind] = BidKind.ALL_IN


@dataclass(frozen=True)
class Accept:
    kind: ClassVar[BidKind] = BidKind.ACCEPT


@dataclass(frozen=True)
class Decline:
    kind: ClassVar[BidKind] = BidKind.DECLINE


BidAction = Union[Pass, Raise, RaiseAgain, AllIn, Accept, Decline]
BID_ACTION_TYPES = (Pass, Raise, RaiseAgain, AllIn, Accept, Decline)


def bid_from_kind(kind: BidKind, amount: int = 2) -> BidAction:
    """Default action for a bid kind (``amount`` only matters for RAISE)."""
    if kind is BidKind.RAISE:
        return Raise(amount=amount)
    return {
        BidKind.PASS: Pass,
        BidKind.RAISE_AGAIN: RaiseAgain,
        BidKind.ALL_IN: AllIn,
        BidKind.ACCEPT: Accept,
        BidKind.DECLINE: Decline,
    }[kind]()


def describe_bid(action: BidAction) -> str:
    if isinstance(action, Raise):
        return f"Raise {action.amount}"
    return {
        BidKind.PASS: "Pass",
        BidKind.RAISE_AGAIN: "Raise again",
        BidKind.ALL_IN: "All-in!",
        BidKind.ACCEPT: "Accept",
        BidKind.DECLINE: "Decline",
    }[action.kind]


# ---- Engine actions ----


@dataclass(frozen=True)
class DealNewRound:
    pass


@dataclass(frozen=True)
class MusDecision:
    player_id: str
    choice: MusChoice


@dataclass(frozen=True)
class DiscardCards:
    player_id: str
    card_indices: Tuple[int, ...]


@dataclass(frozen=True)
class PlaceBid:
    player_id: str
    bid: BidAction


@dataclass(frozen=True)
class SendSignal:
    player_id: str
    signal: SignalKind
    now: float


@dataclass(frozen=True)
class ExpireSignal:
    now: float


@dataclass(frozen=True)
class ResetGame:
    pass


@dataclass(frozen=True)
class ResetTournament:
    pass


Action = Union[
    DealNewRound,
    MusDecision,
    DiscardCards,
    PlaceBid,
    SendSignal,
    ExpireSignal,
    ResetGame,
    ResetTournament,
]
