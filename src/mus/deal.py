"""
Shuffle, deal and redraw.

Four players, four cards each, dealt one at a time round-robin starting with
the mano seat. The remaining 24 cards stay in the deck (top = end of the
tuple) and feed the discard-and-redraw rounds.
"""
from __future__ import annotations

import random
from typing import NamedTuple, Sequence

from .deck import Card, make_deck_40

NUM_PLAYERS = 4
HAND_SIZE = 4


class Deal(NamedTuple):
    """Result of a deal. ``hands`` is indexed by seat, ``deck`` is what is left."""
    hands: tuple[tuple[Card, ...], ...]
    deck: tuple[Card, ...]


class Redraw(NamedTuple):
    hand: tuple[Card, ...]
    deck: tuple[Card, ...]
    missing: int  # replacements that could not be drawn


def shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    """Fresh 40-card deck in random order (Fisher–Yates through ``rng.shuffle``)."""
    if rng is None:
        rng = random.Random()
    deck = make_deck_40()
    rng.shuffle(deck)
    return deck


def next_seat(seat: int) -> int:
    """Turn order and mano rotation both move one seat on (0 -> 1 -> 2 -> 3 -> 0)."""
    return (seat + 1) % NUM_PLAYERS


def seats_from(first: int) -> list[int]:
    """All four seats in turn order, starting with ``first``."""
    return [(first + i) % NUM_PLAYERS for i in range(NUM_PLAYERS)]


def deal_hands(
    mano: int = 0,
    deck: Sequence[Card] | None = None,
    rng: random.Random | None = None,
) -> Deal:
    """
    Deal four cards to each seat, one at a time, starting with ``mano``.
    If ``deck`` is given it is used as-is (already shuffled); otherwise a new
    deck is shuffled with ``rng``. Cards are taken from the top (end) of the deck.
    """
    pile = list(deck) if deck is not None else shuffled_deck(rng)
    if len(pile) < NUM_PLAYERS * HAND_SIZE:
        raise ValueError(f"Cannot deal from a deck of {len(pile)} cards")

    hands: list[list[Card]] = [[] for _ in range(NUM_PLAYERS)]
    for _ in range(HAND_SIZE):
        for seat in seats_from(mano):
            hands[seat].append(pile.pop())

    return Deal(hands=tuple(tuple(h) for h in hands), deck=tuple(pile))


def redraw(hand: Sequence[Card], indices: Sequence[int], deck: Sequence[Card]) -> Redraw:
    """
    Replace the cards at ``indices`` with cards from the top of ``deck``.

    The replacements are drawn first and the discarded cards then go under the
    deck, so a player never gets their own discards back in the same round and
    the 40 cards stay accounted for. If the deck runs out the hand is left short.
    """
    drop = set(indices)
    kept = [c for i, c in enumerate(hand) if i not in drop]
    discarded = [c for i, c in enumerate(hand) if i in drop]

    pile = list(deck)
    drawn: list[Card] = []
    while len(drawn) < len(discarded) and pile:
        drawn.append(pile.pop())

    return Redraw(
        hand=tuple(kept + drawn),
        deck=tuple(discarded + pile),
        missing=len(discarded) - len(drawn),
    )
