"""
Spanish 40-card deck used by Mus: 4 suits × ranks 1..7, 10 (Sota), 11 (Caballo), 12 (Rey).

Every card also has a *strength* (the Mus value) used by the hand evaluator:
As and 2 count 1, the 3 counts as a king (10), 4..7 count their rank and the
three figures count 10.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Suit(IntEnum):
    """Oros, Copas, Espadas, Bastos. Order only matters for deck construction."""
    OROS = 0
    COPAS = 1
    ESPADAS = 2
    BASTOS = 3


SUIT_NAMES = {
    Suit.OROS: "oros",
    Suit.COPAS: "copas",
    Suit.ESPADAS: "espadas",
    Suit.BASTOS: "bastos",
}

RANKS = (1, 2, 3, 4, 5, 6, 7, 10, 11, 12)

RANK_NAMES = {
    1: "As",
    2: "Dos",
    3: "Tres",
    4: "Cuatro",
    5: "Cinco",
    6: "Seis",
    7: "Siete",
    10: "Sota",
    11: "Caballo",
    12: "Rey",
}

# Mus value of each rank. The 3 counts as a king and the 2 as an ace.
STRENGTH_BY_RANK = {
    1: 1,
    2: 1,
    3: 10,
    4: 4,
    5: 5,
    6: 6,
    7: 7,
    10: 10,
    11: 10,
    12: 10,
}

DECK_SIZE = 40


@dataclass(frozen=True)
class Card:
    """A single card, identified by (suit, rank)."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if self.rank not in STRENGTH_BY_RANK:
            raise ValueError(f"Rank {self.rank} is not in the Spanish 40-card deck")

    @property
    def strength(self) -> int:
        return STRENGTH_BY_RANK[self.rank]

    @property
    def display_name(self) -> str:
        return f"{RANK_NAMES[self.rank]} de {SUIT_NAMES[self.suit]}"

    def __str__(self) -> str:
        rank_str = {1: "A", 10: "S", 11: "C", 12: "R"}.get(self.rank) or str(self.rank)
        return f"{rank_str}{'OCEB'[self.suit]}"

    def __repr__(self) -> str:
        return str(self)


def make_deck_40() -> list[Card]:
    """Build the full deck in suit-major, rank-ascending order."""
    return [Card(suit=s, rank=r) for s in Suit for r in RANKS]
