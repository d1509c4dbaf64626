"""Enumerations shared across the engine."""
from __future__ import annotations

from enum import Enum, IntEnum


class Team(str, Enum):
    A = "A"
    B = "B"

    @property
    def other(self) -> "Team":
        return Team.B if self is Team.A else Team.A


class Phase(str, Enum):
    MUS = "mus"
    HIGH = "high"      # grande
    LOW = "low"        # chica
    PAIRS = "pairs"    # pares
    GAME = "game"      # juego
    POINT = "point"    # punto
    SCORING = "scoring"
    FINISHED = "finished"


# Betting phases in the order they are played.
BETTING_PHASES = (Phase.HIGH, Phase.LOW, Phase.PAIRS, Phase.GAME, Phase.POINT)


class SubPhase(str, Enum):
    DEALING = "dealing"
    MUS_DECISION = "mus-decision"
    DISCARDING = "discarding"
    ANNOUNCING = "announcing"
    BETTING = "betting"
    REVEALING = "revealing"


class MusChoice(str, Enum):
    MUS = "mus"
    CUT = "cut"


class SignalKind(str, Enum):
    GOOD = "good"
    BAD = "bad"
    MEDIUM = "medium"


class BidKind(str, Enum):
    PASS = "pass"
    RAISE = "raise"
    RAISE_AGAIN = "raise-again"
    ALL_IN = "all-in"
    ACCEPT = "accept"
    DECLINE = "decline"


class PairsCategory(IntEnum):
    """Ascending strength: any DUPLES beats any MEDIAS beats any PARES."""
    NONE = 0
    PARES = 1    # one pair
    MEDIAS = 2   # three of a kind
    DUPLES = 3   # two pairs (or four of a kind)
