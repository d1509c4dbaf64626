"""
Immutable match state.

A ``MatchState`` is a value: every transition in ``game.py`` returns a new one
and the engine hands the current value out as its snapshot. Nested values are
frozen dataclasses and tuples all the way down.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Iterator, Sequence

from .actions import BidAction
from .config import DEFAULT_RULES, RulesConfig
from .constants import Phase, SignalKind, SubPhase, Team
from .deal import NUM_PLAYERS, HAND_SIZE, seats_from
from .deck import DECK_SIZE, Card
from .errors import InvariantViolation
from .evaluation import has_game, has_pairs, is_eligible, point_total
from .personalities import Personality
from .scoring import Ledger

SYSTEM = None  # speaker id of engine-generated narrative entries


@dataclass(frozen=True)
class Player:
    """A seat at the table. ``hand`` is empty until the first deal."""

    id: str
    name: str
    team: Team
    is_bot: bool = False
    personality: Personality | None = None
    seat: int = 0
    hand: tuple[Card, ...] = ()

    @property
    def has_pairs(self) -> bool:
        return bool(self.hand) and has_pairs(self.hand)

    @property
    def has_game(self) -> bool:
        return bool(self.hand) and has_game(self.hand)

    @property
    def point_total(self) -> int:
        return point_total(self.hand) if self.hand else 0


@dataclass(frozen=True)
class ActiveBid:
    """
    The stake on the table in the current phase.

    ``proposer_id`` is the reference player: the last one to raise. The
    opposing team must answer; ``declined_by`` tracks which of them already
    said no.
    """

    amount: int
    proposer_id: str
    is_all_in: bool = False
    declined_by: tuple[str, ...] = ()


@dataclass(frozen=True)
class BidRecord:
    phase: Phase
    player_id: str
    action: BidAction


@dataclass(frozen=True)
class PhaseResult:
    phase: Phase
    winner: Team | None
    points: int
    detail: str
    is_deje: bool = False


@dataclass(frozen=True)
class LogEntry:
    seq: int
    speaker_id: str | None
    kind: str
    message: str


@dataclass(frozen=True)
class CompanionSignal:
    player_id: str
    team: Team
    kind: SignalKind
    expires_at: float


@dataclass(frozen=True)
class MatchState:
    players: tuple[Player, ...]
    rules: RulesConfig = DEFAULT_RULES
    phase: Phase = Phase.MUS
    sub_phase: SubPhase = SubPhase.DEALING
    current_player_id: str | None = None
    round_number: int = 1
    mano_seat: int = 0
    deck: tuple[Card, ...] = ()
    ledger: Ledger = field(default_factory=Ledger)
    bid: ActiveBid | None = None
    passed: tuple[str, ...] = ()
    bid_history: tuple[BidRecord, ...] = ()
    mus_count: int = 0
    mus_votes: tuple[str, ...] = ()
    results: tuple[PhaseResult, ...] = ()
    log: tuple[LogEntry, ...] = ()
    log_seq: int = 0
    signal: CompanionSignal | None = None
    match_winner: Team | None = None
    tournament_winner: Team | None = None
    version: int = 0

    # ---- Lookups ----

    def player(self, player_id: str | None) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def player_at(self, seat: int) -> Player:
        return self.players[seat % NUM_PLAYERS]

    @property
    def mano(self) -> Player:
        return self.player_at(self.mano_seat)

    @property
    def current_player(self) -> Player | None:
        return self.player(self.current_player_id)

    @property
    def awaiting_response(self) -> bool:
        return self.bid is not None

    def is_mano(self, player_id: str) -> bool:
        return self.mano.id == player_id

    def in_turn_order(self) -> Iterator[Player]:
        """All players in turn order, starting with the mano."""
        for seat in seats_from(self.mano_seat):
            yield self.players[seat]

    def partner_of(self, player_id: str) -> Player | None:
        me = self.player(player_id)
        if me is None:
            return None
        for p in self.players:
            if p.team is me.team and p.id != me.id:
                return p
        return None

    def eligible_players(self, phase: Phase | None = None) -> list[Player]:
        """Players taking part in ``phase`` (default: the current one), mano first."""
        phase = phase or self.phase
        return [p for p in self.in_turn_order() if p.hand and is_eligible(phase, p.hand)]

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED


def seat_players(players: Sequence[Player]) -> tuple[Player, ...]:
    """Validate a table of four and stamp each player with its seat index."""
    if len(players) != NUM_PLAYERS:
        raise ValueError(f"Mus needs exactly {NUM_PLAYERS} players, got {len(players)}")
    ids = [p.id for p in players]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate player ids: {ids}")
    per_team = Counter(p.team for p in players)
    if per_team[Team.A] != 2 or per_team[Team.B] != 2:
        raise ValueError("Each team needs exactly two players")
    return tuple(replace(p, seat=i, hand=()) for i, p in enumerate(players))


def new_match_state(players: Sequence[Player], rules: RulesConfig | None = None) -> MatchState:
    """State of a freshly seated table; the first player is mano, nothing dealt yet."""
    return MatchState(players=seat_players(players), rules=rules or DEFAULT_RULES)


def with_player(state: MatchState, player: Player) -> MatchState:
    players = list(state.players)
    players[player.seat] = player
    return replace(state, players=tuple(players))


def log_event(state: MatchState, speaker_id: str | None, kind: str, message: str) -> MatchState:
    """Append to the narrative log, keeping only the newest ``log_capacity`` entries."""
    seq = state.log_seq + 1
    entries = state.log + (LogEntry(seq=seq, speaker_id=speaker_id, kind=kind, message=message),)
    return replace(state, log=entries[-state.rules.log_capacity:], log_seq=seq)


def check_invariants(state: MatchState) -> None:
    """
    Raise InvariantViolation if cards went missing or were duplicated, a hand
    holds more than four cards, or the current player does not exist.
    """
    dealt = [p for p in state.players if p.hand]
    if dealt:
        cards = list(state.deck)
        for p in state.players:
            if len(p.hand) > HAND_SIZE:
                raise InvariantViolation(f"{p.id} holds {len(p.hand)} cards")
            cards.extend(p.hand)
        if len(cards) != DECK_SIZE or len(set(cards)) != DECK_SIZE:
            raise InvariantViolation(
                f"Deck and hands hold {len(cards)} cards ({len(set(cards))} distinct)"
            )
    if state.current_player_id is not None and state.player(state.current_player_id) is None:
        raise InvariantViolation(f"Unknown current player {state.current_player_id!r}")
