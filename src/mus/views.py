"""
What one seat is allowed to see.

Bots decide from a ``PlayerView`` only: their own cards, the public betting
state, the score and their partner's companion signal. Other hands never
appear in it.
"""
from __future__ import annotations

from dataclasses import dataclass

from .bidding import legal_bids, responders
from .config import RulesConfig
from .constants import BidKind, Phase, SignalKind, SubPhase, Team
from .deck import Card
from .scoring import TeamScore
from .state import MatchState


@dataclass(frozen=True)
class PlayerView:
    player_id: str
    seat: int
    team: Team
    hand: tuple[Card, ...]
    is_mano: bool
    mano_seat: int
    phase: Phase
    sub_phase: SubPhase
    round_number: int
    mus_count: int
    is_my_turn: bool
    eligible: bool
    bid_amount: int
    bid_is_all_in: bool
    awaiting_response: bool
    is_responder: bool
    legal_bids: tuple[BidKind, ...]
    own_score: TeamScore
    opponent_score: TeamScore
    partner_signal: SignalKind | None
    rules: RulesConfig


def player_view(state: MatchState, player_id: str) -> PlayerView:
    me = state.player(player_id)
    if me is None:
        raise KeyError(player_id)
    signal = state.signal
    partner_signal = None
    if signal is not None and signal.team is me.team and signal.player_id != me.id:
        partner_signal = signal.kind
    eligible = (
        state.sub_phase is SubPhase.BETTING
        and any(p.id == me.id for p in state.eligible_players())
    )
    return PlayerView(
        player_id=me.id,
        seat=me.seat,
        team=me.team,
        hand=me.hand,
        is_mano=state.is_mano(me.id),
        mano_seat=state.mano_seat,
        phase=state.phase,
        sub_phase=state.sub_phase,
        round_number=state.round_number,
        mus_count=state.mus_count,
        is_my_turn=state.current_player_id == me.id,
        eligible=eligible,
        bid_amount=state.bid.amount if state.bid else 0,
        bid_is_all_in=bool(state.bid and state.bid.is_all_in),
        awaiting_response=state.awaiting_response,
        is_responder=any(p.id == me.id for p in responders(state)),
        legal_bids=legal_bids(state, me.id),
        own_score=state.ledger.get(me.team),
        opponent_score=state.ledger.get(me.team.other),
        partner_signal=partner_signal,
        rules=state.rules,
    )
