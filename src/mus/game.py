"""
The reducer: ``apply_action(state, action, rng) -> state``.

Every engine operation is one of the actions in ``actions.py``. An action that
does not apply to the current state (out of turn, wrong sub-phase, illegal
bid) returns the very same state object; anything else returns a new state
with ``version`` bumped.
"""
from __future__ import annotations

import random
from dataclasses import replace

from .actions import (
    Action,
    DealNewRound,
    DiscardCards,
    ExpireSignal,
    MusDecision,
    PlaceBid,
    ResetGame,
    ResetTournament,
    SendSignal,
)
from .bidding import apply_bid
from .constants import Phase, SubPhase
from .phases import discard, ignored, mus_decision, start_hand
from .scoring import Ledger, new_match
from .state import SYSTEM, CompanionSignal, MatchState, log_event


def apply_action(state: MatchState, action: Action, rng: random.Random) -> MatchState:
    new_state = _dispatch(state, action, rng)
    if new_state is state:
        return state
    return replace(new_state, version=state.version + 1)


def _dispatch(state: MatchState, action: Action, rng: random.Random) -> MatchState:
    if isinstance(action, DealNewRound):
        return deal_new_round(state, rng)
    if isinstance(action, MusDecision):
        return mus_decision(state, action.player_id, action.choice)
    if isinstance(action, DiscardCards):
        return discard(state, action.player_id, action.card_indices)
    if isinstance(action, PlaceBid):
        return apply_bid(state, action.player_id, action.bid)
    if isinstance(action, SendSignal):
        return send_signal(state, action)
    if isinstance(action, ExpireSignal):
        return expire_signal(state, action.now)
    if isinstance(action, ResetGame):
        return reset_game(state, rng)
    if isinstance(action, ResetTournament):
        return reset_tournament(state, rng)
    raise TypeError(f"Unknown action {action!r}")


def deal_new_round(state: MatchState, rng: random.Random) -> MatchState:
    """
    Deal a fresh hand. After a completed hand the mano moves one seat on and
    the round counter advances; a finished match only restarts via a reset.
    """
    if state.phase is Phase.FINISHED:
        return ignored(state, "deal after the match is finished")
    after_hand = state.phase is Phase.SCORING
    return start_hand(state, rng, rotate_mano=after_hand)


def send_signal(state: MatchState, action: SendSignal) -> MatchState:
    player = state.player(action.player_id)
    if player is None:
        return ignored(state, "signal from unknown player %s", action.player_id)
    if not state.rules.signals_enabled:
        return ignored(state, "signal from %s: signals disabled", action.player_id)
    signal = CompanionSignal(
        player_id=player.id,
        team=player.team,
        kind=action.signal,
        expires_at=action.now + state.rules.signal_duration,
    )
    state = replace(state, signal=signal)
    return log_event(state, player.id, "signal", f"*signals: {action.signal.value}*")


def expire_signal(state: MatchState, now: float) -> MatchState:
    if state.signal is None or now < state.signal.expires_at:
        return state
    return replace(state, signal=None)


def _clear_hand_state(state: MatchState, ledger: Ledger) -> MatchState:
    return replace(
        state,
        ledger=ledger,
        round_number=1,
        phase=Phase.MUS,
        sub_phase=SubPhase.DEALING,
        current_player_id=None,
        bid=None,
        passed=(),
        bid_history=(),
        results=(),
        mus_votes=(),
        mus_count=0,
        match_winner=None,
        signal=None,
    )


def reset_game(state: MatchState, rng: random.Random) -> MatchState:
    """
    New match: units and match points cleared, tournament markers kept. Once
    the tournament is decided there is nothing left to keep, so a fresh
    tournament starts instead.
    """
    if state.tournament_winner is not None:
        return reset_tournament(state, rng)
    state = _clear_hand_state(state, new_match(state.ledger))
    state = log_event(state, SYSTEM, "system", "New match")
    return start_hand(state, rng)


def reset_tournament(state: MatchState, rng: random.Random) -> MatchState:
    """Everything cleared, the first seat is mano again."""
    state = _clear_hand_state(state, Ledger())
    state = replace(state, tournament_winner=None, mano_seat=0, log=(), log_seq=0)
    state = log_event(state, SYSTEM, "system", "New tournament")
    return start_hand(state, rng)
