"""
Betting state machine for one phase (envite).

Turn order starts at the mano and only visits players eligible for the phase.
Without a bid on the table a player may pass, raise or go all-in. Once a bid
is made the opposing team must answer it: accept, decline (both partners have
to decline before the deje is paid), raise again or go all-in.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from .actions import BID_ACTION_TYPES, Accept, AllIn, BidAction, Decline, Pass, Raise, RaiseAgain, describe_bid
from .constants import BETTING_PHASES, BidKind, SubPhase
from .phases import PHASE_LABELS, advance_phase, award, end_match, ignored, next_in_rotation
from .scoring import phase_winner
from .state import SYSTEM, ActiveBid, BidRecord, MatchState, Player, log_event

logger = logging.getLogger("mus.bidding")


def responders(state: MatchState) -> list[Player]:
    """Eligible players of the team facing the active bid who have not declined yet."""
    bid = state.bid
    if bid is None:
        return []
    proposer = state.player(bid.proposer_id)
    return [
        p for p in state.eligible_players()
        if p.team is not proposer.team and p.id not in bid.declined_by
    ]


def legal_bids(state: MatchState, player_id: str) -> tuple[BidKind, ...]:
    """Bid kinds ``player_id`` may use right now (empty when it is not their turn to bid)."""
    if state.sub_phase is not SubPhase.BETTING or state.phase not in BETTING_PHASES:
        return ()
    if player_id != state.current_player_id:
        return ()
    rules = state.rules
    bid = state.bid
    if bid is None:
        return (BidKind.PASS, BidKind.RAISE, BidKind.ALL_IN)

    kinds = [BidKind.ACCEPT, BidKind.DECLINE]
    if not bid.is_all_in:
        if bid.amount + rules.default_raise < rules.all_in_amount:
            kinds.append(BidKind.RAISE)
        if bid.amount + rules.raise_again_increment < rules.all_in_amount:
            kinds.append(BidKind.RAISE_AGAIN)
        kinds.append(BidKind.ALL_IN)
    return tuple(kinds)


def apply_bid(state: MatchState, player_id: str, action: BidAction) -> MatchState:
    legal = legal_bids(state, player_id)
    if not legal:
        return ignored(state, "bid from %s: not their turn to bid", player_id)
    if not isinstance(action, BID_ACTION_TYPES):
        return ignored(state, "bid from %s: not a bid action: %r", player_id, action)
    if isinstance(action, Raise) and type(action.amount) is not int:
        return ignored(state, "raise from %s: amount %r is not an integer", player_id, action.amount)
    if action.kind not in legal:
        return ignored(state, "bid %s from %s: legal are %s", action.kind.value, player_id, [k.value for k in legal])
    if isinstance(action, Raise):
        base = state.bid.amount if state.bid else 0
        if action.amount < 1 or base + action.amount >= state.rules.all_in_amount:
            return ignored(state, "raise of %d on %d", action.amount, base)

    logger.debug("%s %s: %s", state.phase.value, player_id, describe_bid(action))
    state = replace(state, bid_history=state.bid_history + (BidRecord(state.phase, player_id, action),))
    state = log_event(state, player_id, "bet", describe_bid(action))

    if isinstance(action, Pass):
        return _pass(state, player_id)
    if isinstance(action, Raise):
        base = state.bid.amount if state.bid else 0
        return _propose(state, player_id, base + action.amount, is_all_in=False)
    if isinstance(action, RaiseAgain):
        return _propose(state, player_id, state.bid.amount + state.rules.raise_again_increment, is_all_in=False)
    if isinstance(action, AllIn):
        return _propose(state, player_id, state.rules.all_in_amount, is_all_in=True)
    if isinstance(action, Accept):
        return _accept(state)
    if isinstance(action, Decline):
        return _decline(state, player_id)
    raise TypeError(f"Unknown bid action {action!r}")


def _pass(state: MatchState, player_id: str) -> MatchState:
    passed = state.passed + (player_id,)
    state = replace(state, passed=passed)
    eligible = state.eligible_players()
    if all(p.id in passed for p in eligible):
        phase = state.phase
        winner = phase_winner(state.players, phase)
        state = award(state, winner, state.rules.pass_reward, phase, f"{PHASE_LABELS[phase].lower()}, all passed")
        if state.is_finished:
            return state
        return advance_phase(state)
    nxt = next_in_rotation(state, player_id, [p for p in eligible if p.id not in passed])
    return replace(state, current_player_id=nxt.id)


def _propose(state: MatchState, player_id: str, amount: int, is_all_in: bool) -> MatchState:
    """Put ``amount`` on the table with ``player_id`` as reference; the other team answers."""
    player = state.player(player_id)
    state = replace(state, bid=ActiveBid(amount=amount, proposer_id=player_id, is_all_in=is_all_in))
    opponents = [p for p in state.eligible_players() if p.team is not player.team]
    nxt = next_in_rotation(state, player_id, opponents)
    return replace(state, current_player_id=nxt.id)


def _accept(state: MatchState) -> MatchState:
    bid = state.bid
    phase = state.phase
    if bid.is_all_in:
        return _all_in_showdown(state)
    winner = phase_winner(state.players, phase)
    state = replace(state, bid=None)
    state = award(state, winner, bid.amount, phase, f"{PHASE_LABELS[phase].lower()}, {bid.amount} accepted")
    if state.is_finished:
        return state
    return advance_phase(state)


def _all_in_showdown(state: MatchState) -> MatchState:
    """Accepted all-in: hands are shown and the phase winner takes the whole match."""
    phase = state.phase
    for p in state.in_turn_order():
        state = log_event(state, p.id, "reveal-cards", "Shows " + ", ".join(c.display_name for c in p.hand))
    winner = phase_winner(state.players, phase)
    if winner is None:
        # Tied showdown: the mano's team wins, the match cannot end without a winner.
        winner = state.mano.team
    state = log_event(state, SYSTEM, "system", f"All-in accepted on {PHASE_LABELS[phase]}")
    return end_match(state, winner, "by all-in")


def _decline(state: MatchState, player_id: str) -> MatchState:
    bid = replace(state.bid, declined_by=state.bid.declined_by + (player_id,))
    state = replace(state, bid=bid)
    remaining = responders(state)
    if remaining:
        # The partner still has to answer.
        nxt = next_in_rotation(state, player_id, remaining)
        return replace(state, current_player_id=nxt.id)

    proposer = state.player(bid.proposer_id)
    phase = state.phase
    state = replace(state, bid=None)
    state = award(state, proposer.team, state.rules.deje_reward, phase, "deje", is_deje=True)
    if state.is_finished:
        return state
    return advance_phase(state)
