"""
Phase sequencer: deal -> mus decision <-> discarding -> High -> Low -> Pairs
-> Game | Point -> scoring, plus awarding units and ending the match.

Every function takes a MatchState and returns a new one. An action that is
not allowed right now returns the state unchanged.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Iterable, Sequence

from .constants import BETTING_PHASES, MusChoice, Phase, SubPhase, Team
from .deal import deal_hands, next_seat, redraw, seats_from
from .errors import InvariantViolation
from .scoring import award_game, award_units, tournament_won
from .state import SYSTEM, MatchState, PhaseResult, Player, check_invariants, log_event, with_player

logger = logging.getLogger("mus.phases")

PHASE_LABELS = {
    Phase.HIGH: "High",
    Phase.LOW: "Low",
    Phase.PAIRS: "Pairs",
    Phase.GAME: "Game",
    Phase.POINT: "Point",
}


def ignored(state: MatchState, reason: str, *args) -> MatchState:
    logger.debug("Ignored: " + reason, *args)
    return state


def next_in_rotation(state: MatchState, after_id: str, candidates: Iterable[Player]) -> Player | None:
    """First of ``candidates`` to act after ``after_id``, going round the table."""
    ids = {p.id for p in candidates}
    after = state.player(after_id)
    if after is None:
        raise InvariantViolation(f"Unknown player {after_id!r} in turn rotation")
    for seat in seats_from(next_seat(after.seat)):
        p = state.players[seat]
        if p.id in ids:
            return p
    return None


# ---- Dealing ----


def start_hand(state: MatchState, rng: random.Random, rotate_mano: bool = False) -> MatchState:
    """Shuffle, deal four cards each from the mano and open the mus decision."""
    mano_seat = next_seat(state.mano_seat) if rotate_mano else state.mano_seat
    deal = deal_hands(mano=mano_seat, rng=rng)
    players = tuple(replace(p, hand=deal.hands[p.seat]) for p in state.players)
    state = replace(
        state,
        players=players,
        deck=deal.deck,
        mano_seat=mano_seat,
        round_number=state.round_number + 1 if rotate_mano else state.round_number,
        phase=Phase.MUS,
        sub_phase=SubPhase.MUS_DECISION,
        current_player_id=players[mano_seat].id,
        bid=None,
        passed=(),
        bid_history=(),
        mus_count=0,
        mus_votes=(),
        results=(),
    )
    check_invariants(state)
    logger.debug("Hand %d dealt, mano %s", state.round_number, state.mano.id)
    return log_event(state, SYSTEM, "deal", f"Hand {state.round_number}: cards dealt, {state.mano.name} is mano")


# ---- Mus / discard ----


def mus_decision(state: MatchState, player_id: str, choice: MusChoice) -> MatchState:
    if state.sub_phase is not SubPhase.MUS_DECISION:
        return ignored(state, "mus decision during %s", state.sub_phase.value)
    if player_id != state.current_player_id:
        return ignored(state, "mus decision from %s out of turn", player_id)

    if choice is MusChoice.CUT:
        state = log_event(state, player_id, "cut", "No mus")
        return open_betting(replace(state, mus_votes=()), Phase.HIGH)

    state = log_event(state, player_id, "mus", "Mus")
    votes = state.mus_votes + (player_id,)
    if len(votes) == len(state.players):
        state = replace(
            state,
            mus_votes=(),
            sub_phase=SubPhase.DISCARDING,
            current_player_id=state.mano.id,
        )
        return log_event(state, SYSTEM, "system", "Everybody wants mus: discard")
    nxt = state.player_at(next_seat(state.player(player_id).seat))
    return replace(state, mus_votes=votes, current_player_id=nxt.id)


def _valid_indices(indices: Sequence[int], hand_size: int) -> bool:
    if len(set(indices)) != len(indices):
        return False
    return all(isinstance(i, int) and 0 <= i < hand_size for i in indices)


def discard(state: MatchState, player_id: str, indices: Sequence[int]) -> MatchState:
    if state.sub_phase is not SubPhase.DISCARDING:
        return ignored(state, "discard during %s", state.sub_phase.value)
    if player_id != state.current_player_id:
        return ignored(state, "discard from %s out of turn", player_id)
    player = state.player(player_id)
    if not _valid_indices(indices, len(player.hand)):
        return ignored(state, "discard indices %s for a hand of %d", list(indices), len(player.hand))

    if indices:
        result = redraw(player.hand, indices, state.deck)
        if result.missing:
            logger.warning("Deck exhausted: %s is %d card(s) short", player_id, result.missing)
        state = with_player(state, replace(player, hand=result.hand))
        state = replace(state, deck=result.deck)
        n = len(indices)
        state = log_event(state, player_id, "discard", f"Discards {n} card{'s' if n != 1 else ''}")
    else:
        state = log_event(state, player_id, "discard", "Keeps all cards")
    check_invariants(state)

    nxt = state.player_at(next_seat(player.seat))
    if nxt.seat == state.mano_seat:
        state = replace(
            state,
            sub_phase=SubPhase.MUS_DECISION,
            mus_count=state.mus_count + 1,
            current_player_id=state.mano.id,
        )
        return log_event(state, SYSTEM, "system", "New mus round")
    return replace(state, current_player_id=nxt.id)


# ---- Betting phases ----


def open_betting(state: MatchState, phase: Phase) -> MatchState:
    eligible = state.eligible_players(phase)
    state = replace(
        state,
        phase=phase,
        sub_phase=SubPhase.BETTING,
        bid=None,
        passed=(),
        current_player_id=eligible[0].id,
    )
    logger.debug("Betting opens: %s", phase.value)
    return log_event(state, SYSTEM, "phase", f"{PHASE_LABELS[phase]} phase")


def _announce(state: MatchState, phase: Phase) -> MatchState:
    """Each player says whether they hold pairs / game."""
    state = replace(state, phase=phase, sub_phase=SubPhase.ANNOUNCING, bid=None, passed=())
    word = "pairs" if phase is Phase.PAIRS else "game"
    for p in state.in_turn_order():
        holds = p.has_pairs if phase is Phase.PAIRS else p.has_game
        state = log_event(state, p.id, f"announce-{word}", word.capitalize() if holds else f"No {word}")
    return state


def advance_phase(state: MatchState) -> MatchState:
    """Move to the next betting phase that has a contest, or finish the hand."""
    if state.phase not in BETTING_PHASES:
        return finish_hand(state)
    remaining = BETTING_PHASES[BETTING_PHASES.index(state.phase) + 1:]
    state = replace(state, bid=None, passed=())

    for phase in remaining:
        if phase is Phase.POINT and any(p.has_game for p in state.players):
            continue
        eligible = state.eligible_players(phase)
        if not eligible:
            continue
        if phase in (Phase.PAIRS, Phase.GAME):
            state = _announce(state, phase)
            teams = {p.team for p in eligible}
            if len(teams) == 1:
                team = teams.pop()
                state = award(
                    state, team, state.rules.pass_reward, phase,
                    f"{PHASE_LABELS[phase].lower()}, no contest",
                )
                if state.is_finished:
                    return state
                continue
        return open_betting(state, phase)

    return finish_hand(state)


# ---- Scoring ----


def award(
    state: MatchState,
    team: Team | None,
    units: int,
    phase: Phase,
    detail: str,
    is_deje: bool = False,
) -> MatchState:
    """Record a phase result and credit ``units`` to ``team`` (None = tie, nothing awarded)."""
    state = replace(
        state,
        results=state.results + (PhaseResult(phase, team, units if team is not None else 0, detail, is_deje),),
    )
    if team is None or units <= 0:
        logger.debug("%s: tie, nothing awarded (%s)", phase.value, detail)
        return log_event(state, SYSTEM, "scoring", f"{PHASE_LABELS[phase]}: tie, nothing awarded")

    result = award_units(state.ledger, team, units, state.rules)
    state = replace(state, ledger=result.ledger)
    logger.debug("Team %s +%d (%s)", team.value, units, detail)
    state = log_event(
        state, SYSTEM, "scoring",
        f"Team {team.value} wins {units} unit{'s' if units != 1 else ''} ({detail})",
    )
    if result.match_won:
        return end_match(state, team, "on points")
    return state


def end_match(state: MatchState, team: Team, how: str) -> MatchState:
    """``team`` wins the match: one more tournament marker, phase goes to FINISHED."""
    ledger = award_game(state.ledger, team)
    state = replace(
        state,
        ledger=ledger,
        match_winner=team,
        phase=Phase.FINISHED,
        sub_phase=SubPhase.REVEALING,
        current_player_id=None,
        bid=None,
        passed=(),
    )
    logger.info("Team %s wins the match %s", team.value, how)
    state = log_event(state, SYSTEM, "game-end", f"Team {team.value} wins the match {how}")
    if tournament_won(ledger, team, state.rules):
        a, b = ledger.a.games, ledger.b.games
        logger.info("Team %s wins the tournament %d-%d", team.value, a, b)
        state = replace(state, tournament_winner=team)
        state = log_event(state, SYSTEM, "tournament-end", f"Team {team.value} wins the tournament {a}-{b}")
    return state


def finish_hand(state: MatchState) -> MatchState:
    """All phases played: reveal and wait for the next deal."""
    state = replace(
        state,
        phase=Phase.SCORING,
        sub_phase=SubPhase.REVEALING,
        current_player_id=None,
        bid=None,
        passed=(),
    )
    a, b = state.ledger.a, state.ledger.b
    logger.info(
        "Hand %d over: A %d+%d/%d, B %d+%d/%d",
        state.round_number, a.match_points, a.units, state.rules.units_per_match_point,
        b.match_points, b.units, state.rules.units_per_match_point,
    )
    return log_event(state, SYSTEM, "hand-end", f"Hand {state.round_number} over")
