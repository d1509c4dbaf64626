"""
Headless tournament runner.

Drives a ``MusEngine`` to the end of a tournament without any pacing: bot
seats act through ``process_bot_actions``, other seats through a ``Policy``
fed with ``mus.env`` observations. Used for soak tests and quick bot
comparisons.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .agents import Policy
from .constants import Phase, Team
from .engine import MusEngine
from .env import apply_action_index, encode_observation, legal_action_mask
from .errors import MusEngineError

logger = logging.getLogger("mus.simulate")


@dataclass
class TournamentSummary:
    tournament_winner: Team | None = None
    match_winners: List[Team] = field(default_factory=list)
    hands_played: int = 0
    steps: int = 0
    games: Dict[Team, int] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.tournament_winner is not None


def play_tournament(
    engine: MusEngine,
    policies: Mapping[str, Policy] | None = None,
    max_steps: int = 100_000,
) -> TournamentSummary:
    """
    Play until one team wins the tournament or ``max_steps`` engine calls were made.

    Every seat must be either a bot or have an entry in ``policies``.
    """
    policies = dict(policies or {})
    for p in engine.get_state().players:
        if not p.is_bot and p.id not in policies:
            raise ValueError(f"Seat {p.id} is not a bot and has no policy")

    summary = TournamentSummary()
    if engine.get_state().current_player_id is None and engine.get_state().phase is Phase.MUS:
        engine.deal_new_round()
        summary.hands_played += 1

    while summary.steps < max_steps:
        state = engine.get_state()
        if state.tournament_winner is not None:
            summary.match_winners.append(state.match_winner)
            summary.tournament_winner = state.tournament_winner
            break
        summary.steps += 1

        if state.phase is Phase.FINISHED:
            summary.match_winners.append(state.match_winner)
            logger.info("Match %d won by team %s", len(summary.match_winners), state.match_winner.value)
            engine.reset_to_new_game()
            summary.hands_played += 1
            continue
        if state.phase is Phase.SCORING:
            engine.deal_new_round()
            summary.hands_played += 1
            continue

        player = state.current_player
        if player is None:
            raise MusEngineError(f"No player to act in {state.phase.value}/{state.sub_phase.value}")
        if player.id in policies:
            view = engine.view(player.id)
            action = policies[player.id].act(encode_observation(view), legal_action_mask(view))
            applied = apply_action_index(engine, player.id, action)
        else:
            applied = engine.process_bot_actions()
        if not applied:
            raise MusEngineError(f"{player.id} made no progress in {state.sub_phase.value}")
    else:
        logger.warning("Tournament not finished after %d steps", max_steps)

    final = engine.get_state()
    summary.games = {team: final.ledger.get(team).games for team in Team}
    return summary
