"""
Engine facade: the object a table (UI, tests, simulations) talks to.

It owns the authoritative ``MatchState`` and the random source, forwards each
operation to the reducer and hands out the current state as an immutable
snapshot. Operations for the wrong player or the wrong moment are ignored and
return False.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Sequence

from .actions import (
    Action,
    BidAction,
    DealNewRound,
    Decline,
    DiscardCards,
    ExpireSignal,
    MusDecision,
    Pass,
    PlaceBid,
    ResetGame,
    ResetTournament,
    SendSignal,
    bid_from_kind,
)
from .bidding import legal_bids
from .bots import MusBot
from .config import RulesConfig
from .constants import BidKind, MusChoice, SignalKind, SubPhase
from .game import apply_action
from .personalities import Personality
from .state import MatchState, Player, new_match_state
from .views import PlayerView, player_view

logger = logging.getLogger("mus.engine")


@dataclass(frozen=True)
class TurnToken:
    """
    Identifies one turn: a reset bumps ``epoch``, every applied action bumps
    ``version``. A scheduled bot action is only valid while its token is current.
    """
    epoch: int
    version: int
    player_id: str


class MusEngine:
    """
    Usage:
        engine = MusEngine(players, seed=1)
        engine.deal_new_round()
        engine.process_mus_decision("p1", "cut")
        state = engine.get_state()
    """

    def __init__(
        self,
        players: Sequence[Player],
        rules: RulesConfig | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._rng = rng or random.Random(seed)
        self._clock = clock
        self._state = new_match_state(players, rules)
        self._epoch = 0
        self._bots: Dict[str, MusBot] = {
            p.id: MusBot(p.personality or Personality(), random.Random(self._rng.getrandbits(64)))
            for p in self._state.players
            if p.is_bot
        }

    # ---- State ----

    def get_state(self) -> MatchState:
        """Current snapshot. It is immutable, so holding on to it is safe."""
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    def view(self, player_id: str) -> PlayerView:
        return player_view(self._state, player_id)

    def legal_bids(self, player_id: str) -> tuple[BidKind, ...]:
        return legal_bids(self._state, player_id)

    def turn_token(self) -> TurnToken | None:
        pid = self._state.current_player_id
        if pid is None:
            return None
        return TurnToken(epoch=self._epoch, version=self._state.version, player_id=pid)

    def bot_turn_token(self) -> TurnToken | None:
        """Token for the current turn if a bot has to act, else None."""
        current = self._state.current_player
        if current is None or not current.is_bot:
            return None
        return self.turn_token()

    # ---- Operations ----

    def _apply(self, action: Action) -> bool:
        self._state = apply_action(self._state, ExpireSignal(now=self._clock()), self._rng)
        before = self._state
        self._state = apply_action(before, action, self._rng)
        applied = self._state is not before
        if applied:
            logger.debug("Applied %s (version %d)", action, self._state.version)
        return applied

    def deal_new_round(self) -> bool:
        return self._apply(DealNewRound())

    def process_mus_decision(self, player_id: str, decision: MusChoice | str) -> bool:
        try:
            choice = MusChoice(decision)
        except ValueError:
            logger.debug("Ignored: unknown mus decision %r from %s", decision, player_id)
            return False
        return self._apply(MusDecision(player_id, choice))

    def discard_cards(self, player_id: str, card_indices: Iterable[int]) -> bool:
        return self._apply(DiscardCards(player_id, tuple(card_indices)))

    def place_bet(self, player_id: str, bid: BidAction | BidKind | str) -> bool:
        """
        ``bid`` is a bid action or a bid kind name ("pass", "raise", ...); a bare
        "raise" uses the table's default raise.
        """
        if isinstance(bid, str):
            try:
                kind = BidKind(bid)
            except ValueError:
                logger.debug("Ignored: unknown bid %r from %s", bid, player_id)
                return False
            bid = bid_from_kind(kind, amount=self._state.rules.default_raise)
        return self._apply(PlaceBid(player_id, bid))

    def send_companion_signal(self, player_id: str, signal: SignalKind | str) -> bool:
        try:
            kind = SignalKind(signal)
        except ValueError:
            logger.debug("Ignored: unknown signal %r from %s", signal, player_id)
            return False
        return self._apply(SendSignal(player_id, kind, now=self._clock()))

    def expire_signals(self) -> bool:
        """Drop the companion signal once its display time is over."""
        before = self._state
        self._state = apply_action(before, ExpireSignal(now=self._clock()), self._rng)
        return self._state is not before

    def reset_to_new_game(self) -> bool:
        self._epoch += 1
        return self._apply(ResetGame())

    def reset_tournament(self) -> bool:
        self._epoch += 1
        return self._apply(ResetTournament())

    # ---- Bots ----

    def process_bot_actions(self, token: TurnToken | None = None) -> bool:
        """
        Let the bot whose turn it is act once. No-op if the current player is
        not a bot, or if ``token`` was issued for a turn that is already over.
        """
        state = self._state
        player = state.current_player
        if player is None or not player.is_bot:
            return False
        if token is not None and token != self.turn_token():
            logger.debug("Stale bot action for %s dropped", token.player_id)
            return False

        bot = self._bots[player.id]
        view = player_view(state, player.id)
        if state.sub_phase is SubPhase.MUS_DECISION:
            applied = self.process_mus_decision(player.id, bot.decide_mus(view))
        elif state.sub_phase is SubPhase.DISCARDING:
            applied = self.discard_cards(player.id, bot.select_discards(view))
        elif state.sub_phase is SubPhase.BETTING:
            applied = self.place_bet(player.id, bot.decide_bid(view))
        else:
            return False

        if not applied:
            logger.warning("Bot %s action rejected in %s; falling back", player.id, state.sub_phase.value)
            applied = self._fallback(player.id, state.sub_phase)
        return applied

    def _fallback(self, player_id: str, sub_phase: SubPhase) -> bool:
        if sub_phase is SubPhase.MUS_DECISION:
            return self.process_mus_decision(player_id, MusChoice.CUT)
        if sub_phase is SubPhase.DISCARDING:
            return self.discard_cards(player_id, [])
        if BidKind.PASS in self.legal_bids(player_id):
            return self.place_bet(player_id, Pass())
        return self.place_bet(player_id, Decline())
