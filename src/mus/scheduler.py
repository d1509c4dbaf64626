"""
Paces bot turns so a table can follow them.

``BotDriver`` holds at most one pending action. Each pending action carries the
``TurnToken`` of the turn it was scheduled for; if the game moved on in the
meantime (someone acted, or the match was reset) the action is dropped instead
of being fired into the wrong turn.

The driver does not own a thread or a timer. The caller calls ``tick()`` from
its own loop (a UI timer, a test, a simulation), and time comes from the
injected ``clock``.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, NamedTuple

from .constants import Phase, SubPhase
from .engine import MusEngine, TurnToken

logger = logging.getLogger("mus.scheduler")


@dataclass(frozen=True)
class Pacing:
    """Seconds a bot waits before acting, per kind of decision."""
    mus_decision: float = 1.5
    discard: float = 2.0
    bet: float = 1.8
    next_hand: float = 3.0

    def __post_init__(self) -> None:
        for name in ("mus_decision", "discard", "bet", "next_hand"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    def delay_for(self, sub_phase: SubPhase) -> float:
        if sub_phase is SubPhase.MUS_DECISION:
            return self.mus_decision
        if sub_phase is SubPhase.DISCARDING:
            return self.discard
        return self.bet


NO_DELAY = Pacing(0.0, 0.0, 0.0, 0.0)


class Pending(NamedTuple):
    due: float
    token: TurnToken | None  # None: deal the next hand
    epoch: int
    version: int


class BotDriver:
    """
    Usage:
        driver = BotDriver(engine, Pacing())
        while running:
            driver.tick()
    """

    def __init__(
        self,
        engine: MusEngine,
        pacing: Pacing | None = None,
        clock: Callable[[], float] = time.monotonic,
        auto_deal: bool = True,
    ) -> None:
        self.engine = engine
        self.pacing = pacing or Pacing()
        self.clock = clock
        self.auto_deal = auto_deal
        self._pending: Pending | None = None

    @property
    def pending(self) -> Pending | None:
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None:
            logger.debug("Cancelled pending action (due %.2f)", self._pending.due)
        self._pending = None

    def _is_current(self, pending: Pending) -> bool:
        state = self.engine.get_state()
        return pending.epoch == self.engine.epoch and pending.version == state.version

    def _restamp(self, pending: Pending) -> Pending:
        token = pending.token and self.engine.bot_turn_token()
        return pending._replace(token=token, version=self.engine.get_state().version)

    def _schedule(self, now: float) -> None:
        engine = self.engine
        state = engine.get_state()
        token = engine.bot_turn_token()
        if token is not None:
            due = now + self.pacing.delay_for(state.sub_phase)
            self._pending = Pending(due, token, engine.epoch, state.version)
            logger.debug("Scheduled %s in %s at %.2f", token.player_id, state.sub_phase.value, due)
        elif self.auto_deal and state.phase is Phase.SCORING:
            due = now + self.pacing.next_hand
            self._pending = Pending(due, None, engine.epoch, state.version)
            logger.debug("Scheduled next hand at %.2f", due)

    def tick(self) -> bool:
        """
        Drop a stale pending action, expire signals, fire a due action and
        schedule the next. Returns True if something was applied.
        """
        engine = self.engine
        now = self.clock()

        pending = self._pending
        if pending is not None and not self._is_current(pending):
            logger.debug("Pending action is stale, rescheduling")
            self._pending = pending = None

        if engine.expire_signals() and pending is not None:
            # An expired signal is not a move: the pending action keeps its turn and due time.
            pending = self._pending = self._restamp(pending)

        fired = False
        if pending is not None and now >= pending.due:
            self._pending = None
            if pending.token is None:
                fired = engine.deal_new_round()
            else:
                fired = engine.process_bot_actions(pending.token)

        if self._pending is None:
            self._schedule(self.clock())
        return fired
