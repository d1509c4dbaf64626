"""Mus game engine (four players, two teams, Spanish 40-card deck)."""

__version__ = "0.1.0"

from .deck import Card, Suit, make_deck_40
from .deal import deal_hands, redraw, Deal, Redraw
from .constants import BidKind, MusChoice, Phase, SignalKind, SubPhase, Team
from .config import RulesConfig, DEFAULT_RULES
from .errors import MusEngineError, InvariantViolation, HandSizeError
from .evaluation import (
    high_score,
    low_score,
    pairs_score,
    game_score,
    point_score,
    point_total,
    has_game,
    has_pairs,
)
from .scoring import Ledger, TeamScore
from .personalities import Personality, PRESET_PERSONALITIES, random_personality
from .actions import Pass, Raise, RaiseAgain, AllIn, Accept, Decline, BidAction
from .state import MatchState, Player, new_match_state
from .game import apply_action
from .views import PlayerView, player_view
from .bots import MusBot
from .engine import MusEngine, TurnToken
from .scheduler import BotDriver, Pacing
