"""Tests for the personality-driven bot."""
import random
from dataclasses import replace

import pytest

from mus.bots import MusBot, card_keep_scores, choose_discards, general_strength, phase_strength
from mus.constants import MusChoice, Phase, SignalKind
from mus.personalities import PRESET_PERSONALITIES, Personality, random_personality
from mus.views import player_view
from tables import PLAIN_HANDS, betting, hand


def test_phase_strength_range():
    rng = random.Random(2)
    from mus.deck import make_deck_40

    deck = make_deck_40()
    for _ in range(300):
        h = rng.sample(deck, 4)
        for phase in (Phase.HIGH, Phase.LOW, Phase.PAIRS, Phase.GAME, Phase.POINT):
            assert 0.0 <= phase_strength(h, phase) <= 10.0
        assert 0.0 <= general_strength(h) <= 10.0


def test_best_game_reads_strongest():
    assert phase_strength(hand("RO RC RE AB"), Phase.GAME) == 10.0
    assert phase_strength(hand("AO 4O 5O 7O"), Phase.GAME) == 0.0


def test_keep_scores_prefer_pairs_and_extremes():
    scores = card_keep_scores(hand("4O 5C RE RB"))
    assert scores[0] < 0 and scores[1] < 0
    assert scores[2] == scores[3] == 4


def test_discards_never_break_a_group():
    for seed in range(20):
        assert choose_discards(hand("RO RC RE AB"), random.Random(seed)) == [3]
        picked = choose_discards(hand("4O 5C 6E RB"), random.Random(seed))
        assert 1 <= len(picked) <= 3
        assert 3 not in picked


def test_decisions_are_legal():
    for seed in range(40):
        rng = random.Random(seed)
        bot = MusBot(random_personality(rng), rng)
        state = betting(PLAIN_HANDS)
        view = player_view(state, "p0")
        assert bot.decide_bid(view).kind in view.legal_bids
        assert bot.decide_mus(view) in (MusChoice.MUS, MusChoice.CUT)
        assert all(0 <= i < 4 for i in bot.select_discards(view))


def test_responses_are_legal():
    from mus.actions import AllIn, Raise
    from mus.bidding import apply_bid

    for seed in range(40):
        bot = MusBot(PRESET_PERSONALITIES["daring"], random.Random(seed))
        for opening in (Raise(2), AllIn()):
            state = apply_bid(betting(PLAIN_HANDS), "p0", opening)
            view = player_view(state, "p1")
            assert view.awaiting_response and view.is_responder
            assert bot.decide_bid(view).kind in view.legal_bids


def test_no_legal_bid_raises():
    bot = MusBot(Personality(), random.Random(0))
    view = player_view(betting(PLAIN_HANDS), "p1")
    with pytest.raises(ValueError):
        bot.decide_bid(view)


def test_partner_signal_shifts_read_by_trust():
    from mus.state import CompanionSignal
    from mus.constants import Team

    state = betting(PLAIN_HANDS)
    personality = PRESET_PERSONALITIES["watchful"]
    plain = MusBot(personality, random.Random(4)).read_hand(player_view(state, "p0"))
    signalled = replace(state, signal=CompanionSignal("p2", Team.A, SignalKind.GOOD, expires_at=99.0))
    boosted = MusBot(personality, random.Random(4)).read_hand(player_view(signalled, "p0"))
    assert boosted == pytest.approx(plain + personality.signal_reading / 10 * 1.5)


def test_same_seed_same_choices():
    state = betting(PLAIN_HANDS)
    view = player_view(state, "p0")
    a = MusBot(PRESET_PERSONALITIES["bluffer"], random.Random(12))
    b = MusBot(PRESET_PERSONALITIES["bluffer"], random.Random(12))
    assert [a.decide_bid(view) for _ in range(10)] == [b.decide_bid(view) for _ in range(10)]


def test_personality_traits_validated():
    with pytest.raises(ValueError):
        Personality(boldness=11)
    assert set(Personality().traits()) == {
        "boldness", "bluffing", "luck", "cut_tendency", "signal_reading",
        "deliberation", "fairness", "aggression_high", "aggression_low",
    }
    assert len(PRESET_PERSONALITIES) == 8
