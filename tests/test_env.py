"""Tests for observation / action encoding helpers in mus.env."""
from mus.constants import Phase, SubPhase
from mus.deck import make_deck_40
from mus.engine import MusEngine
from mus.env import (
    BID_ACTION_OFFSET,
    DISCARD_ACTION_OFFSET,
    NUM_ACTIONS,
    NUM_CARDS,
    OBS_SIZE,
    apply_action_index,
    card_index,
    discard_action,
    discard_indices,
    encode_hand,
    encode_observation,
    legal_action_mask,
)
from tables import FakeClock, make_players


def _engine():
    engine = MusEngine(make_players(), seed=17, clock=FakeClock())
    engine.deal_new_round()
    return engine


def test_card_index_covers_full_deck_without_collision():
    deck = make_deck_40()
    indices = [card_index(c) for c in deck]
    assert sorted(indices) == list(range(NUM_CARDS))
    assert indices == list(range(NUM_CARDS))  # same order as make_deck_40
    assert NUM_ACTIONS == 24


def test_encode_hand_bits():
    deck = make_deck_40()
    vec = encode_hand(deck[:4])
    assert len(vec) == NUM_CARDS
    assert vec[:4] == [1, 1, 1, 1]
    assert sum(vec) == 4


def test_observation_size_and_hand_bits():
    engine = _engine()
    view = engine.view("p0")
    obs = encode_observation(view)
    assert len(obs) == OBS_SIZE
    assert sum(obs[:NUM_CARDS]) == 4.0
    assert all(isinstance(x, float) for x in obs)


def test_mask_mus_decision_only_for_current_player():
    engine = _engine()
    mask = legal_action_mask(engine.view("p0"))
    assert [i for i, ok in enumerate(mask) if ok] == [0, 1]
    assert not any(legal_action_mask(engine.view("p1")))


def test_mask_betting_matches_legal_bids():
    engine = _engine()
    assert apply_action_index(engine, "p0", 1)  # cut
    assert engine.get_state().phase is Phase.HIGH
    mask = legal_action_mask(engine.view("p0"))
    legal = [i - BID_ACTION_OFFSET for i, ok in enumerate(mask) if ok]
    assert legal == [0, 1, 3]  # pass, raise, all-in
    assert apply_action_index(engine, "p0", BID_ACTION_OFFSET + 1)
    assert engine.get_state().bid.amount == 2


def test_discard_actions():
    engine = _engine()
    for pid in ("p0", "p1", "p2", "p3"):
        assert apply_action_index(engine, pid, 0)  # mus
    assert engine.get_state().sub_phase is SubPhase.DISCARDING
    mask = legal_action_mask(engine.view("p0"))
    assert sum(mask) == 16
    assert all(mask[DISCARD_ACTION_OFFSET:])

    assert discard_indices(discard_action([0, 3])) == [0, 3]
    assert discard_action([]) == DISCARD_ACTION_OFFSET
    kept = engine.get_state().player("p0").hand[1:3]
    assert apply_action_index(engine, "p0", discard_action([0, 3]))
    assert engine.get_state().player("p0").hand[:2] == kept


def test_out_of_range_action_raises():
    import pytest

    with pytest.raises(ValueError):
        apply_action_index(_engine(), "p0", NUM_ACTIONS)
