"""Tests for the policies."""
import pytest

from mus.agents import RandomAgent, TopCardsAgent, hand_strengths_from_obs
from mus.engine import MusEngine
from mus.env import (
    BID_ACTION_OFFSET,
    DISCARD_ACTION_OFFSET,
    MUS_COUNT_INDEX,
    NUM_ACTIONS,
    OBS_SIZE,
    apply_action_index,
    encode_hand,
    encode_observation,
    legal_action_mask,
)
from tables import FakeClock, hand, make_players


def _obs(codes: str, mus_rounds: int = 0) -> list:
    obs = [float(x) for x in encode_hand(hand(codes))] + [0.0] * (OBS_SIZE - 40)
    obs[MUS_COUNT_INDEX] = mus_rounds / 10
    return obs


def _mask(*indices: int) -> list:
    return [i in indices for i in range(NUM_ACTIONS)]


def test_random_agent_respects_legal_mask():
    agent = RandomAgent(seed=123)
    obs = [0.0, 1.0, 2.0]  # RandomAgent ignores obs content
    legal = [False, True, False, True, False]
    for _ in range(50):
        assert agent.act(obs, legal) in (1, 3)


def test_random_agent_same_seed_same_actions():
    legal = [True] * NUM_ACTIONS
    a, b = RandomAgent(seed=5), RandomAgent(seed=5)
    assert [a.act([], legal) for _ in range(20)] == [b.act([], legal) for _ in range(20)]


def test_agents_without_legal_actions():
    with pytest.raises(ValueError):
        RandomAgent(seed=1).act([], [False, False])
    with pytest.raises(ValueError):
        TopCardsAgent().act(_obs("RO RC AE AB"), [False] * NUM_ACTIONS)


def test_hand_read_back_from_observation():
    engine = MusEngine(make_players(), seed=9, clock=FakeClock())
    engine.deal_new_round()
    view = engine.view("p0")
    strengths = hand_strengths_from_obs(encode_observation(view))
    assert sorted(strengths) == sorted(c.strength for c in view.hand)


def test_top_cards_mus_decision():
    agent = TopCardsAgent(patience=2)
    mus_or_cut = _mask(0, 1)
    assert agent.act(_obs("RO 3C 5E 6B"), mus_or_cut) == 1   # king + three: cut
    assert agent.act(_obs("4O 5C 6E 7B"), mus_or_cut) == 0   # nothing: mus
    assert agent.act(_obs("4O 5C 6E 7B", mus_rounds=2), mus_or_cut) == 1


def test_top_cards_discards():
    agent = TopCardsAgent()
    all_discards = _mask(*range(DISCARD_ACTION_OFFSET, NUM_ACTIONS))
    assert agent.act(_obs("4O 5C 6E 7B"), all_discards) == DISCARD_ACTION_OFFSET + 0b1111
    assert agent.act(_obs("RO RC 6E 7B"), all_discards) == DISCARD_ACTION_OFFSET


def test_top_cards_bids():
    agent = TopCardsAgent()
    opening = _mask(BID_ACTION_OFFSET + 0, BID_ACTION_OFFSET + 1, BID_ACTION_OFFSET + 3)
    assert agent.act(_obs("RO RC AE 7B"), opening) == BID_ACTION_OFFSET + 1   # raise
    assert agent.act(_obs("4O 5C 6E 7B"), opening) == BID_ACTION_OFFSET + 0   # pass
    answer = _mask(BID_ACTION_OFFSET + 3, BID_ACTION_OFFSET + 4, BID_ACTION_OFFSET + 5)
    assert agent.act(_obs("RO RC AE 7B"), answer) == BID_ACTION_OFFSET + 4    # accept the all-in
    assert agent.act(_obs("4O 5C 6E 7B"), answer) == BID_ACTION_OFFSET + 5    # decline


def test_top_cards_plays_only_legal_actions():
    engine = MusEngine(make_players(), seed=13, clock=FakeClock())
    engine.deal_new_round()
    agent = TopCardsAgent()
    for _ in range(200):
        state = engine.get_state()
        if state.current_player_id is None:
            break
        view = engine.view(state.current_player_id)
        mask = legal_action_mask(view)
        action = agent.act(encode_observation(view), mask)
        assert mask[action]
        assert apply_action_index(engine, view.player_id, action)
