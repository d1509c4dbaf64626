"""Tests for the Spanish deck and card strengths."""
import pytest

from mus.deck import DECK_SIZE, Card, Suit, make_deck_40


def test_deck_40_unique_cards():
    deck = make_deck_40()
    assert len(deck) == DECK_SIZE == 40
    assert len(set(deck)) == 40
    assert {c.rank for c in deck} == {1, 2, 3, 4, 5, 6, 7, 10, 11, 12}


def test_strengths_follow_mus_values():
    strengths = {r: Card(Suit.OROS, r).strength for r in (1, 2, 3, 4, 5, 6, 7, 10, 11, 12)}
    assert strengths == {1: 1, 2: 1, 3: 10, 4: 4, 5: 5, 6: 6, 7: 7, 10: 10, 11: 10, 12: 10}


def test_card_names():
    c = Card(Suit.OROS, 12)
    assert c.display_name == "Rey de oros"
    assert str(c) == "RO"
    assert str(Card(Suit.BASTOS, 7)) == "7B"


def test_invalid_rank_rejected():
    with pytest.raises(ValueError):
        Card(Suit.COPAS, 8)
