"""Tests for hand scoring."""

from hypothesis import given, strategies as st

from core.cards import Card, Rank, Suit
from core.scoring import is_natural, score

card_strategy = st.builds(Card, st.sampled_from(list(Rank)), st.sampled_from(list(Suit)))


def test_empty_hand_scores_zero():
    """Test an empty hand."""
    assert score([]) == 0


def test_ace_king_is_21(make_cards):
    """Test a natural."""
    assert score(make_cards("AS KH")) == 21


def test_three_faces_bust_without_reduction(make_cards):
    """Test that no reduction happens without aces."""
    assert score(make_cards("KS KH QD")) == 30


def test_ace_reduced_when_eleven_busts(make_cards):
    """Test A-5-Q-9 counts the ace as 1."""
    assert score(make_cards("AS 5H QD 9C")) == 25


def test_only_needed_aces_are_reduced(make_cards):
    """Test 8-A-A reduces one ace and keeps the other at 11."""
    assert score(make_cards("8S AH AD")) == 20


def test_pair_of_aces(make_cards):
    """Test A-A is 12."""
    assert score(make_cards("AS AH")) == 12


def test_four_aces_and_a_seven(make_cards):
    """Test all aces reduced."""
    assert score(make_cards("AS AH AD AC 7S")) == 21


def test_is_natural(make_cards):
    """Test natural detection depends on hand size."""
    assert is_natural(make_cards("AS 10H"))
    assert not is_natural(make_cards("7S 7H 7D"))
    assert not is_natural(make_cards("AS 9H"))


@given(hand=st.lists(card_strategy, max_size=8), data=st.data())
def test_score_ignores_order(hand, data):
    """Test that any permutation scores the same."""
    shuffled = data.draw(st.permutations(hand))
    assert score(shuffled) == score(hand)


@given(hand=st.lists(card_strategy, min_size=1, max_size=8))
def test_aces_only_reduce_above_21(hand):
    """Test the total is either at most 21 or has every ace at 1."""
    total = score(hand)
    hard_total = sum(1 if card.is_ace else card.value for card in hand)
    assert total <= 21 or total == hard_total
    assert total >= hard_total
