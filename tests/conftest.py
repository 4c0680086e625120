"""Pytest fixtures for blackjack engine tests."""

import pytest
from random import Random

from core.cards import Card, Deck, Rank, Suit
from core.game import BlackjackGame
from core.hand import Hand


def cards(spec: str) -> list[Card]:
    """Build cards from a string like 'AS KH 10D'."""
    return [Card.from_string(s) for s in spec.split()]


def stack(spec: str) -> Deck:
    """A deck that deals the given cards in order, then runs out."""
    deck = Deck(num_decks=1)
    deck._cards = list(reversed(cards(spec)))
    return deck


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled 2-deck shoe."""
    d = Deck(num_decks=2, rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def make_cards():
    """Factory building card lists from strings like 'AS KH'."""
    return cards


@pytest.fixture
def stacked_deck():
    """
    Factory for decks dealing a fixed sequence.

    The opening deal goes player, dealer, player, dealer; later cards are
    hits for the player and then draws for the dealer.
    """
    return stack


@pytest.fixture
def stacked_game():
    """Factory for games dealt from a fixed sequence."""

    def _make(spec: str, player_id: str = "U1") -> BlackjackGame:
        return BlackjackGame(player_id, deck=stack(spec))

    return _make


@pytest.fixture
def game(rng):
    """A new game waiting for a bet."""
    return BlackjackGame("U1", rng=rng)


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(
        [
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.SIX, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        ]
    )
