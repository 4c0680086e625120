"""Core blackjack engine - independent of the chat transport."""

from core.cards import Card, Deck, Rank, Suit
from core.errors import CryptoJackError, DeckExhausted
from core.hand import Hand
from core.rules import RuleSet
from core.scoring import score, is_natural

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "CryptoJackError",
    "DeckExhausted",
    "Hand",
    "RuleSet",
    "score",
    "is_natural",
]
