"""Blackjack hand scoring."""

from typing import Iterable

from core.cards import Card

BLACKJACK = 21


def score(cards: Iterable[Card]) -> int:
    """
    Return the blackjack total of a hand.

    Aces count 11 and are reduced to 1, one at a time, only while the
    total is above 21. The result does not depend on card order.
    """
    total = 0
    aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            aces += 1

    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_natural(cards: Iterable[Card]) -> bool:
    """Check for a two-card 21."""
    cards = list(cards)
    return len(cards) == 2 and score(cards) == BLACKJACK
