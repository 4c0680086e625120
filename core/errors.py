"""Exceptions raised by the blackjack engine."""


class CryptoJackError(Exception):
    """Base class for all engine errors."""


class DeckExhausted(CryptoJackError):
    """Raised when a card is requested from an empty deck.

    This is fatal for the game being played: the deck is sized so that it
    cannot happen in normal play.
    """

    def __init__(self, total_cards: int) -> None:
        super().__init__(f"Deck of {total_cards} cards is exhausted")
        self.total_cards = total_cards
