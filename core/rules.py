"""Blackjack table rules."""

from dataclasses import dataclass

from config import config


@dataclass(frozen=True)
class RuleSet:
    """
    Table rules configuration.

    Defaults come from the application configuration.
    """

    # Number of 52-card decks shuffled together for each game
    num_decks: int = config.game.num_decks

    # Blackjack payout on top of the returned wager (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = config.game.blackjack_payout

    # Dealer draws while below this total
    dealer_stands_on: int = config.game.dealer_stands_on

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1:
            raise ValueError("num_decks must be at least 1")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if not 12 <= self.dealer_stands_on <= 21:
            raise ValueError("dealer_stands_on must be between 12 and 21")
