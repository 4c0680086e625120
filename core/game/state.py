"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: PLACE_BET → PLAYER_TURN → DEALER_TURN → one of the terminal states.
    """

    # Waiting for a wager
    PLACE_BET = auto()

    # Player hits or stays
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Terminal outcomes
    BUSTED = auto()
    BLACKJACK = auto()
    PUSH = auto()
    WON = auto()
    LOST = auto()

    # Voided because the deck ran out of cards
    FAILED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition is possible from this state."""
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {
        GameState.BUSTED,
        GameState.BLACKJACK,
        GameState.PUSH,
        GameState.WON,
        GameState.LOST,
        GameState.FAILED,
    }
)
