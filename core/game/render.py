"""Text rendering of a game for chat replies."""

from typing import TYPE_CHECKING

from core.game.state import GameState
from core.hand import Hand

if TYPE_CHECKING:
    from core.game.engine import BlackjackGame

HIDDEN_CARD = "??"


def _full_hand(hand: Hand) -> str:
    return str(hand) if hand.cards else "(no cards)"


def _dealer_showing(hand: Hand) -> str:
    """Reveal the first dealer card only."""
    if not hand.cards:
        return "(no cards)"
    hidden = [HIDDEN_CARD] * (len(hand.cards) - 1)
    return " ".join([str(hand.cards[0]), *hidden])


def _place_bet(game: "BlackjackGame") -> list[str]:
    return ["Place your bet with `bet <amount>`."]


def _player_turn(game: "BlackjackGame") -> list[str]:
    return [
        f"Dealer: {_dealer_showing(game.dealer_hand)}",
        f"You: {_full_hand(game.player_hand)}",
        f"Wager: {game.wager}",
        "Will you `hit` or `stay`?",
    ]


def _table(game: "BlackjackGame") -> list[str]:
    return [
        f"Dealer: {_full_hand(game.dealer_hand)}",
        f"You: {_full_hand(game.player_hand)}",
        f"Wager: {game.wager}",
    ]


def _dealer_turn(game: "BlackjackGame") -> list[str]:
    return _table(game) + ["Dealer is playing..."]


def _busted(game: "BlackjackGame") -> list[str]:
    return _table(game) + [f"Busted! You lose {game.wager}."]


def _blackjack(game: "BlackjackGame") -> list[str]:
    return _table(game) + [f"Blackjack! Payout: {game.payout}"]


def _push(game: "BlackjackGame") -> list[str]:
    return _table(game) + [f"Push. Payout: {game.payout}"]


def _won(game: "BlackjackGame") -> list[str]:
    return _table(game) + [f"You win! Payout: {game.payout}"]


def _lost(game: "BlackjackGame") -> list[str]:
    return _table(game) + [f"Dealer wins. You lose {game.wager}."]


def _failed(game: "BlackjackGame") -> list[str]:
    return _table(game) + [
        f"The deck ran out of cards, this hand is void. Refund: {game.payout}"
    ]


RENDERERS = {
    GameState.PLACE_BET: _place_bet,
    GameState.PLAYER_TURN: _player_turn,
    GameState.DEALER_TURN: _dealer_turn,
    GameState.BUSTED: _busted,
    GameState.BLACKJACK: _blackjack,
    GameState.PUSH: _push,
    GameState.WON: _won,
    GameState.LOST: _lost,
    GameState.FAILED: _failed,
}


def render_game(game: "BlackjackGame") -> str:
    """
    Describe the game for the player.

    While the player is deciding only the dealer's first card is shown;
    from the dealer's turn on both hands are shown in full.
    """
    return "\n".join(RENDERERS[game.state](game))
