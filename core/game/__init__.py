"""Game engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.state import GameState, TERMINAL_STATES
from core.game.engine import BlackjackGame

__all__ = [
    "GameEvent",
    "EventType",
    "GameState",
    "TERMINAL_STATES",
    "BlackjackGame",
]
