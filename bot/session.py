"""Per-player game sessions and the completed-game history."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from bot.commands import BET, HIT, STAY, VERBS, InvalidBetArgument, parse_bet, parse_command
from bot.history import CompletedGame
from core.errors import DeckExhausted
from core.game import BlackjackGame, EventType, GameEvent
from core.rules import RuleSet

logger = logging.getLogger(__name__)

GameFactory = Callable[[str], BlackjackGame]


@dataclass(frozen=True)
class Reply:
    """Outcome of a handled command."""

    text: str
    game_over: bool = False
    record: CompletedGame | None = None


@dataclass
class _PlayerLock:
    """A player's command lock and the number of callers holding or awaiting it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class SessionManager:
    """
    Owner of every active game, at most one per player.

    A game lives in the active table from the first command of a player
    until it reaches a terminal state; it is then removed and appended to
    the history in the same critical section. Commands of one player are
    serialized by a per-player lock, so different players never wait on
    each other. A lock is dropped once no command of its player is running
    or waiting.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        game_factory: GameFactory | None = None,
    ) -> None:
        """
        Initialize an empty session table.

        Args:
            rules: Table rules for new games (uses defaults if not provided)
            game_factory: Builds the game for a player id; overrides `rules`
        """
        self.rules = rules or RuleSet()
        self._game_factory = game_factory or self._default_factory
        self._games: dict[str, BlackjackGame] = {}
        self._history: list[CompletedGame] = []

        self._locks: dict[str, _PlayerLock] = {}
        self._locks_guard = threading.Lock()
        self._history_lock = threading.Lock()

    def _default_factory(self, player_id: str) -> BlackjackGame:
        return BlackjackGame(player_id, rules=self.rules)

    @contextmanager
    def _player_lock(self, player_id: str) -> Iterator[None]:
        """Hold the lock serializing a player's commands."""
        with self._locks_guard:
            entry = self._locks.get(player_id)
            if entry is None:
                entry = self._locks[player_id] = _PlayerLock()
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[player_id]

    def handle_message(self, player_id: str, text: str) -> Reply | None:
        """Parse a raw chat message and handle it; None if it is not a game command."""
        command = parse_command(text)
        if command is None or not command.is_known:
            return None
        return self.handle_command(player_id, command.verb, command.arg)

    def handle_command(
        self,
        player_id: str,
        verb: str,
        arg: str | None = None,
    ) -> Reply | None:
        """
        Apply a command to the player's game.

        Args:
            player_id: Identifier of the sender
            verb: One of "bet", "hit", "stay" (anything else is ignored)
            arg: Bet amount as typed by the player

        Returns:
            The reply to send back, or None for verbs the engine does not handle
        """
        verb = verb.lower()
        if verb not in VERBS:
            return None

        amount = 0
        if verb == BET:
            try:
                amount = parse_bet(arg)
            except InvalidBetArgument as exc:
                logger.info("Rejected bet from %s: %s", player_id, exc)
                return Reply(InvalidBetArgument.message)

        with self._player_lock(player_id):
            game = self._games.get(player_id)
            if game is None:
                game = self._new_game(player_id)

            actions = {
                BET: lambda: game.bet(amount),
                HIT: game.hit,
                STAY: game.stay,
            }

            try:
                if not actions[verb]():
                    logger.debug("Ignored %s from %s in %s", verb, player_id, game.state)
            except DeckExhausted:
                logger.exception("Voided game of %s", player_id)

            text = game.render()
            if not game.is_over:
                return Reply(text)

            record = self._archive(game)
            return Reply(text, game_over=True, record=record)

    def _new_game(self, player_id: str) -> BlackjackGame:
        game = self._game_factory(player_id)
        game.subscribe(self._log_event)
        self._games[player_id] = game
        logger.debug("Created game for %s", player_id)
        return game

    def _archive(self, game: BlackjackGame) -> CompletedGame:
        """Move a finished game from the active table to the history."""
        record = CompletedGame.from_game(game)
        del self._games[game.player_id]
        with self._history_lock:
            self._history.append(record)
        return record

    @staticmethod
    def _log_event(event: GameEvent) -> None:
        if event.event_type == EventType.ROUND_ENDED:
            logger.info(
                "Round ended for %s: %s (wager %s, payout %s)",
                event.data["player"],
                event.data["state"],
                event.data["wager"],
                event.data["payout"],
            )
        else:
            logger.debug("%s", event)

    def active_game(self, player_id: str) -> BlackjackGame | None:
        """Return the player's game in progress, if any."""
        return self._games.get(player_id)

    @property
    def active_players(self) -> list[str]:
        """Return the players with a game in progress."""
        return list(self._games)

    @property
    def history(self) -> list[CompletedGame]:
        """Return all completed games in completion order."""
        with self._history_lock:
            return self._history.copy()

    def history_for(self, player_id: str) -> list[CompletedGame]:
        """Return a player's completed games in completion order."""
        return [r for r in self.history if r.player_id == player_id]

    def net_winnings(self, player_id: str) -> int:
        """Sum of payout minus wager over a player's completed games."""
        return sum(r.net for r in self.history_for(player_id))
