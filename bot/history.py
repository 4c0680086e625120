"""Completed-game records and the stores that persist them."""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from config import config
from core.game import BlackjackGame, GameState

logger = logging.getLogger(__name__)

WINNING_OUTCOMES = frozenset({GameState.BLACKJACK.name.lower(), GameState.WON.name.lower()})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CompletedGame:
    """A finished round, kept for auditing and net winnings."""

    player_id: str
    outcome: str
    wager: int
    payout: int
    player_score: int = 0
    dealer_score: int = 0
    finished_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_game(cls, game: BlackjackGame) -> "CompletedGame":
        """Snapshot a game that reached a terminal state."""
        if not game.is_over:
            raise ValueError(f"Game for {game.player_id} is still in {game.state}")
        return cls(
            player_id=game.player_id,
            outcome=game.state.name.lower(),
            wager=game.wager,
            payout=game.payout,
            player_score=game.player_hand.value,
            dealer_score=game.dealer_hand.value,
        )

    @property
    def did_win(self) -> bool:
        """Check if the round paid more than the wager."""
        return self.outcome in WINNING_OUTCOMES

    @property
    def net(self) -> int:
        """Amount won (positive) or lost (negative) in this round."""
        return self.payout - self.wager

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        data = asdict(self)
        data["finished_at"] = self.finished_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompletedGame":
        """Deserialize from `to_dict` output."""
        return cls(
            player_id=data["player_id"],
            outcome=data["outcome"],
            wager=data["wager"],
            payout=data["payout"],
            player_score=data.get("player_score", 0),
            dealer_score=data.get("dealer_score", 0),
            finished_at=datetime.fromisoformat(data["finished_at"]),
        )


class HistoryStore(ABC):
    """Abstract append-only store of completed games."""

    @abstractmethod
    async def append(self, record: CompletedGame) -> None:
        """Persist a completed game."""
        ...

    @abstractmethod
    async def records(self, player_id: str | None = None) -> list[CompletedGame]:
        """Return completed games in completion order, optionally for one player."""
        ...


class InMemoryHistoryStore(HistoryStore):
    """In-memory history store for local development."""

    def __init__(self) -> None:
        self._records: list[CompletedGame] = []

    async def append(self, record: CompletedGame) -> None:
        self._records.append(record)

    async def records(self, player_id: str | None = None) -> list[CompletedGame]:
        if player_id is None:
            return list(self._records)
        return [r for r in self._records if r.player_id == player_id]


class RedisHistoryStore(HistoryStore):
    """Redis-backed history store: one global list plus one list per player."""

    def __init__(self, redis_client: "redis.Redis", prefix: str | None = None) -> None:
        self._redis = redis_client
        self._prefix = prefix or config.redis.key_prefix

    def _key(self, player_id: str | None = None) -> str:
        """Get Redis key for the global or a player's list."""
        if player_id is None:
            return f"{self._prefix}all"
        return f"{self._prefix}player:{player_id}"

    async def append(self, record: CompletedGame) -> None:
        payload = json.dumps(record.to_dict())
        await self._redis.rpush(self._key(), payload)
        await self._redis.rpush(self._key(record.player_id), payload)

    async def records(self, player_id: str | None = None) -> list[CompletedGame]:
        raw = await self._redis.lrange(self._key(player_id), 0, -1)
        return [CompletedGame.from_dict(json.loads(item)) for item in raw]


# Global history store instance
_history_store: HistoryStore | None = None


async def get_history_store() -> HistoryStore:
    """Get or create the history store, preferring Redis when it is reachable."""
    global _history_store

    if _history_store is not None:
        return _history_store

    try:
        redis_client = redis.from_url(config.redis.url)
        await redis_client.ping()
        _history_store = RedisHistoryStore(redis_client)
        logger.info("Persisting completed games to Redis at %s", config.redis.host)
        return _history_store
    except (RedisError, OSError) as exc:
        logger.warning("Redis unavailable (%s), keeping completed games in memory", exc)

    _history_store = InMemoryHistoryStore()
    return _history_store
