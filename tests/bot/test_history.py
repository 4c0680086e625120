"""Tests for completed-game records and history stores."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

import bot.history as history
from bot.history import CompletedGame, InMemoryHistoryStore, RedisHistoryStore


def _record(player_id="U1", outcome="won", wager=100, payout=200):
    return CompletedGame(
        player_id=player_id,
        outcome=outcome,
        wager=wager,
        payout=payout,
        player_score=19,
        dealer_score=17,
        finished_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


class TestCompletedGame:
    """Tests for the CompletedGame record."""

    def test_from_finished_game(self, stacked_game):
        """Test snapshotting a terminal game."""
        game = stacked_game("10S 10H 7D 9C")
        game.bet(40)
        game.stay()

        record = CompletedGame.from_game(game)
        assert record.player_id == "U1"
        assert record.outcome == "lost"
        assert record.wager == 40
        assert record.payout == 0
        assert record.player_score == 17
        assert record.dealer_score == 19
        assert not record.did_win
        assert record.net == -40

    def test_from_active_game_raises(self, game):
        """Test that games in progress cannot be archived."""
        with pytest.raises(ValueError):
            CompletedGame.from_game(game)

    def test_did_win(self):
        """Test winning outcomes."""
        assert _record(outcome="won").did_win
        assert _record(outcome="blackjack", payout=250).did_win
        assert not _record(outcome="push", payout=100).did_win
        assert not _record(outcome="busted", payout=0).did_win

    def test_dict_roundtrip(self):
        """Test JSON-friendly serialization."""
        record = _record()
        data = record.to_dict()
        assert data["finished_at"] == "2024-01-02T03:04:05+00:00"
        assert json.loads(json.dumps(data)) == data
        assert CompletedGame.from_dict(data) == record


class TestInMemoryHistoryStore:
    """Tests for InMemoryHistoryStore."""

    @pytest.mark.asyncio
    async def test_append_and_filter(self):
        """Test storing and listing records."""
        store = InMemoryHistoryStore()
        await store.append(_record("U1"))
        await store.append(_record("U2"))
        await store.append(_record("U1", outcome="push", payout=100))

        assert len(await store.records()) == 3
        assert [r.outcome for r in await store.records("U1")] == ["won", "push"]
        assert await store.records("U3") == []


class TestRedisHistoryStore:
    """Tests for RedisHistoryStore against a mocked client."""

    @pytest.mark.asyncio
    async def test_append_pushes_to_both_lists(self):
        """Test the global and per-player lists."""
        client = MagicMock()
        client.rpush = AsyncMock()
        store = RedisHistoryStore(client, prefix="test:")

        await store.append(_record("U1"))

        keys = [call.args[0] for call in client.rpush.call_args_list]
        assert keys == ["test:all", "test:player:U1"]
        payload = json.loads(client.rpush.call_args_list[0].args[1])
        assert payload["outcome"] == "won"

    @pytest.mark.asyncio
    async def test_records_decodes_entries(self):
        """Test reading a list back."""
        client = MagicMock()
        client.lrange = AsyncMock(return_value=[json.dumps(_record().to_dict()).encode()])
        store = RedisHistoryStore(client, prefix="test:")

        records = await store.records("U1")

        client.lrange.assert_awaited_once_with("test:player:U1", 0, -1)
        assert records == [_record()]


class TestGetHistoryStore:
    """Tests for store selection."""

    @pytest.mark.asyncio
    async def test_falls_back_to_memory(self, monkeypatch):
        """Test the in-memory store when Redis is down."""
        client = MagicMock()
        client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
        monkeypatch.setattr(history, "_history_store", None)
        monkeypatch.setattr(history.redis, "from_url", lambda url: client)

        store = await history.get_history_store()

        assert isinstance(store, InMemoryHistoryStore)
        assert await history.get_history_store() is store

    @pytest.mark.asyncio
    async def test_uses_redis_when_reachable(self, monkeypatch):
        """Test the Redis store when ping succeeds."""
        client = MagicMock()
        client.ping = AsyncMock(return_value=True)
        monkeypatch.setattr(history, "_history_store", None)
        monkeypatch.setattr(history.redis, "from_url", lambda url: client)

        store = await history.get_history_store()

        assert isinstance(store, RedisHistoryStore)
