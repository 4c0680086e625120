"""Completed-game history endpoints."""

from fastapi import APIRouter

from bot.history import CompletedGame, get_history_store
from bot.schemas import CompletedGameResponse, HistoryResponse, NetWinningsResponse

router = APIRouter()


def _record_response(record: CompletedGame) -> CompletedGameResponse:
    return CompletedGameResponse.model_validate(record)


@router.get("")
async def get_history(player_id: str | None = None) -> HistoryResponse:
    """List completed games, optionally for a single player."""
    store = await get_history_store()
    records = await store.records(player_id)
    return HistoryResponse(games=[_record_response(r) for r in records])


@router.get("/{player_id}/net")
async def get_net_winnings(player_id: str) -> NetWinningsResponse:
    """Sum of payout minus wager over a player's completed games."""
    store = await get_history_store()
    records = await store.records(player_id)
    return NetWinningsResponse(
        player_id=player_id,
        games_played=len(records),
        net=sum(r.net for r in records),
    )
