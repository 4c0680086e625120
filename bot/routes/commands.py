"""Chat command endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from bot.history import get_history_store
from bot.schemas import CommandRequest, CommandResponse, GameResponse
from bot.session import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter()

# Single owner of all active games for this process
manager = SessionManager()


@router.post("/commands")
async def handle_command(command: CommandRequest) -> CommandResponse:
    """Apply a chat message to the sender's game and return the reply text."""
    reply = manager.handle_message(command.player_id, command.text)
    if reply is None:
        return CommandResponse()

    if reply.record is not None:
        logger.debug("Storing %s round of %s", reply.record.outcome, reply.record.player_id)
        store = await get_history_store()
        await store.append(reply.record)

    return CommandResponse(reply=reply.text, game_over=reply.game_over)


@router.get("/games/{player_id}")
async def get_game(player_id: str) -> GameResponse:
    """Get a player's game in progress."""
    game = manager.active_game(player_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"No active game for {player_id}")

    return GameResponse(
        player_id=player_id,
        state=game.state.name,
        wager=game.wager,
        description=game.render(),
    )
