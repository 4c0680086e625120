"""Pydantic schemas for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommandRequest(BaseModel):
    """A chat message forwarded by the transport."""

    player_id: str = Field(..., min_length=1, description="Resolved sender id")
    text: str = Field(..., description="Message text without transport framing")


class CommandResponse(BaseModel):
    """Reply to forward to the originating channel."""

    reply: str | None = Field(None, description="None when the message is not a game command")
    game_over: bool = False


class GameResponse(BaseModel):
    """A player's game in progress."""

    player_id: str
    state: str
    wager: int
    description: str


class CompletedGameResponse(BaseModel):
    """A finished round."""

    model_config = ConfigDict(from_attributes=True)

    player_id: str
    outcome: str
    wager: int
    payout: int
    player_score: int
    dealer_score: int
    did_win: bool
    net: int
    finished_at: datetime


class HistoryResponse(BaseModel):
    """Completed games in completion order."""

    games: list[CompletedGameResponse]


class NetWinningsResponse(BaseModel):
    """Net result of a player's completed games."""

    player_id: str
    games_played: int
    net: int
