"""Pydantic data schemas used across the service.

This module centralises all models so that other packages can import
from a single location instead of sprinkling the definitions across
multiple files. Every model serialises with camelCase keys
(``model_dump(by_alias=True)``) while Python code keeps snake_case.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from .constants import BOARD_SIZE, STATUS_WAITING


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def empty_board() -> List[List[Optional[str]]]:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


# -----------------------------
# Core entities
# -----------------------------

class PlayerStats(CamelModel):
    """Cumulative counters plus the metrics derived from them."""

    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_drawn: int = 0
    total_moves: int = 0
    average_moves_per_win: float = 0
    win_rate: float = 0
    efficiency: float = 0


class Player(CamelModel):
    id: str
    name: str
    email: str
    stats: PlayerStats = Field(default_factory=PlayerStats)
    created_at: datetime
    updated_at: datetime


class Move(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    game_id: str
    player_id: str
    row: int
    col: int
    timestamp: datetime


class Game(CamelModel):
    id: str
    name: str
    status: str = STATUS_WAITING
    # Each cell holds the id of the occupying player, or None
    board: List[List[Optional[str]]] = Field(default_factory=empty_board)
    players: List[str] = Field(default_factory=list)
    current_player_id: Optional[str] = None
    winner_id: Optional[str] = None
    moves: List[Move] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# -----------------------------
# Operation results
# -----------------------------

class MoveResult(CamelModel):
    game: Game
    move: Move


class GameStatusSummary(CamelModel):
    game_id: str
    status: str
    current_player_id: Optional[str] = None
    winner_id: Optional[str] = None
    player_count: int


class GameStats(CamelModel):
    game_id: str
    status: str
    total_moves: int
    moves_by_player: Dict[str, int]
    empty_cells: int
    winner_id: Optional[str] = None
    duration_seconds: float


class Coordinate(CamelModel):
    row: int
    col: int


class LeaderboardFilters(CamelModel):
    min_games: Optional[int] = None
    # Echoed back under the query parameter name
    name_contains: Optional[str] = Field(default=None, serialization_alias="playerName")
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    def is_empty(self) -> bool:
        return all(v is None for v in self.model_dump().values())


class LeaderboardPage(CamelModel):
    players: List[Player]
    metric: str
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


# -----------------------------
# REST request models
# -----------------------------

class CreateGameRequest(CamelModel):
    name: Optional[str] = None


class JoinGameRequest(CamelModel):
    player_id: str


class MakeMoveRequest(CamelModel):
    player_id: str
    row: StrictInt
    col: StrictInt


class CreatePlayerRequest(CamelModel):
    name: str
    email: str


class UpdatePlayerRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None


__all__ = [
    "CamelModel",
    "empty_board",
    # entities
    "PlayerStats",
    "Player",
    "Move",
    "Game",
    # results
    "MoveResult",
    "GameStatusSummary",
    "GameStats",
    "Coordinate",
    "LeaderboardFilters",
    "LeaderboardPage",
    # requests
    "CreateGameRequest",
    "JoinGameRequest",
    "MakeMoveRequest",
    "CreatePlayerRequest",
    "UpdatePlayerRequest",
]
