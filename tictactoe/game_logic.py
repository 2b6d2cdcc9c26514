"""Core tic-tac-toe mechanics.

This module implements the rules of the game while remaining completely
framework-agnostic. :class:`GameEngine` operates only on the in-memory
stores of an :class:`~tictactoe.state.AppContext`; the FastAPI routers call
into it without the engine knowing anything about HTTP.

A game moves ``waiting -> active -> completed | draw`` and never back.
The engine holds the game's lock for the whole of every mutation, and
reports finished games to the :class:`~tictactoe.stats.StatsAggregator`
before releasing it, so stats are up to date by the time ``make_move``
returns.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence

from .constants import (
    MAX_PLAYERS,
    OUTCOME_DRAWN,
    OUTCOME_LOST,
    OUTCOME_WON,
    STATUS_ACTIVE,
    STATUS_COMPLETED,
    STATUS_DRAW,
    STATUS_WAITING,
    WINNING_LINES,
)
from .errors import ConflictError, InvalidStateTransitionError, NotFoundError
from .schemas import Coordinate, Game, GameStats, GameStatusSummary, Move, MoveResult
from .state import AppContext, new_id
from .stats import StatsAggregator
from .validation import parse_coordinate, parse_game_name, parse_status

logger = logging.getLogger(__name__)

Board = Sequence[Sequence[Optional[str]]]

# ---------------------------------------------------------------------------
# Board helpers
# ---------------------------------------------------------------------------


class ValidMoves:
    """Empty cells of *board* in row-major order; iterate it as often as needed."""

    def __init__(self, board: Board):
        self._board = board

    def __iter__(self) -> Iterator[Coordinate]:
        for r, row in enumerate(self._board):
            for c, cell in enumerate(row):
                if cell is None:
                    yield Coordinate(row=r, col=c)

    def __len__(self) -> int:
        return sum(1 for _ in self)


def get_valid_moves(board: Board) -> ValidMoves:
    return ValidMoves(board)


def has_winning_line(board: Board, mark: str) -> bool:
    return any(all(board[r][c] == mark for r, c in line) for line in WINNING_LINES)


def is_board_full(board: Board) -> bool:
    return all(cell is not None for row in board for cell in row)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class GameEngine:
    def __init__(self, context: AppContext, stats: Optional[StatsAggregator] = None):
        self.games = context.games
        self.players = context.players
        self.stats = stats or StatsAggregator(context)

    # -------------------- Lifecycle -------------------- #

    def create_game(self, name: Optional[str] = None) -> Game:
        name = parse_game_name(name)
        game_id = new_id()
        now = datetime.now(timezone.utc)
        game = self.games.add(
            Game(id=game_id, name=name or f"Game {game_id[:8]}", created_at=now, updated_at=now)
        )
        logger.info("Game created: %s (%s)", game.id, game.name)
        return game

    def get_game_by_id(self, game_id: str) -> Game:
        return self.games.get(game_id)

    def get_game_status(self, game_id: str) -> GameStatusSummary:
        game = self.games.get(game_id)
        return GameStatusSummary(
            game_id=game.id,
            status=game.status,
            current_player_id=game.current_player_id,
            winner_id=game.winner_id,
            player_count=len(game.players),
        )

    def list_games(self, status: Optional[str] = None) -> List[Game]:
        status = parse_status(status)
        games = self.games.values()
        if status is None:
            return games
        return [g for g in games if g.status == status]

    def delete_game(self, game_id: str) -> None:
        with self.games.locked(game_id) as game:
            if game.status == STATUS_ACTIVE:
                raise InvalidStateTransitionError("Cannot delete an active game")
            self.games.remove(game_id)
        logger.info("Game deleted: %s", game_id)

    # -------------------- Joining -------------------- #

    def join_game(self, game_id: str, player_id: str) -> Game:
        with self.games.locked(game_id) as game:
            if player_id not in self.players:
                raise NotFoundError("player", player_id)
            if game.status != STATUS_WAITING:
                raise InvalidStateTransitionError("Game is not accepting players")
            if player_id in game.players:
                raise InvalidStateTransitionError("Player already joined this game")
            if len(game.players) >= MAX_PLAYERS:
                raise InvalidStateTransitionError("Game is full")

            game.players.append(player_id)
            if len(game.players) == MAX_PLAYERS:
                # The first joiner always opens
                game.current_player_id = game.players[0]
                game.status = STATUS_ACTIVE
            game.updated_at = datetime.now(timezone.utc)
            logger.info("Player %s joined game %s (%d/%d)", player_id, game_id, len(game.players), MAX_PLAYERS)
            return game.model_copy(deep=True)

    # -------------------- Moves -------------------- #

    def make_move(self, game_id: str, player_id: str, row: int, col: int) -> MoveResult:
        with self.games.locked(game_id) as game:
            row = parse_coordinate("row", row)
            col = parse_coordinate("col", col)
            if game.status != STATUS_ACTIVE:
                raise InvalidStateTransitionError(f"Game is not active (status: {game.status})")
            if player_id not in game.players:
                raise ConflictError("Player is not part of this game")
            if player_id != game.current_player_id:
                logger.debug("Rejected out-of-turn move by %s in game %s", player_id, game_id)
                raise ConflictError("It is not this player's turn")
            if game.board[row][col] is not None:
                logger.debug("Rejected move on occupied cell (%d, %d) in game %s", row, col, game_id)
                raise ConflictError("Cell is already occupied")

            now = datetime.now(timezone.utc)
            move = Move(id=new_id(), game_id=game_id, player_id=player_id, row=row, col=col, timestamp=now)
            game.board[row][col] = player_id
            game.moves.append(move)
            game.updated_at = now

            if has_winning_line(game.board, player_id):
                game.status = STATUS_COMPLETED
                game.winner_id = player_id
                logger.info("Game %s won by %s after %d moves", game_id, player_id, len(game.moves))
                self._record_outcome(game)
            elif is_board_full(game.board):
                game.status = STATUS_DRAW
                logger.info("Game %s ended in a draw", game_id)
                self._record_outcome(game)
            else:
                game.current_player_id = next(p for p in game.players if p != player_id)

            return MoveResult(game=game.model_copy(deep=True), move=move)

    def _record_outcome(self, game: Game) -> None:
        """Report a just-finished game to the stats aggregator, once per participant."""
        moves_in_game = len(game.moves)
        for pid in game.players:
            if game.status == STATUS_DRAW:
                outcome = OUTCOME_DRAWN
            else:
                outcome = OUTCOME_WON if pid == game.winner_id else OUTCOME_LOST
            try:
                self.stats.update_after_game(pid, outcome, moves_in_game)
            except NotFoundError:
                logger.warning("Player %s no longer exists; stats for game %s not recorded", pid, game.id)

    # -------------------- Queries -------------------- #

    def valid_moves_for(self, game_id: str) -> List[Coordinate]:
        return list(get_valid_moves(self.games.get(game_id).board))

    def get_game_stats(self, game_id: str) -> GameStats:
        game = self.games.get(game_id)
        moves_by_player = {pid: 0 for pid in game.players}
        for move in game.moves:
            moves_by_player[move.player_id] = moves_by_player.get(move.player_id, 0) + 1
        return GameStats(
            game_id=game.id,
            status=game.status,
            total_moves=len(game.moves),
            moves_by_player=moves_by_player,
            empty_cells=len(get_valid_moves(game.board)),
            winner_id=game.winner_id,
            duration_seconds=(game.updated_at - game.created_at).total_seconds(),
        )


__all__ = [
    "ValidMoves",
    "get_valid_moves",
    "has_winning_line",
    "is_board_full",
    "GameEngine",
]
