from __future__ import annotations

import logging
from datetime import datetime, timezone

from .constants import OUTCOME_DRAWN, OUTCOME_LOST, OUTCOME_WON
from .schemas import Player, PlayerStats
from .state import AppContext
from .validation import parse_move_count, parse_outcome

logger = logging.getLogger(__name__)


def derive_stats(games_won: int, games_lost: int, games_drawn: int, total_moves: int) -> PlayerStats:
    """Build a full :class:`PlayerStats` from the four cumulative counters."""
    games_played = games_won + games_lost + games_drawn
    return PlayerStats(
        games_played=games_played,
        games_won=games_won,
        games_lost=games_lost,
        games_drawn=games_drawn,
        total_moves=total_moves,
        win_rate=(games_won / games_played) * 100 if games_played else 0,
        efficiency=games_won / total_moves if total_moves else 0,
        average_moves_per_win=total_moves / games_won if games_won else 0,
    )


class StatsAggregator:
    """Sole mutator of :class:`PlayerStats`."""

    def __init__(self, context: AppContext):
        self.players = context.players

    def update_after_game(self, player_id: str, outcome: str, moves_in_game: int) -> Player:
        """Credit one finished game to *player_id* and recompute derived metrics.

        *moves_in_game* is the whole game's move count (both players), not the
        player's own share.
        """
        outcome = parse_outcome(outcome)
        moves_in_game = parse_move_count(moves_in_game)
        with self.players.locked(player_id) as player:
            current = player.stats
            player.stats = derive_stats(
                current.games_won + (1 if outcome == OUTCOME_WON else 0),
                current.games_lost + (1 if outcome == OUTCOME_LOST else 0),
                current.games_drawn + (1 if outcome == OUTCOME_DRAWN else 0),
                current.total_moves + moves_in_game,
            )
            player.updated_at = datetime.now(timezone.utc)
            logger.info(
                "Stats updated for player %s: %s (%d moves), %d played",
                player_id, outcome, moves_in_game, player.stats.games_played,
            )
            return player.model_copy(deep=True)


__all__ = ["derive_stats", "StatsAggregator"]
