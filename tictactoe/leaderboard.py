"""Ranked, filtered and paginated player listings."""
from __future__ import annotations

import logging
from datetime import datetime
from math import ceil
from typing import List, Optional

from .constants import METRIC_WINS
from .schemas import LeaderboardFilters, LeaderboardPage, Player
from .state import AppContext
from .validation import (
    parse_date_range,
    parse_limit,
    parse_metric,
    parse_min_games,
    parse_name_filter,
    parse_page,
)

logger = logging.getLogger(__name__)


def _matches(player: Player, filters: LeaderboardFilters, name_needle: Optional[str]) -> bool:
    if filters.min_games is not None and player.stats.games_played < filters.min_games:
        return False
    if name_needle is not None and name_needle not in player.name.lower():
        return False
    if filters.date_from is not None and player.created_at < filters.date_from:
        return False
    if filters.date_to is not None and player.created_at > filters.date_to:
        return False
    return True


class LeaderboardEngine:
    def __init__(self, context: AppContext):
        self.players = context.players

    def rank(
        self,
        metric: str,
        page: int = 1,
        limit: int = 10,
        min_games: Optional[int] = None,
        name_contains: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> LeaderboardPage:
        """Filter, sort descending by *metric* and slice out one page.

        Ties keep the store's insertion order: ``sorted`` is stable, and stays
        stable with ``reverse=True``.
        """
        metric = parse_metric(metric)
        page = parse_page(page)
        limit = parse_limit(limit)
        date_from, date_to = parse_date_range(date_from, date_to)
        filters = LeaderboardFilters(
            min_games=parse_min_games(min_games),
            name_contains=name_contains,
            date_from=date_from,
            date_to=date_to,
        )
        needle = parse_name_filter("playerName", name_contains) if name_contains is not None else None

        players: List[Player] = [p for p in self.players.values() if _matches(p, filters, needle)]
        if metric == METRIC_WINS:
            players = sorted(players, key=lambda p: p.stats.games_won, reverse=True)
        else:
            players = sorted(players, key=lambda p: p.stats.efficiency, reverse=True)

        total = len(players)
        total_pages = ceil(total / limit)
        start = (page - 1) * limit
        logger.debug("Leaderboard %s page %d/%d (%d players)", metric, page, total_pages, total)
        return LeaderboardPage(
            players=players[start:start + limit],
            metric=metric,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


__all__ = ["LeaderboardEngine"]
