"""Wiring of engines around one :class:`AppContext`, plus the FastAPI dependency."""
from __future__ import annotations

from typing import Optional

from fastapi import Request

from .game_logic import GameEngine
from .leaderboard import LeaderboardEngine
from .players import PlayerService
from .state import AppContext
from .stats import StatsAggregator


class Services:
    def __init__(self, context: Optional[AppContext] = None):
        self.context = context or AppContext()
        self.stats = StatsAggregator(self.context)
        self.games = GameEngine(self.context, stats=self.stats)
        self.players = PlayerService(self.context)
        self.leaderboard = LeaderboardEngine(self.context)


def get_services(request: Request) -> Services:
    return request.app.state.services


__all__ = ["Services", "get_services"]
