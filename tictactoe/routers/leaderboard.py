from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..constants import METRIC_EFFICIENCY, METRIC_WINS
from ..schemas import LeaderboardFilters
from ..services import Services, get_services

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


class LeaderboardQuery:
    """Query-string parameters shared by both leaderboard endpoints."""

    def __init__(
        self,
        request: Request,
        page: int = Query(default=1),
        limit: Optional[int] = Query(default=None),
        min_games: Optional[int] = Query(default=None, alias="minGames"),
        player_name: Optional[str] = Query(default=None, alias="playerName"),
        date_from: Optional[datetime] = Query(default=None, alias="dateFrom"),
        date_to: Optional[datetime] = Query(default=None, alias="dateTo"),
    ):
        self.page = page
        self.limit = limit if limit is not None else request.app.state.config.DEFAULT_PAGE_LIMIT
        self.filters = LeaderboardFilters(
            min_games=min_games,
            name_contains=player_name,
            date_from=date_from,
            date_to=date_to,
        )


def _respond(services: Services, metric: str, query: LeaderboardQuery) -> dict:
    result = services.leaderboard.rank(
        metric,
        page=query.page,
        limit=query.limit,
        min_games=query.filters.min_games,
        name_contains=query.filters.name_contains,
        date_from=query.filters.date_from,
        date_to=query.filters.date_to,
    )
    return {
        "leaderboard": [p.model_dump(by_alias=True, mode="json") for p in result.players],
        "type": metric,
        "pagination": {
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "totalPages": result.total_pages,
            "hasNext": result.has_next,
            "hasPrev": result.has_prev,
        },
        "filters": None if query.filters.is_empty() else query.filters.model_dump(
            by_alias=True, mode="json", exclude_none=True
        ),
    }


@router.get("")
def wins_leaderboard(query: LeaderboardQuery = Depends(), services: Services = Depends(get_services)):
    return _respond(services, METRIC_WINS, query)


@router.get("/efficiency")
def efficiency_leaderboard(query: LeaderboardQuery = Depends(), services: Services = Depends(get_services)):
    return _respond(services, METRIC_EFFICIENCY, query)
