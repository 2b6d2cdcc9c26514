"""Parse functions sitting between the transport and the core.

Each ``parse_*`` helper takes a raw primitive and returns the normalised
value, or raises :class:`~tictactoe.errors.InvalidInputError` naming the
offending field. The core calls them on every value it accepts from outside
so that engines only ever work with well-formed data.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional, Tuple

from .constants import (
    BOARD_SIZE,
    GAME_NAME_MAX,
    GAME_NAME_MIN,
    GAME_STATUSES,
    METRICS,
    OUTCOMES,
    PAGE_LIMIT_MAX,
    PLAYER_NAME_MAX,
    SEARCH_QUERY_MAX,
)
from .errors import InvalidInputError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_game_name(name: Optional[str]) -> Optional[str]:
    """Return the trimmed game name, or ``None`` when a default should be used."""
    if name is None or name == "":
        return None
    if not isinstance(name, str):
        raise InvalidInputError("name", "Game name must be a string")
    trimmed = name.strip()
    if not GAME_NAME_MIN <= len(trimmed) <= GAME_NAME_MAX:
        raise InvalidInputError(
            "name", f"Game name must be between {GAME_NAME_MIN} and {GAME_NAME_MAX} characters"
        )
    return trimmed


def parse_player_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError("name", "Player name must be a non-empty string")
    trimmed = name.strip()
    if len(trimmed) > PLAYER_NAME_MAX:
        raise InvalidInputError("name", f"Player name must be {PLAYER_NAME_MAX} characters or less")
    return trimmed


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_email(email: str) -> str:
    if not isinstance(email, str) or not EMAIL_RE.match(email.strip()):
        raise InvalidInputError("email", "Valid email address is required")
    return normalize_email(email)


def parse_coordinate(field: str, value: int) -> int:
    if not _is_int(value) or not 0 <= value < BOARD_SIZE:
        raise InvalidInputError(field, f"Move coordinates must be between 0 and {BOARD_SIZE - 1}")
    return value


def parse_status(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    if status not in GAME_STATUSES:
        raise InvalidInputError("status", f"Status must be one of: {', '.join(GAME_STATUSES)}")
    return status


def parse_outcome(outcome: str) -> str:
    if outcome not in OUTCOMES:
        raise InvalidInputError("outcome", f"Outcome must be one of: {', '.join(OUTCOMES)}")
    return outcome


def parse_move_count(moves: int) -> int:
    if not _is_int(moves) or moves < 0:
        raise InvalidInputError("movesInGame", "Move count must be a non-negative integer")
    return moves


def parse_metric(metric: str) -> str:
    if metric not in METRICS:
        raise InvalidInputError("metric", f"Metric must be one of: {', '.join(METRICS)}")
    return metric


def parse_page(page: int) -> int:
    if not _is_int(page) or page < 1:
        raise InvalidInputError("page", "Page must be a positive integer")
    return page


def parse_limit(limit: int) -> int:
    if not _is_int(limit) or not 1 <= limit <= PAGE_LIMIT_MAX:
        raise InvalidInputError("limit", f"Limit must be a positive integer between 1 and {PAGE_LIMIT_MAX}")
    return limit


def parse_min_games(min_games: Optional[int]) -> Optional[int]:
    if min_games is None:
        return None
    if not _is_int(min_games) or min_games < 0:
        raise InvalidInputError("minGames", "minGames must be a non-negative integer")
    return min_games


def _check_query(field: str, query: Optional[str]) -> str:
    if not isinstance(query, str) or not query.strip():
        raise InvalidInputError(field, f"{field} must be a non-empty string")
    if len(query) > SEARCH_QUERY_MAX:
        raise InvalidInputError(field, f"{field} must be {SEARCH_QUERY_MAX} characters or less")
    return query


def parse_search_query(field: str, query: Optional[str]) -> str:
    """Trimmed, lower-cased substring used for case-insensitive name matching."""
    return _check_query(field, query).strip().lower()


def parse_name_filter(field: str, query: Optional[str]) -> str:
    # Surrounding whitespace is part of the needle; only blank filters are rejected
    return _check_query(field, query).lower()


def as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC so they compare with stored timestamps
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_date_range(
    date_from: Optional[datetime], date_to: Optional[datetime]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    date_from = as_utc(date_from) if date_from is not None else None
    date_to = as_utc(date_to) if date_to is not None else None
    if date_from is not None and date_to is not None and date_from > date_to:
        raise InvalidInputError("dateFrom", "dateFrom must be before or equal to dateTo")
    return date_from, date_to


__all__ = [
    "EMAIL_RE",
    "parse_game_name",
    "parse_player_name",
    "normalize_email",
    "parse_email",
    "parse_coordinate",
    "parse_status",
    "parse_outcome",
    "parse_move_count",
    "parse_metric",
    "parse_page",
    "parse_limit",
    "parse_min_games",
    "parse_search_query",
    "parse_name_filter",
    "as_utc",
    "parse_date_range",
]
