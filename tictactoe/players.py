"""Player records: creation, lookup, updates, search and stats reads."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .errors import ConflictError
from .schemas import Player, PlayerStats
from .state import AppContext, new_id
from .validation import (
    normalize_email,
    parse_email,
    parse_limit,
    parse_player_name,
    parse_search_query,
)

logger = logging.getLogger(__name__)


class PlayerService:
    def __init__(self, context: AppContext):
        self.players = context.players

    def create_player(self, name: str, email: str) -> Player:
        name = parse_player_name(name)
        email = parse_email(email)
        now = datetime.now(timezone.utc)
        with self.players.email_lock:
            if self.players.id_for_email(email) is not None:
                raise ConflictError("Email is already in use by another player")
            player = self.players.add(
                Player(id=new_id(), name=name, email=email, created_at=now, updated_at=now)
            )
        logger.info("Player created: %s (%s)", player.id, player.name)
        return player

    def get_player_by_id(self, player_id: str) -> Player:
        return self.players.get(player_id)

    def get_player_by_email(self, email: str) -> Optional[Player]:
        player_id = self.players.id_for_email(normalize_email(email))
        return self.players.find(player_id) if player_id else None

    def list_players(self) -> List[Player]:
        return self.players.values()

    def update_player(self, player_id: str, name: Optional[str] = None, email: Optional[str] = None) -> Player:
        """Apply a partial update. An update with no fields returns the player untouched."""
        if name is not None:
            name = parse_player_name(name)
        if email is not None:
            email = parse_email(email)
        with self.players.email_lock:
            with self.players.locked(player_id) as player:
                if name is None and email is None:
                    return player.model_copy(deep=True)
                if email is not None and email != player.email:
                    owner = self.players.id_for_email(email)
                    if owner is not None and owner != player_id:
                        raise ConflictError("Email is already in use by another player")
                    self.players.reindex_email(player_id, player.email, email)
                    player.email = email
                if name is not None:
                    player.name = name
                player.updated_at = datetime.now(timezone.utc)
                updated = player.model_copy(deep=True)
        logger.info("Player updated: %s", player_id)
        return updated

    def delete_player(self, player_id: str) -> None:
        # Games the player took part in are left as they are
        self.players.remove(player_id)
        logger.info("Player deleted: %s", player_id)

    def search_players_by_name(self, query: str, limit: int = 10) -> List[Player]:
        needle = parse_search_query("query", query)
        limit = parse_limit(limit)
        matches = [p for p in self.players.values() if needle in p.name.lower()]
        logger.debug("Search '%s' matched %d players", needle, len(matches))
        return matches[:limit]

    def get_player_stats(self, player_id: str) -> PlayerStats:
        return self.players.get(player_id).stats


__all__ = ["PlayerService"]
