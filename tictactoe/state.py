"""In-memory runtime state.

Games and players live in :class:`Repository` objects owned by an
:class:`AppContext`. Engines receive the context in their constructor
instead of importing module-level singletons, so every test (and every app
instance) gets its own isolated stores.

Each stored entity has its own re-entrant lock. Any read-modify-write of an
entity happens inside :meth:`Repository.locked`; reads go through the same
lock and hand out deep copies, so callers never see a half-applied update.
Lock order is fixed: email index -> player, and game -> player.
"""
from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from pydantic import BaseModel

from .errors import NotFoundError

T = TypeVar("T", bound=BaseModel)


def new_id() -> str:
    return str(uuid.uuid4())


class Repository(Generic[T]):
    """Keyed store of one entity kind, in insertion order."""

    def __init__(self, kind: str):
        self.kind = kind
        self._items: Dict[str, T] = {}
        self._locks: Dict[str, threading.RLock] = {}
        # Guards dict membership only; never held while an entity is mutated
        self._registry_lock = threading.Lock()

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    # -------------------- Membership -------------------- #

    def add(self, item: T) -> T:
        with self._registry_lock:
            self._locks[item.id] = threading.RLock()
            self._items[item.id] = item
        return item.model_copy(deep=True)

    def _lock_for(self, entity_id: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(entity_id)
        if lock is None:
            raise NotFoundError(self.kind, entity_id)
        return lock

    def remove(self, entity_id: str) -> None:
        with self.locked(entity_id):
            with self._registry_lock:
                self._items.pop(entity_id, None)
                self._locks.pop(entity_id, None)

    # -------------------- Access -------------------- #

    @contextmanager
    def locked(self, entity_id: str) -> Iterator[T]:
        """Hold *entity_id*'s lock and yield the live (mutable) entity."""
        lock = self._lock_for(entity_id)
        with lock:
            item = self._items.get(entity_id)
            # Removed while we were waiting for the lock
            if item is None:
                raise NotFoundError(self.kind, entity_id)
            yield item

    def get(self, entity_id: str) -> T:
        with self.locked(entity_id) as item:
            return item.model_copy(deep=True)

    def find(self, entity_id: str) -> Optional[T]:
        try:
            return self.get(entity_id)
        except NotFoundError:
            return None

    def values(self) -> List[T]:
        """Consistent per-entity snapshots of every item, in insertion order."""
        with self._registry_lock:
            ids = list(self._items)
        snapshots: List[T] = []
        for entity_id in ids:
            item = self.find(entity_id)
            if item is not None:
                snapshots.append(item)
        return snapshots


class PlayerRepository(Repository):
    """Player store that also keeps emails unique.

    ``email_lock`` must be held around any check-then-write of an email. It is
    always taken before a player lock, never after.
    """

    def __init__(self):
        super().__init__("player")
        self.email_lock = threading.RLock()
        self._emails: Dict[str, str] = {}

    def id_for_email(self, email: str) -> Optional[str]:
        return self._emails.get(email)

    def add(self, item):
        with self.email_lock:
            created = super().add(item)
            self._emails[item.email] = item.id
        return created

    def reindex_email(self, entity_id: str, old_email: str, new_email: str) -> None:
        with self.email_lock:
            if self._emails.get(old_email) == entity_id:
                del self._emails[old_email]
            self._emails[new_email] = entity_id

    def remove(self, entity_id: str) -> None:
        with self.email_lock:
            with self.locked(entity_id) as player:
                email = player.email
            super().remove(entity_id)
            if self._emails.get(email) == entity_id:
                del self._emails[email]


class AppContext:
    """Owns every store the engines operate on."""

    def __init__(self):
        self.games: Repository = Repository("game")
        self.players: PlayerRepository = PlayerRepository()


__all__ = ["new_id", "Repository", "PlayerRepository", "AppContext"]
