"""Typed failures raised by the game and player core.

Every operation either returns a result or raises one of the exceptions
below. Nothing here knows about HTTP; ``tictactoe.app`` maps each class to a
status code.
"""
from __future__ import annotations

from typing import Optional


class GameServiceError(Exception):
    """Base class for every failure the core raises."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GameServiceError):
    """A game or player with the given id does not exist."""

    def __init__(self, entity_kind: str, entity_id: Optional[str]):
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        super().__init__(f"{entity_kind.capitalize()} not found")


class InvalidInputError(GameServiceError):
    """A value is malformed or out of its allowed range."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason)


class InvalidStateTransitionError(GameServiceError):
    """The game is not in the status the operation requires."""


class ConflictError(GameServiceError):
    """The request clashes with current state (occupied cell, wrong turn, taken email)."""


__all__ = [
    "GameServiceError",
    "NotFoundError",
    "InvalidInputError",
    "InvalidStateTransitionError",
    "ConflictError",
]
