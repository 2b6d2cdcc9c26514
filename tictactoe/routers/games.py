from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ..schemas import CreateGameRequest, JoinGameRequest, MakeMoveRequest
from ..services import Services, get_services

router = APIRouter(prefix="/games", tags=["games"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_game(
    req: CreateGameRequest = Body(default=CreateGameRequest()),
    services: Services = Depends(get_services),
):
    game = services.games.create_game(req.name)
    return {"game": game.model_dump(by_alias=True, mode="json"), "message": "Game created successfully"}


@router.get("")
def list_games(
    game_status: Optional[str] = Query(default=None, alias="status"),
    services: Services = Depends(get_services),
):
    games = services.games.list_games(game_status)
    return {"games": [g.model_dump(by_alias=True, mode="json") for g in games], "count": len(games)}


@router.get("/{game_id}")
def get_game(game_id: str, services: Services = Depends(get_services)):
    return {"game": services.games.get_game_by_id(game_id).model_dump(by_alias=True, mode="json")}


@router.get("/{game_id}/status")
def get_game_status(game_id: str, services: Services = Depends(get_services)):
    return services.games.get_game_status(game_id).model_dump(by_alias=True, mode="json")


@router.post("/{game_id}/join")
def join_game(game_id: str, req: JoinGameRequest, services: Services = Depends(get_services)):
    game = services.games.join_game(game_id, req.player_id)
    return {"game": game.model_dump(by_alias=True, mode="json"), "message": "Joined game successfully"}


@router.post("/{game_id}/moves")
def make_move(game_id: str, req: MakeMoveRequest, services: Services = Depends(get_services)):
    result = services.games.make_move(game_id, req.player_id, req.row, req.col)
    return {**result.model_dump(by_alias=True, mode="json"), "message": "Move made successfully"}


@router.get("/{game_id}/moves")
def get_valid_moves(game_id: str, services: Services = Depends(get_services)):
    moves = services.games.valid_moves_for(game_id)
    return {"validMoves": [m.model_dump(by_alias=True) for m in moves], "count": len(moves)}


@router.get("/{game_id}/stats")
def get_game_stats(game_id: str, services: Services = Depends(get_services)):
    return {"stats": services.games.get_game_stats(game_id).model_dump(by_alias=True, mode="json")}


@router.delete("/{game_id}")
def delete_game(game_id: str, services: Services = Depends(get_services)):
    services.games.delete_game(game_id)
    return {"message": "Game deleted successfully"}
