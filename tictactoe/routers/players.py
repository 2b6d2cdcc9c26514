from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ..schemas import CreatePlayerRequest, UpdatePlayerRequest
from ..services import Services, get_services

router = APIRouter(prefix="/players", tags=["players"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_player(req: CreatePlayerRequest, services: Services = Depends(get_services)):
    player = services.players.create_player(req.name, req.email)
    return {"player": player.model_dump(by_alias=True, mode="json"), "message": "Player created successfully"}


@router.get("")
def list_players(services: Services = Depends(get_services)):
    players = services.players.list_players()
    return {"players": [p.model_dump(by_alias=True, mode="json") for p in players], "count": len(players)}


# Declared before "/{player_id}" so "search" is not taken for an id
@router.get("/search")
def search_players(
    request: Request,
    name: str = Query(...),
    limit: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    if limit is None:
        limit = request.app.state.config.DEFAULT_SEARCH_LIMIT
    players = services.players.search_players_by_name(name, limit)
    return {"players": [p.model_dump(by_alias=True, mode="json") for p in players], "count": len(players)}


@router.get("/{player_id}")
def get_player(player_id: str, services: Services = Depends(get_services)):
    return {"player": services.players.get_player_by_id(player_id).model_dump(by_alias=True, mode="json")}


@router.put("/{player_id}")
def update_player(player_id: str, req: UpdatePlayerRequest, services: Services = Depends(get_services)):
    player = services.players.update_player(player_id, name=req.name, email=req.email)
    return {"player": player.model_dump(by_alias=True, mode="json"), "message": "Player updated successfully"}


@router.delete("/{player_id}")
def delete_player(player_id: str, services: Services = Depends(get_services)):
    services.players.delete_player(player_id)
    return {"message": "Player deleted successfully"}


@router.get("/{player_id}/stats")
def get_player_stats(player_id: str, services: Services = Depends(get_services)):
    return {"stats": services.players.get_player_stats(player_id).model_dump(by_alias=True)}
