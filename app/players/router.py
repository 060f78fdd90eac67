"""
Players API Router
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import (
    Gender,
    PageEnvelope,
    PlayerCreate,
    PlayerDetailOut,
    PlayerOut,
    PlayerQuery,
    PlayerUpdate,
    PreferredHand,
)
from .service import PlayerService, get_player_service

router = APIRouter(prefix="/players", tags=["Players"])


def player_query(
    q: Optional[str] = Query(None, max_length=100, description="Name search (substring)"),
    gender: Optional[Gender] = Query(None),
    preferred_hand: Optional[PreferredHand] = Query(None, alias="preferredHand"),
    age_group: Optional[str] = Query(None, alias="ageGroup", description="Mini, U-09 ... U-21, Seniors"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> PlayerQuery:
    return PlayerQuery(
        q=q,
        gender=gender,
        preferred_hand=preferred_hand,
        age_group=age_group,
        page=page,
        limit=limit,
    )


@router.get("", response_model=PageEnvelope[PlayerOut])
async def list_players(
    query: PlayerQuery = Depends(player_query),
    service: PlayerService = Depends(get_player_service)
):
    """
    Player list

    Filtering by age group is applied after ages are computed, before
    the page is cut, so totalItems always matches the filter.
    """
    return await service.find_all(query)


@router.get("/{player_id}", response_model=PlayerDetailOut)
async def get_player(
    player_id: UUID,
    service: PlayerService = Depends(get_player_service)
):
    """Player detail with test results (newest first)"""
    return await service.find_by_id(player_id)


@router.post("", response_model=PlayerOut, status_code=status.HTTP_201_CREATED)
async def create_player(
    payload: PlayerCreate,
    service: PlayerService = Depends(get_player_service)
):
    return await service.create(payload)


@router.patch("/{player_id}", response_model=PlayerOut)
async def update_player(
    player_id: UUID,
    payload: PlayerUpdate,
    service: PlayerService = Depends(get_player_service)
):
    return await service.update(player_id, payload)


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(
    player_id: UUID,
    service: PlayerService = Depends(get_player_service)
):
    """Delete player (results cascade at the database)"""
    await service.delete(player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
