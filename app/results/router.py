"""
Results API Router
"""
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import (
    BulkCreateOut,
    PageEnvelope,
    ResultBulkCreate,
    ResultCreate,
    ResultOut,
    ResultQuery,
    ResultUpdate,
)
from .service import ResultService, get_result_service

router = APIRouter(prefix="/results", tags=["Results"])


def result_query(
    player_id: Optional[UUID] = Query(None, alias="playerId"),
    test_id: Optional[UUID] = Query(None, alias="testId"),
    min_score: Optional[int] = Query(None, alias="minScore", ge=0),
    max_score: Optional[int] = Query(None, alias="maxScore", ge=0),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> ResultQuery:
    return ResultQuery(
        player_id=player_id,
        test_id=test_id,
        min_score=min_score,
        max_score=max_score,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )


@router.get("", response_model=PageEnvelope[ResultOut])
async def list_results(
    query: ResultQuery = Depends(result_query),
    service: ResultService = Depends(get_result_service)
):
    """
    Result list

    minScore / maxScore apply to the computed total score and are
    evaluated before pagination.
    """
    return await service.find_all(query)


@router.get("/{result_id}", response_model=ResultOut)
async def get_result(
    result_id: UUID,
    service: ResultService = Depends(get_result_service)
):
    return await service.find_by_id(result_id)


@router.post("", response_model=ResultOut, status_code=status.HTTP_201_CREATED)
async def create_result(
    payload: ResultCreate,
    service: ResultService = Depends(get_result_service)
):
    """Player and test must exist (404 otherwise, nothing is written)"""
    return await service.create(payload)


@router.post("/bulk", response_model=BulkCreateOut, status_code=status.HTTP_201_CREATED)
async def create_results_bulk(
    payload: ResultBulkCreate,
    service: ResultService = Depends(get_result_service)
):
    return await service.create_bulk(payload)


@router.patch("/{result_id}", response_model=ResultOut)
async def update_result(
    result_id: UUID,
    payload: ResultUpdate,
    service: ResultService = Depends(get_result_service)
):
    return await service.update(result_id, payload)


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_result(
    result_id: UUID,
    service: ResultService = Depends(get_result_service)
):
    await service.delete(result_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
