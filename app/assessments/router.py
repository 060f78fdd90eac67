"""
Tests API Router
"""
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import (
    AssessmentCreate,
    AssessmentDetailOut,
    AssessmentOut,
    AssessmentQuery,
    AssessmentUpdate,
    PageEnvelope,
)
from .service import AssessmentService, get_assessment_service

router = APIRouter(prefix="/tests", tags=["Tests"])


def assessment_query(
    q: Optional[str] = Query(None, max_length=100, description="Name search (substring)"),
    playing_time: Optional[int] = Query(None, alias="playingTime", gt=0),
    recovery_time: Optional[int] = Query(None, alias="recoveryTime", gt=0),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> AssessmentQuery:
    return AssessmentQuery(
        q=q,
        playing_time=playing_time,
        recovery_time=recovery_time,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )


@router.get("", response_model=PageEnvelope[AssessmentOut])
async def list_tests(
    query: AssessmentQuery = Depends(assessment_query),
    service: AssessmentService = Depends(get_assessment_service)
):
    return await service.find_all(query)


@router.get("/{test_id}", response_model=AssessmentDetailOut)
async def get_test(
    test_id: UUID,
    service: AssessmentService = Depends(get_assessment_service)
):
    """Test detail with every player's result"""
    return await service.find_by_id(test_id)


@router.post("", response_model=AssessmentOut, status_code=status.HTTP_201_CREATED)
async def create_test(
    payload: AssessmentCreate,
    service: AssessmentService = Depends(get_assessment_service)
):
    return await service.create(payload)


@router.patch("/{test_id}", response_model=AssessmentOut)
async def update_test(
    test_id: UUID,
    payload: AssessmentUpdate,
    service: AssessmentService = Depends(get_assessment_service)
):
    return await service.update(test_id, payload)


@router.delete("/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_test(
    test_id: UUID,
    service: AssessmentService = Depends(get_assessment_service)
):
    await service.delete(test_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
