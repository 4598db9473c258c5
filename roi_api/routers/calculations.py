# roi_api/routers/calculations.py
# -----------------------------------------------------------------------------
# /api/calculations : validate + compute, store, list, fetch, delete
# - body is taken raw and validated by services.validation (not by FastAPI)
# - all routes share one fixed-window rate limit per client
# -----------------------------------------------------------------------------
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from roi_api.core.config import settings
from roi_api.core.rate_limit import calculations_limit
from roi_api.db import crud
from roi_api.db.session import get_session
from roi_api.schemas.calculation import (
    CalculationRecord,
    CalculationResult,
    ErrorResponse,
)
from roi_api.services.roi import parse_and_compute

router = APIRouter(prefix="/calculations", tags=["calculations"])


@router.post(
    "",
    response_model=CalculationRecord,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": CalculationResult, "description": "Computed, not stored (save=false)"},
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
@calculations_limit
async def create_calculation(
    request: Request,
    payload: Any = Body(...),
    save: bool = Query(True, description="Persist the result"),
    db: AsyncSession = Depends(get_session),
):
    data, result = parse_and_compute(payload, migration_cost=settings.MIGRATION_COST)

    if not save:
        return JSONResponse(result.model_dump(mode="json", by_alias=True))

    row = await crud.create_calculation(db, data, result)
    logger.info(
        "calculation {} stored (savings={:.2f}, roi={:.2f}%)",
        row.id,
        row.savings,
        row.roi,
    )
    return CalculationRecord.model_validate(row)


@router.get("", response_model=List[CalculationRecord])
@calculations_limit
async def list_calculations(request: Request, db: AsyncSession = Depends(get_session)):
    rows = await crud.list_calculations(db)
    return [CalculationRecord.model_validate(r) for r in rows]


@router.get(
    "/{calculation_id}",
    response_model=CalculationRecord,
    responses={404: {"model": ErrorResponse}},
)
@calculations_limit
async def get_calculation(
    request: Request, calculation_id: int, db: AsyncSession = Depends(get_session)
):
    row = await crud.get_calculation(db, calculation_id)
    return CalculationRecord.model_validate(row)


@router.delete(
    "/{calculation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
@calculations_limit
async def delete_calculation(
    request: Request, calculation_id: int, db: AsyncSession = Depends(get_session)
):
    await crud.delete_calculation(db, calculation_id)
    logger.info("calculation {} deleted", calculation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
