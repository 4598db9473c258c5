# roi_api/db/crud.py
# -----------------------------------------------------------------------------
# Read/write helpers for stored calculations
# - create / get / list / delete (no update)
# - ping for health probes
# -----------------------------------------------------------------------------
from typing import Sequence

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from roi_api.core.errors import CalculationNotFound
from roi_api.db.models import Calculation
from roi_api.schemas.calculation import CalculationInput, CalculationResult


async def create_calculation(
    db: AsyncSession, data: CalculationInput, result: CalculationResult
) -> Calculation:
    row = Calculation(
        monthly_invocations=data.monthly_invocations,
        average_execution_time=data.average_execution_time,
        memory_size=data.memory_size,
        traditional_server_cost=data.traditional_server_cost,
        serverless_cost=result.serverless_cost,
        traditional_cost=result.traditional_cost,
        savings=result.savings,
        roi=result.roi,
        payback_period=result.payback_period,
    )
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


async def get_calculation(db: AsyncSession, calculation_id: int) -> Calculation:
    row = await db.get(Calculation, calculation_id)
    if row is None:
        raise CalculationNotFound(calculation_id)
    return row


async def list_calculations(db: AsyncSession) -> Sequence[Calculation]:
    """Oldest first, i.e. calculation order"""
    res = await db.execute(select(Calculation).order_by(Calculation.id))
    return res.scalars().all()


async def delete_calculation(db: AsyncSession, calculation_id: int) -> None:
    row = await get_calculation(db, calculation_id)
    await db.delete(row)
    await db.commit()


async def ping(db: AsyncSession) -> None:
    await db.execute(text("SELECT 1"))
