"""Investment endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.investment import schemas
from components.investment.models import Investment
from components.investment.repository import InvestmentRepository
from components.ledger.engine import compute_ledger
from components.operation import schemas as operation_schemas
from components.operation.repository import OperationRepository

router = APIRouter(
    prefix="/investments",
    tags=["investments"],
    responses={404: {"description": "Not found"}},
)


async def get_investment_or_404(investment_id: int, db: AsyncSession) -> Investment:
    repo = InvestmentRepository(db)
    investment = await repo.get_by_id(investment_id)
    if investment is None:
        raise HTTPException(status_code=404, detail="Investment not found")
    return investment


@router.get("", response_model=List[schemas.Investment])
async def read_investments(db: AsyncSession = Depends(get_db)):
    """Get all investments."""
    repo = InvestmentRepository(db)
    return await repo.get_all()


@router.post("", response_model=schemas.Investment, status_code=status.HTTP_201_CREATED)
async def create_investment(
    investment: schemas.InvestmentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new investment."""
    repo = InvestmentRepository(db)
    return await repo.create(investment)


@router.get("/{investment_id}", response_model=schemas.Investment)
async def read_investment(investment_id: int, db: AsyncSession = Depends(get_db)):
    """Get a specific investment by ID."""
    return await get_investment_or_404(investment_id, db)


@router.put("/{investment_id}", response_model=schemas.Investment)
async def update_investment(
    investment_id: int,
    investment: schemas.InvestmentUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update the fields that were sent for an investment."""
    repo = InvestmentRepository(db)
    updated_investment = await repo.update(investment_id, investment)
    if not updated_investment:
        raise HTTPException(status_code=404, detail="Investment not found")
    return updated_investment


@router.delete("/{investment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_investment(investment_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an investment and all of its operations."""
    repo = InvestmentRepository(db)
    if not await repo.delete(investment_id):
        raise HTTPException(status_code=404, detail="Investment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{investment_id}/operations", response_model=List[operation_schemas.Operation])
async def read_operations(investment_id: int, db: AsyncSession = Depends(get_db)):
    """Get an investment's operations in chronological order."""
    await get_investment_or_404(investment_id, db)
    repo = OperationRepository(db)
    return await repo.list_for_investment(investment_id)


@router.post(
    "/{investment_id}/operations",
    response_model=operation_schemas.Operation,
    status_code=status.HTTP_201_CREATED,
)
async def create_operation(
    investment_id: int,
    operation: operation_schemas.OperationCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add a deposit or repayment to an investment."""
    await get_investment_or_404(investment_id, db)
    repo = OperationRepository(db)
    return await repo.create(investment_id, operation)


@router.get("/{investment_id}/summary", response_model=schemas.InvestmentSummary)
async def read_summary(investment_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get the aggregate summary of an investment.

    Returns:
    - Total deposits and total repayments
    - Final principal balance
    - Total accrued interest
    - Period covered by the operations and their count
    """
    investment = await get_investment_or_404(investment_id, db)
    operations = await OperationRepository(db).get_ledger_operations(investment_id)
    ledger = compute_ledger(investment.base_rate, operations)
    return schemas.InvestmentSummary(
        investment=schemas.Investment.model_validate(investment),
        summary=ledger.summary,
    )


@router.get("/{investment_id}/ledger", response_model=schemas.InvestmentLedger)
async def read_ledger(investment_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get the per-operation ledger of an investment.

    Each row carries the balance before and after the operation, the days
    elapsed since the previous operation, the rate applied and the interest
    accrued over that period. The summary is the same as the one returned by
    the summary endpoint.
    """
    investment = await get_investment_or_404(investment_id, db)
    operations = await OperationRepository(db).get_ledger_operations(investment_id)
    ledger = compute_ledger(investment.base_rate, operations)
    return schemas.InvestmentLedger(
        investment=schemas.Investment.model_validate(investment),
        rows=ledger.rows,
        summary=ledger.summary,
    )
