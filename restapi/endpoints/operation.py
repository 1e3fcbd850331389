"""Operation endpoints for the API."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import InvalidOperationError
from components.core.init_db import get_db
from components.operation import schemas
from components.operation.repository import OperationRepository

router = APIRouter(
    prefix="/operations",
    tags=["operations"],
    responses={404: {"description": "Not found"}},
)


@router.get("/{operation_id}", response_model=schemas.Operation)
async def read_operation(operation_id: int, db: AsyncSession = Depends(get_db)):
    """Get a specific operation by ID."""
    repo = OperationRepository(db)
    operation = await repo.get_by_id(operation_id)
    if operation is None:
        raise HTTPException(status_code=404, detail="Operation not found")
    return operation


@router.put("/{operation_id}", response_model=schemas.Operation)
async def update_operation(
    operation_id: int,
    operation: schemas.OperationUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update the fields that were sent for an operation."""
    repo = OperationRepository(db)
    try:
        updated_operation = await repo.update(operation_id, operation)
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not updated_operation:
        raise HTTPException(status_code=404, detail="Operation not found")
    return updated_operation


@router.delete("/{operation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_operation(operation_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an operation."""
    repo = OperationRepository(db)
    if not await repo.delete(operation_id):
        raise HTTPException(status_code=404, detail="Operation not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
