"""Repository for cash-flow operations."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import InvalidOperationError
from components.core.logging import get_logger
from components.ledger.schemas import LedgerOperation, RateMode
from components.operation.models import Operation
from components.operation.schemas import OperationCreate, OperationUpdate

logger = get_logger(__name__)


class OperationRepository:
    """Repository for cash-flow operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, investment_id: int, operation: OperationCreate) -> Operation:
        """Create a new operation attached to an investment."""
        db_operation = Operation(
            investment_id=investment_id,
            date=operation.date,
            type=operation.type.value,
            amount=operation.amount,
            rate_mode=operation.rate_mode.value,
            custom_rate=operation.custom_rate,
            note=operation.note,
            created_by=operation.created_by,
        )
        self.session.add(db_operation)
        await self.session.commit()
        await self.session.refresh(db_operation)
        logger.info(
            "Created operation %s for investment %s: %s %s on %s",
            db_operation.id, investment_id, db_operation.type, db_operation.amount, db_operation.date,
        )
        return db_operation

    async def get_by_id(self, operation_id: int) -> Optional[Operation]:
        """Get operation by ID."""
        result = await self.session.execute(
            select(Operation).where(Operation.id == operation_id)
        )
        return result.scalar_one_or_none()

    async def list_for_investment(self, investment_id: int) -> List[Operation]:
        """Get an investment's operations by date, same-date ones in insertion order."""
        result = await self.session.execute(
            select(Operation)
            .where(Operation.investment_id == investment_id)
            .order_by(Operation.date, Operation.id)
        )
        return list(result.scalars().all())

    async def get_ledger_operations(self, investment_id: int) -> List[LedgerOperation]:
        """Snapshot an investment's operations for the accrual engine."""
        operations = await self.list_for_investment(investment_id)
        return [LedgerOperation.model_validate(operation) for operation in operations]

    async def update(self, operation_id: int, operation: OperationUpdate) -> Optional[Operation]:
        """
        Update the fields that were sent for an operation.

        Leaving Custom mode clears the custom rate. Entering Custom mode needs a
        custom rate in the payload or one already stored.

        Raises:
            InvalidOperationError: the result would be in Custom mode without a rate
        """
        db_operation = await self.get_by_id(operation_id)
        if not db_operation:
            return None

        changes = operation.model_dump(exclude_unset=True)
        rate_mode = changes.get("rate_mode", RateMode(db_operation.rate_mode))
        custom_rate = changes.get("custom_rate", db_operation.custom_rate)

        if rate_mode == RateMode.CUSTOM:
            if custom_rate is None:
                raise InvalidOperationError(
                    "custom_rate must be a number when rate_mode is Custom"
                )
        else:
            custom_rate = None

        for field in ("date", "amount", "note"):
            if field in changes:
                setattr(db_operation, field, changes[field])
        if "type" in changes:
            db_operation.type = changes["type"].value
        db_operation.rate_mode = rate_mode.value
        db_operation.custom_rate = custom_rate

        await self.session.commit()
        await self.session.refresh(db_operation)
        logger.info("Updated operation %s: %s", operation_id, sorted(changes))
        return db_operation

    async def delete(self, operation_id: int) -> bool:
        """Delete operation by ID."""
        db_operation = await self.get_by_id(operation_id)
        if not db_operation:
            return False

        await self.session.delete(db_operation)
        await self.session.commit()
        logger.info("Deleted operation %s", operation_id)
        return True
