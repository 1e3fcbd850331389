"""Repository for investment operations."""

from typing import List, Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.logging import get_logger
from components.investment.models import Investment
from components.investment.schemas import InvestmentCreate, InvestmentUpdate
from components.operation.models import Operation

logger = get_logger(__name__)


class InvestmentRepository:
    """Repository for investment operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, investment: InvestmentCreate) -> Investment:
        """Create a new investment."""
        db_investment = Investment(
            name=investment.name,
            lender=investment.lender,
            borrower=investment.borrower,
            base_rate=investment.base_rate,
            status="active",
        )
        self.session.add(db_investment)
        await self.session.commit()
        await self.session.refresh(db_investment)
        logger.info("Created investment %s (%s)", db_investment.id, db_investment.name)
        return db_investment

    async def get_by_id(self, investment_id: int) -> Optional[Investment]:
        """Get investment by ID."""
        result = await self.session.execute(
            select(Investment).where(Investment.id == investment_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[Investment]:
        """Get all investments in creation order."""
        result = await self.session.execute(select(Investment).order_by(Investment.id))
        return list(result.scalars().all())

    async def update(self, investment_id: int, investment: InvestmentUpdate) -> Optional[Investment]:
        """Update the fields that were sent for an investment."""
        db_investment = await self.get_by_id(investment_id)
        if not db_investment:
            return None

        changes = investment.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(db_investment, field, value)

        await self.session.commit()
        await self.session.refresh(db_investment)
        logger.info("Updated investment %s: %s", investment_id, sorted(changes))
        return db_investment

    async def delete(self, investment_id: int) -> bool:
        """Delete investment by ID together with all of its operations."""
        db_investment = await self.get_by_id(investment_id)
        if not db_investment:
            return False

        result = await self.session.execute(
            delete(Operation).where(Operation.investment_id == investment_id)
        )
        await self.session.delete(db_investment)
        await self.session.commit()
        logger.info(
            "Deleted investment %s and %s operation(s)", investment_id, result.rowcount
        )
        return True
