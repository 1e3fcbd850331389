"""Script to seed a demo investment with operations into the database."""

from datetime import date
import asyncio

from sqlalchemy import delete

from components.core.init_db import close_db, get_db, init_db
from components.core.logging import get_logger, setup_logging
from components.investment.models import Investment
from components.investment.repository import InvestmentRepository
from components.investment.schemas import InvestmentCreate
from components.ledger.engine import compute_ledger
from components.operation.models import Operation
from components.operation.repository import OperationRepository
from components.operation.schemas import OperationCreate

logger = get_logger(__name__)

DEMO_OPERATIONS = [
    OperationCreate(date=date(2024, 1, 1), type="Deposit", amount=10000.00, note="First tranche"),
    OperationCreate(date=date(2024, 3, 1), type="Deposit", amount=5000.00, note="Second tranche"),
    OperationCreate(date=date(2024, 7, 1), type="Repayment", amount=3000.00),
    OperationCreate(
        date=date(2024, 10, 1), type="Repayment", amount=4000.00,
        rate_mode="Custom", custom_rate=9.5, note="Renegotiated rate",
    ),
]


async def seed_data():
    """Seed test data into the database."""
    await init_db()
    async for db in get_db():
        # Clear existing data
        await db.execute(delete(Operation))
        await db.execute(delete(Investment))
        await db.commit()

        investment = await InvestmentRepository(db).create(InvestmentCreate(
            name="Demo loan",
            lender="Anna",
            borrower="Piotr",
            base_rate=12.0,
        ))
        operation_repo = OperationRepository(db)
        for operation in DEMO_OPERATIONS:
            await operation_repo.create(investment.id, operation)

        ledger = compute_ledger(
            investment.base_rate,
            await operation_repo.get_ledger_operations(investment.id),
        )
        logger.info("Seeded investment %s: %s", investment.id, ledger.summary.model_dump())
        break  # Only need one session
    await close_db()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed_data())
