"""Database initialization and dependency injection."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.investment.models
import components.operation.models

# Create a single instance of DatabaseManager
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with db_manager.get_db() as session:
        yield session


async def init_db() -> None:
    """Create tables for all registered models."""
    await db_manager.create_tables()


async def close_db() -> None:
    """Release database connections."""
    await db_manager.dispose()
