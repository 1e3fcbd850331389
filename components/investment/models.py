"""Investment model for the database."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Float
from sqlalchemy.orm import relationship

from components.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Investment(Base):
    """Lending arrangement between a lender and a borrower."""
    __tablename__ = "investments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    lender = Column(String(255), nullable=False, default="")
    borrower = Column(String(255), nullable=False, default="")
    base_rate = Column(Float, nullable=False)  # Percent per annum
    status = Column(String(50), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    operations = relationship(
        "Operation",
        back_populates="investment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
