"""Operation model for the database."""

from sqlalchemy import Column, Integer, String, Date, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship

from components.core.database import Base
from components.investment.models import utcnow


class Operation(Base):
    """Deposit or repayment against an investment."""
    __tablename__ = "operations"

    id = Column(Integer, primary_key=True, index=True)  # Ascending id is insertion order
    investment_id = Column(
        Integer, ForeignKey("investments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False)
    type = Column(String(20), nullable=False)  # "Deposit" or "Repayment"
    amount = Column(Float, nullable=False)
    rate_mode = Column(String(20), nullable=False, default="Global")  # "Global" or "Custom"
    custom_rate = Column(Float, nullable=True)  # Only set in "Custom" mode
    note = Column(String(1000), nullable=False, default="")
    created_by = Column(String(100), nullable=False, default="system")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    investment = relationship("Investment", back_populates="operations")
