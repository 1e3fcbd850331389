"""Pydantic schemas for investment data validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from components.ledger import schemas as ledger_schemas
from components.ledger.schemas import ensure_finite


def ensure_name(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("name is required")
    return value


class InvestmentBase(BaseModel):
    """Base investment schema."""
    name: str
    lender: str = ""
    borrower: str = ""
    base_rate: float


class InvestmentCreate(InvestmentBase):
    """Schema for investment creation."""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return ensure_name(value)

    @field_validator("base_rate")
    @classmethod
    def base_rate_finite(cls, value):
        return ensure_finite(value)

    @field_validator("lender", "borrower", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value


class InvestmentUpdate(BaseModel):
    """Schema for partial investment update; only fields that are sent get applied."""
    name: Optional[str] = None
    lender: Optional[str] = None
    borrower: Optional[str] = None
    base_rate: Optional[float] = None
    status: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        if value is None:
            raise ValueError("name is required")
        return ensure_name(value)

    @field_validator("base_rate")
    @classmethod
    def base_rate_finite(cls, value):
        if value is None:
            raise ValueError("base_rate must be a number")
        return ensure_finite(value)

    @field_validator("status")
    @classmethod
    def status_not_null(cls, value):
        if value is None:
            raise ValueError("status must be a string")
        return value

    @field_validator("lender", "borrower", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value


class Investment(InvestmentBase):
    """Schema for investment response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    created_at: datetime


class InvestmentSummary(BaseModel):
    """Schema for the investment summary response."""
    investment: Investment
    summary: ledger_schemas.LedgerSummary


class InvestmentLedger(BaseModel):
    """Schema for the full ledger response."""
    investment: Investment
    rows: List[ledger_schemas.LedgerRow]
    summary: ledger_schemas.LedgerSummary
