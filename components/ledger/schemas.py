"""Pydantic schemas for ledger input and output."""

import math
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class OperationType(str, Enum):
    """Direction of a cash-flow operation."""
    DEPOSIT = "Deposit"
    REPAYMENT = "Repayment"

    @classmethod
    def parse(cls, value):
        """Accept any casing and the legacy labels Wplata (deposit) and Splata (repayment)."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            legacy = {"wplata": cls.DEPOSIT, "splata": cls.REPAYMENT}
            if lowered in legacy:
                return legacy[lowered]
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return value


class RateMode(str, Enum):
    """Which rate applies to an operation's interest period."""
    GLOBAL = "Global"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value):
        """Accept any casing of the mode name."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return value


def ensure_finite(value: Optional[float]) -> Optional[float]:
    """Reject NaN and infinities, which pydantic accepts for float fields."""
    if value is not None and not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


class LedgerOperation(BaseModel):
    """Immutable snapshot of one operation as seen by the accrual engine."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    date: date
    type: OperationType
    amount: float
    rate_mode: RateMode = RateMode.GLOBAL
    custom_rate: Optional[float] = None
    note: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, value):
        return OperationType.parse(value)

    @field_validator("rate_mode", mode="before")
    @classmethod
    def parse_rate_mode(cls, value):
        return RateMode.parse(value)

    @field_validator("note", mode="before")
    @classmethod
    def none_note_to_empty(cls, value):
        return "" if value is None else value


class LedgerRow(BaseModel):
    """Computed record for one operation."""
    index: int
    date: date
    type: OperationType
    amount: float
    balance_before: float
    elapsed_days: int
    effective_rate: float
    interest: float
    balance_after: float
    note: str = ""


class Period(BaseModel):
    """Date range covered by the operations."""
    start: date
    end: date


class LedgerSummary(BaseModel):
    """Aggregate over all ledger rows."""
    total_deposits: float = 0.0
    total_repayments: float = 0.0
    final_balance: float = 0.0
    total_interest: float = 0.0
    period: Optional[Period] = None
    operations_count: int = 0


class Ledger(BaseModel):
    """Ledger rows together with their summary."""
    rows: List[LedgerRow]
    summary: LedgerSummary
