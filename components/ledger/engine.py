"""Simple-interest accrual over a lending arrangement's cash-flow operations.

Interest for the gap between two consecutive operations is prorated linearly
on the balance outstanding before the later one:

    interest = balance_before * rate / 100 * elapsed_days / 365

The computation is pure. Operations are sorted stably by date, so operations
sharing a date keep the order in which they were passed in.
"""

from datetime import date
from typing import List, Optional, Sequence

from components.ledger.schemas import (
    Ledger,
    LedgerOperation,
    LedgerRow,
    LedgerSummary,
    OperationType,
    Period,
    RateMode,
)

DAYS_IN_YEAR = 365


def elapsed_days(previous: Optional[date], current: date) -> int:
    """Whole days between two operations, zero for the first one."""
    if previous is None:
        return 0
    return max(0, (current - previous).days)


def effective_rate(base_rate: float, operation: LedgerOperation) -> float:
    """Per-annum rate applied to the period ending at ``operation``."""
    if operation.rate_mode == RateMode.CUSTOM and operation.custom_rate is not None:
        return operation.custom_rate
    return base_rate


def accrued_interest(balance: float, rate: float, days: int) -> float:
    """Simple prorated interest; never accrues on a zero or negative balance."""
    if balance <= 0:
        return 0.0
    return balance * (rate / 100) * (days / DAYS_IN_YEAR)


def compute_ledger(base_rate: float, operations: Sequence[LedgerOperation]) -> Ledger:
    """
    Walk the operations chronologically and build ledger rows plus a summary.

    Args:
        base_rate: Arrangement rate, percent per annum
        operations: Operations in insertion order, not necessarily sorted

    Returns:
        Ledger with one row per operation and the aggregate summary.
        Repayments larger than the outstanding balance floor it at zero.
    """
    ordered = sorted(operations, key=lambda op: op.date)

    balance = 0.0
    previous_date = None
    total_interest = 0.0
    total_deposits = 0.0
    total_repayments = 0.0
    rows: List[LedgerRow] = []

    for index, operation in enumerate(ordered, start=1):
        days = elapsed_days(previous_date, operation.date)
        balance_before = balance
        rate = effective_rate(base_rate, operation)
        interest = accrued_interest(balance_before, rate, days)
        total_interest += interest

        if operation.type == OperationType.DEPOSIT:
            balance += operation.amount
            total_deposits += operation.amount
        else:
            balance = max(0.0, balance - operation.amount)
            total_repayments += operation.amount

        rows.append(LedgerRow(
            index=index,
            date=operation.date,
            type=operation.type,
            amount=operation.amount,
            balance_before=balance_before,
            elapsed_days=days,
            effective_rate=rate,
            interest=interest,
            balance_after=balance,
            note=operation.note,
        ))
        previous_date = operation.date

    period = Period(start=ordered[0].date, end=ordered[-1].date) if ordered else None

    return Ledger(
        rows=rows,
        summary=LedgerSummary(
            total_deposits=total_deposits,
            total_repayments=total_repayments,
            final_balance=balance,
            total_interest=total_interest,
            period=period,
            operations_count=len(ordered),
        ),
    )
