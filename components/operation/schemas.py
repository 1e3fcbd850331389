"""Pydantic schemas for operation data validation."""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from components.ledger.schemas import OperationType, RateMode, ensure_finite

OptionalDate = Optional[date]


def ensure_positive_amount(value: Optional[float]) -> Optional[float]:
    if value is None:
        raise ValueError("amount must be a positive number")
    ensure_finite(value)
    if value <= 0:
        raise ValueError("amount must be a positive number")
    return value


class OperationCreate(BaseModel):
    """Schema for operation creation."""
    date: date
    type: OperationType
    amount: float
    rate_mode: RateMode = RateMode.GLOBAL
    custom_rate: Optional[float] = None
    note: str = ""
    created_by: str = "system"

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, value):
        return OperationType.parse(value)

    @field_validator("rate_mode", mode="before")
    @classmethod
    def parse_rate_mode(cls, value):
        return RateMode.GLOBAL if value is None else RateMode.parse(value)

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, value):
        return ensure_positive_amount(value)

    @field_validator("custom_rate")
    @classmethod
    def custom_rate_finite(cls, value):
        return ensure_finite(value)

    @field_validator("note", "created_by", mode="before")
    @classmethod
    def none_to_default(cls, value, info):
        if value is None or value == "":
            return "system" if info.field_name == "created_by" else ""
        return value

    @model_validator(mode="after")
    def check_custom_rate(self):
        if self.rate_mode == RateMode.CUSTOM:
            if self.custom_rate is None:
                raise ValueError("custom_rate must be a number when rate_mode is Custom")
        else:
            self.custom_rate = None
        return self


class OperationUpdate(BaseModel):
    """Schema for partial operation update; only fields that are sent get applied."""
    date: OptionalDate = None
    type: Optional[OperationType] = None
    amount: Optional[float] = None
    rate_mode: Optional[RateMode] = None
    custom_rate: Optional[float] = None
    note: Optional[str] = None

    @field_validator("date", "type", "rate_mode")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, value):
        return OperationType.parse(value)

    @field_validator("rate_mode", mode="before")
    @classmethod
    def parse_rate_mode(cls, value):
        return RateMode.parse(value)

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, value):
        return ensure_positive_amount(value)

    @field_validator("custom_rate")
    @classmethod
    def custom_rate_finite(cls, value):
        return ensure_finite(value)

    @field_validator("note", mode="before")
    @classmethod
    def none_note_to_empty(cls, value):
        return "" if value is None else value


class Operation(BaseModel):
    """Schema for operation response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    investment_id: int
    date: date
    type: OperationType
    amount: float
    rate_mode: RateMode
    custom_rate: Optional[float] = None
    note: str
    created_by: str
    created_at: datetime
