"""Payment Schemas - Pydantic models for the /payment-instructions boundary.

Invariants:
    - PaymentInstructionRequest.accounts: non-empty list of AccountIn
    - AccountIn.id / AccountIn.currency: stripped, non-empty strings
    - AccountIn.balance: JSON number, whole and >= 0 (smallest currency unit);
      booleans and numeric strings are rejected, never coerced
    - PaymentInstructionRequest.instruction: stripped, non-empty

Design Decisions:
    - field_validator for side-effect-free transforms (strip) - keeps models pure
    - Response models document the Outcome shape; the route serializes Outcome.to_response()
"""

import math
from typing import Literal

from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator

from payinstruct.core.domain_types import StatusCode


class AccountIn(BaseModel):
    """One account of the request snapshot."""
    id: str = Field(min_length=1)
    balance: StrictInt | StrictFloat
    currency: str = Field(min_length=1)

    @field_validator("id", "currency")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("balance")
    @classmethod
    def whole_balance(cls, v: int | float) -> int:
        if not math.isfinite(v):
            raise ValueError("balance must be a finite number")
        if v < 0:
            raise ValueError("balance cannot be negative")
        if int(v) != v:
            raise ValueError("balance must be a whole number")
        return int(v)


class PaymentInstructionRequest(BaseModel):
    """Request body: an account snapshot plus one instruction sentence."""
    accounts: list[AccountIn] = Field(min_length=1)
    instruction: str = Field(min_length=1)

    @field_validator("instruction")
    @classmethod
    def strip_instruction(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("instruction cannot be empty or whitespace")
        return v


class AccountSnapshotOut(BaseModel):
    id: str
    balance: int
    balance_before: int
    currency: str


class PaymentOutcomeResponse(BaseModel):
    """Response body for every settlement outcome, accepted or not."""
    type: Literal["DEBIT", "CREDIT"] | None = None
    amount: int | None = None
    currency: str | None = None
    debit_account: str | None = None
    credit_account: str | None = None
    execute_by: str | None = None
    status: Literal["failed", "pending", "successful"]
    status_reason: str
    status_code: StatusCode
    accounts: list[AccountSnapshotOut] = []
