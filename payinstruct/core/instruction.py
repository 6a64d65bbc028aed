"""Instruction Values - parsed instruction and rejection records.

Invariants:
    - ParsedInstruction.amount > 0 (guaranteed by the parser)
    - ParsedInstruction.currency is upper-case
    - execute_by is an ISO "YYYY-MM-DD" string or None
    - Both types are frozen: built once per invocation, never mutated

Design Decisions:
    - Rejection is a value, not an exception: every parse and business failure
      travels the same return path as success
"""

from dataclasses import dataclass

from payinstruct.core.domain_types import (
    AccountId, CurrencyCode, InstructionType, StatusCode,
)


@dataclass(frozen=True)
class ParsedInstruction:
    """A transfer extracted from one of the two sentence forms."""

    type: InstructionType
    amount: int
    currency: CurrencyCode
    debit_account: AccountId
    credit_account: AccountId
    execute_by: str | None = None

    @property
    def participants(self) -> frozenset[str]:
        return frozenset({self.debit_account, self.credit_account})


@dataclass(frozen=True)
class Rejection:
    """First failed rule: a status code plus a human-readable reason."""

    code: StatusCode
    reason: str
