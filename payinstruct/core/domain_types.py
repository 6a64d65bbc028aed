"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId and CurrencyCode wrap str; never pass bare ids through the chain
    - Every status code the service can emit is a StatusCode member
    - Only AP00 and AP02 are success codes (HTTP 200); everything else is HTTP 400

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", str)
CurrencyCode = NewType("CurrencyCode", str)   # 3-letter, upper-cased on output


# ─── Enums ───────────────────────────────────────────────────────

class InstructionType(str, Enum):
    """Leading keyword of an instruction sentence."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransferStatus(str, Enum):
    """Outcome status reported to the caller."""
    FAILED = "failed"
    PENDING = "pending"
    SUCCESSFUL = "successful"


class StatusCode(str, Enum):
    """Precise outcome codes, grouped by family prefix."""
    # Syntax / structure
    MISSING_KEYWORD = "SY01"
    INVALID_KEYWORD_ORDER = "SY02"
    MALFORMED_INSTRUCTION = "SY03"

    # Instruction values
    INVALID_AMOUNT = "AM01"
    INVALID_DATE = "DT01"

    # Accounts
    INSUFFICIENT_FUNDS = "AC01"
    SAME_ACCOUNT = "AC02"
    ACCOUNT_NOT_FOUND = "AC03"
    INVALID_ACCOUNT_ID = "AC04"

    # Currency
    CURRENCY_MISMATCH = "CU01"
    UNSUPPORTED_CURRENCY = "CU02"

    # Accepted
    EXECUTED = "AP00"
    SCHEDULED = "AP02"


SUCCESS_CODES = frozenset({StatusCode.EXECUTED, StatusCode.SCHEDULED})

DEFAULT_SUPPORTED_CURRENCIES = frozenset({"NGN", "USD", "GBP", "GHS"})
