"""Business Rule Chain - ordered checks between a parsed instruction and execution.

Invariants:
    - All functions are PURE: no IO, no mutation of the ledger
    - Return Rejection on violation, None on success
    - validate_transfer runs the checks in one fixed order; first error wins:
        AC04 id format -> AC02 same account -> CU02 unsupported currency ->
        AC03 unknown account -> CU01 account pair -> CU01 instruction vs debit ->
        AC01 insufficient funds
    - Supported currencies are injected, never read from a module constant here

Design Decisions:
    - One canonical order; pairing and format checks run before any ledger lookup
"""

from collections.abc import Collection
from datetime import date

from payinstruct.core import status_messages as msg
from payinstruct.core.account import is_valid_account_id
from payinstruct.core.domain_types import StatusCode
from payinstruct.core.instruction import ParsedInstruction, Rejection
from payinstruct.core.repository_protocols import AccountRepository


def check_account_id_format(instruction: ParsedInstruction) -> Rejection | None:
    """Rule AC04: both ids restricted to letters, digits, '-', '.', '@'."""
    if not (
        is_valid_account_id(instruction.debit_account)
        and is_valid_account_id(instruction.credit_account)
    ):
        return Rejection(StatusCode.INVALID_ACCOUNT_ID, msg.INVALID_ACCOUNT_ID)
    return None


def check_distinct_accounts(instruction: ParsedInstruction) -> Rejection | None:
    """Rule AC02: a transfer needs two different accounts."""
    if instruction.debit_account == instruction.credit_account:
        return Rejection(StatusCode.SAME_ACCOUNT, msg.SAME_ACCOUNT)
    return None


def check_supported_currency(
    instruction: ParsedInstruction, supported_currencies: Collection[str],
) -> Rejection | None:
    """Rule CU02: instruction currency must be in the configured set."""
    if instruction.currency not in supported_currencies:
        return Rejection(
            StatusCode.UNSUPPORTED_CURRENCY, msg.unsupported_currency(supported_currencies),
        )
    return None


def check_accounts_exist(
    instruction: ParsedInstruction, ledger: AccountRepository,
) -> Rejection | None:
    """Rule AC03: both ids resolve by exact match."""
    if (
        ledger.get(instruction.debit_account) is None
        or ledger.get(instruction.credit_account) is None
    ):
        return Rejection(StatusCode.ACCOUNT_NOT_FOUND, msg.ACCOUNT_NOT_FOUND)
    return None


def check_account_currencies_match(
    instruction: ParsedInstruction, ledger: AccountRepository,
) -> Rejection | None:
    """Rule CU01 (pair): both accounts hold the same currency."""
    debit = ledger.get(instruction.debit_account)
    credit = ledger.get(instruction.credit_account)
    if debit.normalized_currency != credit.normalized_currency:
        return Rejection(StatusCode.CURRENCY_MISMATCH, msg.ACCOUNT_CURRENCY_MISMATCH)
    return None


def check_instruction_currency(
    instruction: ParsedInstruction, ledger: AccountRepository,
) -> Rejection | None:
    """Rule CU01 (instruction): instruction currency equals the debit account's."""
    debit = ledger.get(instruction.debit_account)
    if instruction.currency.upper() != debit.normalized_currency:
        return Rejection(StatusCode.CURRENCY_MISMATCH, msg.INSTRUCTION_CURRENCY_MISMATCH)
    return None


def check_sufficient_funds(
    instruction: ParsedInstruction, ledger: AccountRepository,
) -> Rejection | None:
    """Rule AC01: debit balance covers the amount."""
    debit = ledger.get(instruction.debit_account)
    if debit.balance < instruction.amount:
        return Rejection(
            StatusCode.INSUFFICIENT_FUNDS,
            msg.insufficient_funds(
                debit.balance, debit.currency, instruction.amount, instruction.currency,
            ),
        )
    return None


def validate_transfer(
    instruction: ParsedInstruction,
    ledger: AccountRepository,
    supported_currencies: Collection[str],
) -> Rejection | None:
    """Chain all business checks. Returns first error or None."""
    return (
        check_account_id_format(instruction)
        or check_distinct_accounts(instruction)
        or check_supported_currency(instruction, supported_currencies)
        or check_accounts_exist(instruction, ledger)
        or check_account_currencies_match(instruction, ledger)
        or check_instruction_currency(instruction, ledger)
        or check_sufficient_funds(instruction, ledger)
    )


def is_future_dated(instruction: ParsedInstruction, today: date) -> bool:
    """Scheduling: execute_by strictly after today's UTC date defers the transfer."""
    return instruction.execute_by is not None and instruction.execute_by > today.isoformat()
