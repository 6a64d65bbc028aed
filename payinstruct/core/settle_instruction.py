"""Instruction Settlement - text + account snapshot -> Outcome, end to end.

Invariants:
    - Flow is strictly: tokens -> parsed instruction -> checks -> ledger copy -> Outcome
    - The caller's accounts are copied before any mutation and never changed
    - today is injected; settle_instruction reads no clock
    - Failed and pending outcomes report pre-mutation balances; failed outcomes
      report [] when either participating account cannot be resolved
"""

from collections.abc import Collection, Sequence
from datetime import date

from payinstruct.core import status_messages as msg
from payinstruct.core.account import Account
from payinstruct.core.account_ledger import InMemoryAccountLedger, apply_transfer
from payinstruct.core.domain_types import (
    DEFAULT_SUPPORTED_CURRENCIES, StatusCode, TransferStatus,
)
from payinstruct.core.instruction import ParsedInstruction, Rejection
from payinstruct.core.outcome import (
    AccountSnapshot, Outcome, build_account_snapshots, outcome_for, rejected,
)
from payinstruct.core.parse_instruction import parse_instruction
from payinstruct.core.validate_instruction import (
    check_accounts_exist, is_future_dated, validate_transfer,
)


def settle_instruction(
    text: str,
    accounts: Sequence[Account],
    *,
    today: date,
    supported_currencies: Collection[str] = DEFAULT_SUPPORTED_CURRENCIES,
) -> Outcome:
    """Parse, validate and (unless future-dated) execute one instruction."""
    parsed = parse_instruction(text)
    if isinstance(parsed, Rejection):
        return rejected(parsed)

    ledger = InMemoryAccountLedger.from_accounts(accounts)
    rejection = validate_transfer(parsed, ledger, supported_currencies)
    if rejection:
        return rejected(rejection, parsed, _resolvable_snapshots(accounts, ledger, parsed))

    if is_future_dated(parsed, today):
        return outcome_for(
            parsed, TransferStatus.PENDING, StatusCode.SCHEDULED,
            msg.TRANSACTION_PENDING,
            build_account_snapshots(accounts, ledger, parsed),
        )

    balances_before = apply_transfer(ledger, parsed)
    return outcome_for(
        parsed, TransferStatus.SUCCESSFUL, StatusCode.EXECUTED,
        msg.TRANSACTION_SUCCESSFUL,
        build_account_snapshots(accounts, ledger, parsed, balances_before),
    )


def _resolvable_snapshots(
    accounts: Sequence[Account],
    ledger: InMemoryAccountLedger,
    instruction: ParsedInstruction,
) -> tuple[AccountSnapshot, ...]:
    if check_accounts_exist(instruction, ledger) is not None:
        return ()
    return build_account_snapshots(accounts, ledger, instruction)
