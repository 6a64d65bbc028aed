"""Outcome Builder - the single result record and its participating-account snapshot.

Invariants:
    - accounts lists only the debit and credit accounts, in input order (not execution order)
    - Non-executed outcomes: balance_before == balance
    - Executed outcomes: balance_before is the pre-transfer value, balance the post-transfer value
    - Snapshot currencies are always upper-case
    - Parse failures carry null instruction fields and an empty accounts list
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from payinstruct.core import status_messages as msg
from payinstruct.core.account import Account
from payinstruct.core.domain_types import SUCCESS_CODES, StatusCode, TransferStatus
from payinstruct.core.instruction import ParsedInstruction, Rejection
from payinstruct.core.repository_protocols import AccountRepository


@dataclass(frozen=True)
class AccountSnapshot:
    id: str
    balance: int
    balance_before: int
    currency: str

    def to_response(self) -> dict:
        return {
            "id": self.id,
            "balance": self.balance,
            "balance_before": self.balance_before,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class Outcome:
    """Everything the caller learns about one instruction."""

    status: TransferStatus
    status_code: StatusCode
    status_reason: str
    type: str | None = None
    amount: int | None = None
    currency: str | None = None
    debit_account: str | None = None
    credit_account: str | None = None
    execute_by: str | None = None
    accounts: tuple[AccountSnapshot, ...] = field(default_factory=tuple)

    @property
    def is_accepted(self) -> bool:
        return self.status_code in SUCCESS_CODES

    def to_response(self) -> dict:
        """Convert to the JSON response body."""
        return {
            "type": self.type,
            "amount": self.amount,
            "currency": self.currency,
            "debit_account": self.debit_account,
            "credit_account": self.credit_account,
            "execute_by": self.execute_by,
            "status": self.status.value,
            "status_reason": self.status_reason,
            "status_code": self.status_code.value,
            "accounts": [snapshot.to_response() for snapshot in self.accounts],
        }


def build_account_snapshots(
    accounts: Iterable[Account],
    ledger: AccountRepository,
    instruction: ParsedInstruction,
    balances_before: Mapping[str, int] | None = None,
) -> tuple[AccountSnapshot, ...]:
    """Snapshot participating accounts in input order, reading balances from the ledger."""
    snapshots = []
    for account in accounts:
        if account.id not in instruction.participants:
            continue
        current = ledger.get(account.id)
        balance = current.balance if current is not None else account.balance
        before = balance
        if balances_before is not None:
            before = balances_before.get(account.id, balance)
        snapshots.append(AccountSnapshot(
            id=account.id,
            balance=balance,
            balance_before=before,
            currency=account.normalized_currency,
        ))
    return tuple(snapshots)


def outcome_for(
    instruction: ParsedInstruction,
    status: TransferStatus,
    code: StatusCode,
    reason: str,
    snapshots: tuple[AccountSnapshot, ...] = (),
) -> Outcome:
    """Outcome carrying the instruction's fields."""
    return Outcome(
        status=status,
        status_code=code,
        status_reason=reason,
        type=instruction.type.value,
        amount=instruction.amount,
        currency=instruction.currency,
        debit_account=instruction.debit_account,
        credit_account=instruction.credit_account,
        execute_by=instruction.execute_by,
        accounts=snapshots,
    )


def rejected(
    rejection: Rejection,
    instruction: ParsedInstruction | None = None,
    snapshots: tuple[AccountSnapshot, ...] = (),
) -> Outcome:
    """Failed outcome; without an instruction every instruction field is null."""
    if instruction is None:
        return Outcome(
            status=TransferStatus.FAILED,
            status_code=rejection.code,
            status_reason=rejection.reason,
        )
    return outcome_for(
        instruction, TransferStatus.FAILED, rejection.code, rejection.reason, snapshots,
    )


def malformed_request(reason: str) -> Outcome:
    """SY03 outcome for payloads the core cannot interpret."""
    return rejected(Rejection(StatusCode.MALFORMED_INSTRUCTION, reason))


def internal_error() -> Outcome:
    """Fixed fallback returned by the HTTP error boundary."""
    return malformed_request(msg.INTERNAL_ERROR)
