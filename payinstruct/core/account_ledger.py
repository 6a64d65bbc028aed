"""Account Ledger - in-memory copy of the request snapshot plus the transfer mutator.

Invariants:
    - from_accounts() copies the snapshot; the caller's sequence is never mutated
    - Input order is preserved; the first account with a given id shadows later ones
    - set_balance writes only that first match
    - apply_transfer never drives a balance negative and conserves the pair total

Design Decisions:
    - apply_transfer depends only on AccountRepository, so a durable store can
      replace InMemoryAccountLedger without touching parser or chain
"""

from collections.abc import Iterable
from dataclasses import replace

from payinstruct.core.account import Account
from payinstruct.core.errors import LedgerInvariantError
from payinstruct.core.instruction import ParsedInstruction
from payinstruct.core.repository_protocols import AccountRepository


class InMemoryAccountLedger:
    """AccountRepository over a private copy of the request snapshot."""

    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts: list[Account] = list(accounts)

    @classmethod
    def from_accounts(cls, accounts: Iterable[Account]) -> "InMemoryAccountLedger":
        return cls(replace(account) for account in accounts)

    def get(self, account_id: str) -> Account | None:
        index = self._index_of(account_id)
        return self._accounts[index] if index is not None else None

    def set_balance(self, account_id: str, balance: int) -> None:
        index = self._index_of(account_id)
        if index is None:
            raise LedgerInvariantError(
                f"Cannot write balance of unknown account '{account_id}'", account_id,
            )
        if balance < 0:
            raise LedgerInvariantError(
                f"Balance of '{account_id}' would become negative", account_id,
            )
        self._accounts[index] = replace(self._accounts[index], balance=balance)

    def _index_of(self, account_id: str) -> int | None:
        for index, account in enumerate(self._accounts):
            if account.id == account_id:
                return index
        return None


def apply_transfer(
    ledger: AccountRepository, instruction: ParsedInstruction,
) -> dict[str, int]:
    """Move amount from debit to credit. Returns balances before the transfer, by id."""
    debit = ledger.get(instruction.debit_account)
    credit = ledger.get(instruction.credit_account)
    if debit is None or credit is None:
        missing = instruction.debit_account if debit is None else instruction.credit_account
        raise LedgerInvariantError(f"Account '{missing}' not found in ledger", missing)
    if debit.balance < instruction.amount:
        raise LedgerInvariantError(
            f"Balance of '{debit.id}' would become negative", debit.id,
        )

    balances_before = {debit.id: debit.balance, credit.id: credit.balance}
    ledger.set_balance(debit.id, debit.balance - instruction.amount)
    ledger.set_balance(credit.id, credit.balance + instruction.amount)
    return balances_before
