"""Account Value - one entry of the caller-supplied ledger snapshot.

Invariants:
    - balance is an integer in the smallest currency unit, never negative
    - currency keeps the caller's case; comparisons and output upper-case it
    - Frozen: balance changes produce a new Account (dataclasses.replace)
"""

from dataclasses import dataclass

from payinstruct.core.domain_types import AccountId


ACCOUNT_ID_EXTRA_CHARS = frozenset("-.@")


@dataclass(frozen=True)
class Account:
    """Account as supplied in the request snapshot."""

    id: AccountId
    balance: int
    currency: str

    @property
    def normalized_currency(self) -> str:
        return self.currency.upper()


def is_valid_account_id(account_id: str) -> bool:
    """ASCII letters, digits, '-', '.' and '@' only; empty ids are invalid."""
    if not account_id or not isinstance(account_id, str):
        return False
    for ch in account_id:
        if ch.isascii() and (ch.isalnum() or ch in ACCOUNT_ID_EXTRA_CHARS):
            continue
        return False
    return True
