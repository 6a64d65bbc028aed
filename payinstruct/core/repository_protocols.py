"""Boundary Protocols - contracts between the settlement core and account storage.

Invariants:
    - Core NEVER imports a concrete store; it reads and writes through AccountRepository
    - get() returns the first account whose id matches exactly, or None
    - set_balance() is only called with a non-negative balance for a known account

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: every invocation works on an in-memory snapshot today;
      a durable store would be wrapped by the shell, not awaited by the core
"""

from typing import Protocol

from payinstruct.core.account import Account


class AccountRepository(Protocol):
    """Contract for account reads and balance writes."""
    def get(self, account_id: str) -> Account | None: ...
    def set_balance(self, account_id: str, balance: int) -> None: ...
