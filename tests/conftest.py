"""Root conftest - shared test configuration and account fixtures."""

import os
from datetime import date

import pytest

# Keep tests independent of a developer's .env / shell
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from payinstruct.core.account import Account  # noqa: E402
from payinstruct.core.domain_types import AccountId  # noqa: E402


TODAY = date(2025, 6, 1)


def make_account(account_id: str, balance: int, currency: str = "USD") -> Account:
    return Account(id=AccountId(account_id), balance=balance, currency=currency)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def usd_pair() -> list[Account]:
    """Accounts a{230,USD} and b{300,USD}, in that order."""
    return [make_account("a", 230), make_account("b", 300)]


@pytest.fixture
def mixed_accounts() -> list[Account]:
    return [
        make_account("a", 230),
        make_account("b", 300),
        make_account("n", 500, "NGN"),
        make_account("g", 100, "usd"),
    ]
