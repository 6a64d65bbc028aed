"""Instruction Settlement - end-to-end tests from text + accounts to Outcome.

Tests cover:
    - Reference scenarios A-F
    - CREDIT form executes the same transfer as the DEBIT form
    - Pending vs immediate execution around today's date
    - Conservation of the pair total on success
    - Caller's account list is never mutated
    - Snapshot presence on failures (empty when accounts do not resolve)
"""

from datetime import date

import pytest

from payinstruct.core.account import Account
from payinstruct.core.domain_types import StatusCode, TransferStatus
from payinstruct.core.settle_instruction import settle_instruction


TODAY = date(2025, 6, 1)
A_TO_B = "FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"


def _settle(text, accounts, today=TODAY, **kwargs):
    return settle_instruction(text, accounts, today=today, **kwargs)


def _balances(outcome) -> dict[str, tuple[int, int]]:
    return {s.id: (s.balance_before, s.balance) for s in outcome.accounts}


# ─── Reference scenarios ─────────────────────────────────────────

def test_scenario_a_executes_debit(usd_pair):
    outcome = _settle(f"DEBIT 30 USD {A_TO_B}", usd_pair)
    assert outcome.status == TransferStatus.SUCCESSFUL
    assert outcome.status_code == StatusCode.EXECUTED
    assert _balances(outcome) == {"a": (230, 200), "b": (300, 330)}


def test_scenario_b_insufficient_funds(usd_pair):
    outcome = _settle(f"DEBIT 5000 USD {A_TO_B}", usd_pair)
    assert outcome.status_code == StatusCode.INSUFFICIENT_FUNDS
    assert _balances(outcome) == {"a": (230, 230), "b": (300, 300)}


def test_scenario_c_unsupported_currency(usd_pair):
    outcome = _settle(f"DEBIT 30 EUR {A_TO_B}", usd_pair)
    assert outcome.status_code == StatusCode.UNSUPPORTED_CURRENCY
    assert outcome.currency == "EUR"
    assert _balances(outcome) == {"a": (230, 230), "b": (300, 300)}


def test_scenario_d_same_account(usd_pair):
    outcome = _settle("DEBIT 10 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT a", usd_pair)
    assert outcome.status_code == StatusCode.SAME_ACCOUNT
    assert outcome.status == TransferStatus.FAILED


def test_scenario_e_future_date_is_pending(usd_pair):
    outcome = _settle(f"DEBIT 30 USD {A_TO_B} ON 2099-01-01", usd_pair)
    assert outcome.status == TransferStatus.PENDING
    assert outcome.status_code == StatusCode.SCHEDULED
    assert outcome.execute_by == "2099-01-01"
    assert _balances(outcome) == {"a": (230, 230), "b": (300, 300)}


def test_scenario_f_negative_amount(usd_pair):
    outcome = _settle(f"DEBIT -5 USD {A_TO_B}", usd_pair)
    assert outcome.status_code == StatusCode.INVALID_AMOUNT
    assert outcome.accounts == ()
    assert outcome.amount is None


# ─── Forms and dates ─────────────────────────────────────────────

def test_credit_form_executes_same_transfer(usd_pair):
    outcome = _settle("CREDIT 30 USD TO ACCOUNT b FOR DEBIT FROM ACCOUNT a", usd_pair)
    assert outcome.status_code == StatusCode.EXECUTED
    assert outcome.type == "CREDIT"
    assert _balances(outcome) == {"a": (230, 200), "b": (300, 330)}


def test_date_equal_to_today_executes(usd_pair):
    outcome = _settle(f"DEBIT 30 USD {A_TO_B} ON 2025-06-01", usd_pair)
    assert outcome.status_code == StatusCode.EXECUTED
    assert outcome.execute_by == "2025-06-01"


def test_past_date_executes(usd_pair):
    outcome = _settle(f"DEBIT 30 USD {A_TO_B} ON 2020-01-01", usd_pair)
    assert outcome.status_code == StatusCode.EXECUTED


def test_year_zero_date_executes_immediately(usd_pair):
    outcome = _settle(f"DEBIT 30 USD {A_TO_B} ON 0000-01-01", usd_pair)
    assert outcome.status_code == StatusCode.EXECUTED
    assert outcome.execute_by == "0000-01-01"


def test_today_is_injected(usd_pair):
    text = f"DEBIT 30 USD {A_TO_B} ON 2025-06-02"
    assert _settle(text, usd_pair).status_code == StatusCode.SCHEDULED
    assert _settle(text, usd_pair, today=date(2025, 6, 2)).status_code == StatusCode.EXECUTED


def test_pending_still_requires_sufficient_funds(usd_pair):
    outcome = _settle(f"DEBIT 5000 USD {A_TO_B} ON 2099-01-01", usd_pair)
    assert outcome.status_code == StatusCode.INSUFFICIENT_FUNDS


# ─── Properties ──────────────────────────────────────────────────

@pytest.mark.parametrize("amount", [1, 17, 229, 230])
def test_success_conserves_pair_total(usd_pair, amount):
    outcome = _settle(f"DEBIT {amount} USD {A_TO_B}", usd_pair)
    assert outcome.status_code == StatusCode.EXECUTED
    before = sum(s.balance_before for s in outcome.accounts)
    after = sum(s.balance for s in outcome.accounts)
    assert before == after == 530
    assert _balances(outcome)["a"] == (230, 230 - amount)


def test_caller_accounts_not_mutated(usd_pair):
    original = list(usd_pair)
    _settle(f"DEBIT 30 USD {A_TO_B}", usd_pair)
    assert usd_pair == original
    assert usd_pair[0].balance == 230


def test_snapshot_excludes_other_accounts_and_keeps_input_order(mixed_accounts):
    accounts = list(reversed(mixed_accounts))
    outcome = _settle(f"DEBIT 30 USD {A_TO_B}", accounts)
    assert [s.id for s in outcome.accounts] == ["b", "a"]


def test_lower_case_account_currency_reported_upper_case():
    accounts = [
        Account(id="a", balance=50, currency="ghs"),
        Account(id="b", balance=0, currency="GHS"),
    ]
    outcome = _settle(f"DEBIT 50 ghs {A_TO_B}", accounts)
    assert outcome.status_code == StatusCode.EXECUTED
    assert {s.currency for s in outcome.accounts} == {"GHS"}
    assert _balances(outcome) == {"a": (50, 0), "b": (0, 50)}


# ─── Failure snapshots ──────────────────────────────────────────

def test_unknown_account_reports_no_snapshot(usd_pair):
    outcome = _settle("DEBIT 30 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT zzz", usd_pair)
    assert outcome.status_code == StatusCode.ACCOUNT_NOT_FOUND
    assert outcome.accounts == ()
    assert outcome.debit_account == "a"


def test_currency_mismatch_reports_snapshot(mixed_accounts):
    outcome = _settle("DEBIT 30 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT n", mixed_accounts)
    assert outcome.status_code == StatusCode.CURRENCY_MISMATCH
    assert [s.id for s in outcome.accounts] == ["a", "n"]


def test_parse_failure_reports_null_fields(usd_pair):
    outcome = _settle(f"DEBIT 30 USD {A_TO_B} ON 2025-02-30", usd_pair)
    assert outcome.status_code == StatusCode.INVALID_DATE
    assert outcome.type is None
    assert outcome.accounts == ()


def test_supported_currencies_override(usd_pair):
    outcome = _settle(
        f"DEBIT 30 USD {A_TO_B}", usd_pair, supported_currencies=frozenset({"GBP"}),
    )
    assert outcome.status_code == StatusCode.UNSUPPORTED_CURRENCY
