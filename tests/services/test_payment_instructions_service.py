"""Payment Instruction Service - tests for payload coercion and logging.

Tests cover:
    - Happy path delegates to settlement with trimmed inputs
    - Payload shape problems become SY03 outcomes
    - Non-mapping payload raises InvalidPayloadError
    - Account entry checks report the offending index
    - Settlement logged with status extras
"""

import logging
from datetime import date

import pytest

from payinstruct.core.domain_types import DEFAULT_SUPPORTED_CURRENCIES, StatusCode
from payinstruct.core.errors import InvalidPayloadError
from payinstruct.services.payment_instructions import load_accounts, process_payment_request


TODAY = date(2025, 6, 1)
INSTRUCTION = "DEBIT 30 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"


def _accounts() -> list[dict]:
    return [
        {"id": "a", "balance": 230, "currency": "USD"},
        {"id": "b", "balance": 300, "currency": "USD"},
    ]


def _process(payload, currencies=DEFAULT_SUPPORTED_CURRENCIES):
    return process_payment_request(
        payload, today=TODAY, supported_currencies=currencies,
    )


# ─── Happy path ──────────────────────────────────────────────────

def test_executes_valid_payload():
    outcome = _process({"accounts": _accounts(), "instruction": INSTRUCTION})
    assert outcome.status_code == StatusCode.EXECUTED
    assert [(s.id, s.balance) for s in outcome.accounts] == [("a", 200), ("b", 330)]


def test_trims_instruction_and_account_fields():
    accounts = [
        {"id": " a ", "balance": 230, "currency": " usd"},
        {"id": "b\t", "balance": 300, "currency": "USD "},
    ]
    outcome = _process({"accounts": accounts, "instruction": f"  {INSTRUCTION}\n"})
    assert outcome.status_code == StatusCode.EXECUTED


def test_integral_float_balance_is_accepted():
    accounts = _accounts()
    accounts[0]["balance"] = 230.0
    outcome = _process({"accounts": accounts, "instruction": INSTRUCTION})
    assert outcome.status_code == StatusCode.EXECUTED
    assert isinstance(outcome.accounts[0].balance, int)


def test_ignores_unknown_payload_keys():
    outcome = _process({"accounts": _accounts(), "instruction": INSTRUCTION, "x": 1})
    assert outcome.status_code == StatusCode.EXECUTED


def test_currency_allow_list_is_passed_through():
    outcome = _process(
        {"accounts": _accounts(), "instruction": INSTRUCTION}, frozenset({"NGN"}),
    )
    assert outcome.status_code == StatusCode.UNSUPPORTED_CURRENCY


# ─── Payload shape ───────────────────────────────────────────────

@pytest.mark.parametrize("payload", [None, [], "text", 42])
def test_non_mapping_payload_raises(payload):
    with pytest.raises(InvalidPayloadError):
        _process(payload)


@pytest.mark.parametrize("accounts", [None, [], {"id": "a"}, "a"])
def test_bad_accounts_array_is_malformed(accounts):
    outcome = _process({"accounts": accounts, "instruction": INSTRUCTION})
    assert outcome.status_code == StatusCode.MALFORMED_INSTRUCTION
    assert outcome.status_reason == "Missing or invalid accounts array"
    assert outcome.accounts == ()


@pytest.mark.parametrize("instruction", [None, "", "   ", 5])
def test_bad_instruction_is_malformed(instruction):
    outcome = _process({"accounts": _accounts(), "instruction": instruction})
    assert outcome.status_code == StatusCode.MALFORMED_INSTRUCTION
    assert outcome.type is None


# ─── Account entries ─────────────────────────────────────────────

@pytest.mark.parametrize("entry,problem", [
    ("a", "must be an object"),
    ({"balance": 1, "currency": "USD"}, "is missing required field: id"),
    ({"id": 7, "balance": 1, "currency": "USD"}, "field id must be a string"),
    ({"id": " ", "balance": 1, "currency": "USD"}, "field id cannot be empty"),
    ({"id": "x", "balance": 1}, "is missing required field: currency"),
    ({"id": "x", "currency": "USD"}, "is missing required field: balance"),
    ({"id": "x", "balance": "10", "currency": "USD"}, "field balance must be a number"),
    ({"id": "x", "balance": True, "currency": "USD"}, "field balance must be a number"),
    ({"id": "x", "balance": float("inf"), "currency": "USD"}, "must be a finite number"),
    ({"id": "x", "balance": -1, "currency": "USD"}, "field balance cannot be negative"),
    ({"id": "x", "balance": 1.5, "currency": "USD"}, "must be a whole number"),
])
def test_bad_account_entry_is_malformed(entry, problem):
    outcome = _process({"accounts": [_accounts()[0], entry], "instruction": INSTRUCTION})
    assert outcome.status_code == StatusCode.MALFORMED_INSTRUCTION
    assert outcome.status_reason.startswith("Account at index 1")
    assert problem in outcome.status_reason


def test_load_accounts_preserves_order():
    accounts = load_accounts(list(reversed(_accounts())))
    assert [account.id for account in accounts] == ["b", "a"]


# ─── Logging ─────────────────────────────────────────────────────

def test_settlement_is_logged_with_extras(caplog):
    caplog.set_level(logging.INFO, logger="payinstruct.services.payment_instructions")
    _process({"accounts": _accounts(), "instruction": INSTRUCTION})
    record = next(r for r in caplog.records if r.message.startswith("Instruction settled"))
    assert record.status_code == "AP00"
    assert record.instruction_type == "DEBIT"
    assert record.account_count == 2


def test_rejected_snapshot_is_logged_as_warning(caplog):
    caplog.set_level(logging.WARNING, logger="payinstruct.services.payment_instructions")
    _process({"accounts": ["bad"], "instruction": INSTRUCTION})
    assert any(r.levelno == logging.WARNING for r in caplog.records)
