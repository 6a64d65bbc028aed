"""Status Messages - human-readable reasons attached to every Outcome.

Invariants:
    - All strings are pure data (no IO)
    - Dynamic reasons are built by the functions below, never inline in checks
"""

from collections.abc import Iterable


MALFORMED_INSTRUCTION = "Malformed instruction: unable to parse keywords"
INSUFFICIENT_TOKENS = "Malformed instruction: insufficient keywords"
MISSING_LEADING_KEYWORD = (
    "Missing required keyword: instruction must start with DEBIT or CREDIT"
)
INVALID_AMOUNT = "Amount must be a positive integer"
INVALID_DATE_FORMAT = "Invalid date format. Expected YYYY-MM-DD"
MISSING_DATE = "Missing date after ON keyword"
INVALID_ACCOUNT_ID = "Invalid account ID format"
SAME_ACCOUNT = "Debit and credit accounts cannot be the same"
ACCOUNT_NOT_FOUND = "Account not found"
ACCOUNT_CURRENCY_MISMATCH = "Account currency mismatch"
INSTRUCTION_CURRENCY_MISMATCH = (
    "Transaction currency does not match account currency"
)
TRANSACTION_PENDING = "Transaction scheduled for future execution"
TRANSACTION_SUCCESSFUL = "Transaction executed successfully"
INTERNAL_ERROR = "Internal server error"
INVALID_ACCOUNTS = "Missing or invalid accounts array"
INVALID_INSTRUCTION = "Missing or invalid instruction"


def malformed_form(form: str) -> str:
    return f"Malformed {form} instruction: insufficient keywords"


def missing_keyword(keyword: str) -> str:
    return f"Missing required keyword: {keyword}"


def keyword_out_of_order(keyword: str, position: int) -> str:
    return f"Invalid keyword order: expected {keyword} at position {position + 1}"


def missing_account_id(clause: str) -> str:
    return f"Missing account ID after {clause}"


def unsupported_currency(supported: Iterable[str]) -> str:
    return (
        "Unsupported currency. Only "
        f"{', '.join(sorted(supported))} are supported"
    )


def insufficient_funds(
    balance: int, account_currency: str, amount: int, currency: str,
) -> str:
    return (
        "Insufficient funds in debit account: "
        f"has {balance} {account_currency.upper()}, needs {amount} {currency}"
    )


def invalid_account_entry(index: int, problem: str) -> str:
    return f"Account at index {index} {problem}"


def invalid_request_field(field: str, problem: str) -> str:
    if not field:
        return f"Invalid request body: {problem}"
    return f"Invalid request field {field}: {problem}"
