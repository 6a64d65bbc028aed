"""Payment Instruction Service - raw payload in, Outcome out.

Invariants:
    - Repeats the request-schema checks so direct callers get the same defence as HTTP callers
    - Shape problems inside the payload come back as SY03 outcomes, never raised
    - Only a payload that is not a mapping raises (InvalidPayloadError)
    - Account ids, currencies and the instruction are trimmed before settlement

Design Decisions:
    - Impure shell around settle_instruction: owns logging and payload coercion,
      takes today and the currency allow-list as arguments
"""

import logging
import math
from collections.abc import Collection, Mapping
from datetime import date
from numbers import Real

from payinstruct.core import status_messages as msg
from payinstruct.core.account import Account
from payinstruct.core.domain_types import AccountId
from payinstruct.core.errors import InvalidPayloadError
from payinstruct.core.outcome import Outcome, malformed_request
from payinstruct.core.settle_instruction import settle_instruction

logger = logging.getLogger(__name__)


class AccountEntryError(ValueError):
    """One raw account entry failed the shape checks."""


def process_payment_request(
    payload: Mapping,
    *,
    today: date,
    supported_currencies: Collection[str],
) -> Outcome:
    """Validate payload shape, load accounts, settle the instruction."""
    if not isinstance(payload, Mapping):
        raise InvalidPayloadError()

    raw_accounts = payload.get("accounts")
    if not isinstance(raw_accounts, list) or not raw_accounts:
        return malformed_request(msg.INVALID_ACCOUNTS)

    instruction = payload.get("instruction")
    if not isinstance(instruction, str) or not instruction.strip():
        return malformed_request(msg.INVALID_INSTRUCTION)

    try:
        accounts = load_accounts(raw_accounts)
    except AccountEntryError as e:
        logger.warning(f"Rejected account snapshot: {e}")
        return malformed_request(str(e))

    outcome = settle_instruction(
        instruction.strip(), accounts,
        today=today, supported_currencies=supported_currencies,
    )
    logger.info(
        f"Instruction settled: {outcome.status.value}",
        extra={
            "status_code": outcome.status_code.value,
            "instruction_type": outcome.type,
            "account_count": len(accounts),
        },
    )
    return outcome


def load_accounts(raw_accounts: list) -> list[Account]:
    """Coerce raw account dicts into Account values, in order."""
    return [_load_account(index, raw) for index, raw in enumerate(raw_accounts)]


def _load_account(index: int, raw: object) -> Account:
    if not isinstance(raw, Mapping):
        raise AccountEntryError(msg.invalid_account_entry(index, "must be an object"))

    account_id = _required_text(index, raw, "id")
    currency = _required_text(index, raw, "currency")

    balance = raw.get("balance")
    if balance is None:
        raise AccountEntryError(
            msg.invalid_account_entry(index, "is missing required field: balance"),
        )
    if isinstance(balance, bool) or not isinstance(balance, Real):
        raise AccountEntryError(
            msg.invalid_account_entry(index, "field balance must be a number"),
        )
    if not math.isfinite(balance):
        raise AccountEntryError(
            msg.invalid_account_entry(index, "field balance must be a finite number"),
        )
    if balance < 0:
        raise AccountEntryError(
            msg.invalid_account_entry(index, "field balance cannot be negative"),
        )
    if int(balance) != balance:
        raise AccountEntryError(
            msg.invalid_account_entry(index, "field balance must be a whole number"),
        )

    return Account(id=AccountId(account_id), balance=int(balance), currency=currency)


def _required_text(index: int, raw: Mapping, name: str) -> str:
    value = raw.get(name)
    if value is None:
        raise AccountEntryError(
            msg.invalid_account_entry(index, f"is missing required field: {name}"),
        )
    if not isinstance(value, str):
        raise AccountEntryError(
            msg.invalid_account_entry(index, f"field {name} must be a string"),
        )
    value = value.strip()
    if not value:
        raise AccountEntryError(
            msg.invalid_account_entry(index, f"field {name} cannot be empty"),
        )
    return value
