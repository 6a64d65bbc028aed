"""Instruction Grammar - matches tokens against the DEBIT-led and CREDIT-led sentence forms.

    DEBIT  <amount> <currency> FROM ACCOUNT <debit_id> FOR CREDIT TO ACCOUNT <credit_id> [ON <date>]
    CREDIT <amount> <currency> TO ACCOUNT <credit_id> FOR DEBIT FROM ACCOUNT <debit_id> [ON <date>]

Invariants:
    - parse_instruction is PURE and never raises: failures come back as Rejection
    - Keywords compare case-insensitively; account ids keep their original case
    - Every keyword has one expected slot, located right after the previous match
    - Missing keyword -> SY01, keyword present later than its slot -> SY02
    - The ON clause is optional and may follow the second account id at any distance

Design Decisions:
    - Each sentence form is data (SentenceForm), one matcher walks both forms
    - Amount tokens accept an optional leading "+" (only "." and "-" are rejected)
"""

import calendar
from dataclasses import dataclass

from payinstruct.core import status_messages as msg
from payinstruct.core.domain_types import (
    AccountId, CurrencyCode, InstructionType, StatusCode,
)
from payinstruct.core.instruction import ParsedInstruction, Rejection
from payinstruct.core.tokenizer import tokenize


MIN_INSTRUCTION_TOKENS = 8
MIN_FORM_TOKENS = 10
AMOUNT_INDEX = 1
CURRENCY_INDEX = 2
FIRST_KEYWORD_INDEX = 3
DATE_KEYWORD = "ON"
DATE_LENGTH = 10
DATE_SEPARATOR_POSITIONS = (4, 7)


@dataclass(frozen=True)
class AccountClause:
    """Keyword run that introduces one account id, e.g. FROM ACCOUNT <id>."""
    keywords: tuple[str, ...]
    role: str   # "debit" | "credit"

    @property
    def label(self) -> str:
        return " ".join(self.keywords[-2:])


@dataclass(frozen=True)
class SentenceForm:
    """One of the two accepted instruction sentences."""
    type: InstructionType
    clauses: tuple[AccountClause, AccountClause]


DEBIT_FORM = SentenceForm(
    type=InstructionType.DEBIT,
    clauses=(
        AccountClause(("FROM", "ACCOUNT"), "debit"),
        AccountClause(("FOR", "CREDIT", "TO", "ACCOUNT"), "credit"),
    ),
)

CREDIT_FORM = SentenceForm(
    type=InstructionType.CREDIT,
    clauses=(
        AccountClause(("TO", "ACCOUNT"), "credit"),
        AccountClause(("FOR", "DEBIT", "FROM", "ACCOUNT"), "debit"),
    ),
)

SENTENCE_FORMS: dict[str, SentenceForm] = {
    InstructionType.DEBIT.value: DEBIT_FORM,
    InstructionType.CREDIT.value: CREDIT_FORM,
}


def parse_instruction(text: str) -> ParsedInstruction | Rejection:
    """Tokenize and parse an instruction. Returns the first grammar failure or the instruction."""
    if not isinstance(text, str):
        return Rejection(StatusCode.MALFORMED_INSTRUCTION, msg.MALFORMED_INSTRUCTION)
    return parse_tokens(tokenize(text))


def parse_tokens(tokens: list[str]) -> ParsedInstruction | Rejection:
    """Dispatch on the leading keyword and match the rest of the sentence."""
    if len(tokens) < MIN_INSTRUCTION_TOKENS:
        return Rejection(StatusCode.MALFORMED_INSTRUCTION, msg.INSUFFICIENT_TOKENS)

    form = SENTENCE_FORMS.get(tokens[0].upper())
    if form is None:
        return Rejection(StatusCode.MISSING_KEYWORD, msg.MISSING_LEADING_KEYWORD)
    return _parse_form(form, tokens)


def _parse_form(form: SentenceForm, tokens: list[str]) -> ParsedInstruction | Rejection:
    if len(tokens) < MIN_FORM_TOKENS:
        return Rejection(
            StatusCode.MALFORMED_INSTRUCTION, msg.malformed_form(form.type.value),
        )

    amount = parse_amount(tokens[AMOUNT_INDEX])
    if amount is None:
        return Rejection(StatusCode.INVALID_AMOUNT, msg.INVALID_AMOUNT)
    currency = CurrencyCode(tokens[CURRENCY_INDEX].upper())

    account_ids: dict[str, AccountId] = {}
    position = FIRST_KEYWORD_INDEX
    for clause in form.clauses:
        for keyword in clause.keywords:
            rejection = _expect_keyword(tokens, position, keyword)
            if rejection:
                return rejection
            position += 1
        if position >= len(tokens):
            return Rejection(
                StatusCode.MALFORMED_INSTRUCTION, msg.missing_account_id(clause.label),
            )
        account_ids[clause.role] = AccountId(tokens[position])
        position += 1

    execute_by = _parse_date_clause(tokens, position)
    if isinstance(execute_by, Rejection):
        return execute_by

    return ParsedInstruction(
        type=form.type,
        amount=amount,
        currency=currency,
        debit_account=account_ids["debit"],
        credit_account=account_ids["credit"],
        execute_by=execute_by,
    )


def _expect_keyword(tokens: list[str], position: int, keyword: str) -> Rejection | None:
    """Keyword must sit exactly at position; tell missing apart from misplaced."""
    if position < len(tokens) and tokens[position].upper() == keyword:
        return None
    if find_keyword(tokens, keyword, position + 1) != -1:
        return Rejection(
            StatusCode.INVALID_KEYWORD_ORDER, msg.keyword_out_of_order(keyword, position),
        )
    return Rejection(StatusCode.MISSING_KEYWORD, msg.missing_keyword(keyword))


def _parse_date_clause(tokens: list[str], start: int) -> str | None | Rejection:
    on_index = find_keyword(tokens, DATE_KEYWORD, start)
    if on_index == -1:
        return None
    if on_index + 1 >= len(tokens):
        return Rejection(StatusCode.INVALID_DATE, msg.MISSING_DATE)
    candidate = tokens[on_index + 1]
    if not is_valid_date(candidate):
        return Rejection(StatusCode.INVALID_DATE, msg.INVALID_DATE_FORMAT)
    return candidate


def find_keyword(tokens: list[str], keyword: str, start: int = 0) -> int:
    """Index of the first case-insensitive match at or after start, else -1."""
    for index in range(start, len(tokens)):
        if tokens[index].upper() == keyword.upper():
            return index
    return -1


def parse_amount(token: str) -> int | None:
    """Positive base-10 integer or None. "+" prefix tolerated, "." and "-" rejected."""
    if "." in token or "-" in token:
        return None
    digits = token[1:] if token.startswith("+") else token
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    amount = int(digits)
    return amount if amount > 0 else None


def is_valid_date(text: str) -> bool:
    """Strict YYYY-MM-DD naming a real day of the proleptic Gregorian calendar (0000-9999)."""
    if len(text) != DATE_LENGTH:
        return False
    for index, ch in enumerate(text):
        if index in DATE_SEPARATOR_POSITIONS:
            if ch != "-":
                return False
        elif not "0" <= ch <= "9":
            return False

    year, month, day = int(text[0:4]), int(text[5:7]), int(text[8:10])
    if not 1 <= month <= 12:
        return False
    # monthrange maps years outside datetime's range onto the same 400-year cycle
    return 1 <= day <= calendar.monthrange(year, month)[1]
