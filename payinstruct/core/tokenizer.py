"""Instruction Tokenizer - splits raw instruction text into ordered tokens.

Invariants:
    - Only space, tab, newline and carriage return separate tokens
    - No empty tokens; empty or all-whitespace input yields []
    - Tokens keep their original case and characters
"""

WHITESPACE = frozenset({" ", "\t", "\n", "\r"})


def tokenize(text: str) -> list[str]:
    """Split text on instruction whitespace, collapsing runs."""
    tokens: list[str] = []
    current: list[str] = []
    for ch in text:
        if ch in WHITESPACE:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


def canonical_form(tokens: list[str]) -> str:
    """Single-space rendering of a token list."""
    return " ".join(tokens)
