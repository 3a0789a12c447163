"""Two-way conversion between raw values and their masked display text.

Every helper here follows permissive live-typing rules: characters that do
not fit a slot are skipped, out-of-range positions are clamped, and nothing
raises.  An empty :class:`~textmask.tokens.CompiledMask` turns every operation
into a pass-through.
"""
from __future__ import annotations

import sys
from typing import Optional

from .tokens import CompiledMask, TokenKind


UNBOUNDED = sys.maxsize


def validate_char(char: str, kind: TokenKind) -> Optional[str]:
    """Return ``char`` normalised for ``kind`` or ``None`` when it is rejected."""

    if not isinstance(char, str) or len(char) != 1:
        return None
    if kind in (TokenKind.REQUIRED_DIGIT, TokenKind.OPTIONAL_DIGIT):
        return char if char.isdecimal() else None
    if kind in (TokenKind.REQUIRED_LETTER, TokenKind.OPTIONAL_LETTER):
        return char if char.isalpha() else None
    if kind in (TokenKind.REQUIRED_LETTER_UPPER, TokenKind.OPTIONAL_LETTER_UPPER):
        if not char.isalpha():
            return None
        upper = char.upper()
        # Some letters expand when upper-cased (``ß`` -> ``SS``); keep those as typed.
        return upper if len(upper) == 1 else char
    if kind in (TokenKind.REQUIRED_ANY, TokenKind.OPTIONAL_ANY):
        return char
    return None


def capacity(mask: CompiledMask) -> int:
    """Return how many raw characters ``mask`` can hold."""

    if mask.is_empty:
        return UNBOUNDED
    return len(mask.input_tokens)


def trim_to_capacity(mask: CompiledMask, raw: Optional[str]) -> str:
    text = raw or ""
    limit = capacity(mask)
    if len(text) <= limit:
        return text
    return text[:limit]


def format_raw(
    mask: CompiledMask, raw: Optional[str], show_optional_prompts: bool = False
) -> str:
    """Render ``raw`` through ``mask``.

    Unfilled required slots show the prompt character.  Unfilled optional
    slots show it only when ``show_optional_prompts`` is set and are omitted
    otherwise.  A raw character rejected by its slot is skipped and the slot
    is rendered as unfilled.
    """

    text = raw or ""
    if mask.is_empty or not text:
        return text

    output: list[str] = []
    raw_index = 0
    for token in mask.tokens:
        if token.is_literal:
            output.append(token.character)
            continue
        accepted = None
        if raw_index < len(text):
            accepted = validate_char(text[raw_index], token.kind)
            raw_index += 1
        if accepted is not None:
            output.append(accepted)
        elif not token.is_optional or show_optional_prompts:
            output.append(mask.prompt_char)
    return "".join(output)


def extract_raw(
    mask: CompiledMask, display: Optional[str], include_literals: bool = False
) -> str:
    """Recover the raw value from ``display``.

    Display characters are matched against the tokens in order.  Prompt
    characters are treated as untyped slots, characters equal to a pending
    literal consume that literal (and are copied when ``include_literals`` is
    set), and everything else must validate against the next input slot or
    is dropped.  Collection stops once the mask is full.
    """

    text = display or ""
    if mask.is_empty or not text:
        return text

    tokens = mask.tokens
    limit = capacity(mask)
    output: list[str] = []
    filled = 0
    token_index = 0

    for char in text:
        if filled >= limit or token_index >= len(tokens):
            break
        if char == mask.prompt_char:
            continue

        matched_literal = False
        while token_index < len(tokens) and tokens[token_index].is_literal:
            literal = tokens[token_index].character
            token_index += 1
            if char == literal:
                if include_literals:
                    output.append(char)
                matched_literal = True
                break
        if matched_literal or token_index >= len(tokens):
            continue

        accepted = validate_char(char, tokens[token_index].kind)
        if accepted is not None:
            output.append(accepted)
            filled += 1
            token_index += 1

    return "".join(output)


def normalize_for_raw_index(
    mask: CompiledMask, char: str, raw_index: int
) -> Optional[str]:
    """Validate ``char`` against the slot that raw position ``raw_index`` fills."""

    if mask.is_empty:
        return char
    token = mask.token_at_raw_index(raw_index)
    if token is None:
        return None
    return validate_char(char, token.kind)


def is_complete(mask: CompiledMask, raw: Optional[str]) -> bool:
    """Return ``True`` when every required slot holds a valid raw character."""

    text = raw or ""
    if mask.is_empty:
        return bool(text)

    for raw_index, token in enumerate(mask.input_tokens):
        if token.is_optional:
            continue
        if raw_index >= len(text):
            return False
        if validate_char(text[raw_index], token.kind) is None:
            return False
    return True


__all__ = [
    "UNBOUNDED",
    "capacity",
    "extract_raw",
    "format_raw",
    "is_complete",
    "normalize_for_raw_index",
    "trim_to_capacity",
    "validate_char",
]
