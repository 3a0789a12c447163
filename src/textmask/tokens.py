"""Compile mask patterns into immutable token sequences."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


DEFAULT_PROMPT_CHAR = "_"
ESCAPE_CHAR = "\\"


class MaskPatternError(ValueError):
    """Raised when a mask is configured with an unusable prompt character."""


class TokenKind(Enum):
    """Slot kinds recognised by the pattern vocabulary."""

    LITERAL = "literal"
    REQUIRED_DIGIT = "required_digit"
    OPTIONAL_DIGIT = "optional_digit"
    REQUIRED_LETTER = "required_letter"
    OPTIONAL_LETTER = "optional_letter"
    REQUIRED_LETTER_UPPER = "required_letter_upper"
    OPTIONAL_LETTER_UPPER = "optional_letter_upper"
    REQUIRED_ANY = "required_any"
    OPTIONAL_ANY = "optional_any"

    @property
    def is_literal(self) -> bool:
        return self is TokenKind.LITERAL

    @property
    def is_optional(self) -> bool:
        return self in _OPTIONAL_KINDS

    @property
    def is_digit(self) -> bool:
        return self in (TokenKind.REQUIRED_DIGIT, TokenKind.OPTIONAL_DIGIT)


_OPTIONAL_KINDS = frozenset(
    {
        TokenKind.OPTIONAL_DIGIT,
        TokenKind.OPTIONAL_LETTER,
        TokenKind.OPTIONAL_LETTER_UPPER,
        TokenKind.OPTIONAL_ANY,
    }
)


PATTERN_KINDS: Mapping[str, TokenKind] = MappingProxyType(
    {
        "0": TokenKind.REQUIRED_DIGIT,
        "9": TokenKind.OPTIONAL_DIGIT,
        "A": TokenKind.REQUIRED_LETTER,
        "a": TokenKind.OPTIONAL_LETTER,
        "L": TokenKind.REQUIRED_LETTER_UPPER,
        "?": TokenKind.OPTIONAL_LETTER_UPPER,
        "&": TokenKind.REQUIRED_ANY,
        "C": TokenKind.OPTIONAL_ANY,
    }
)


@dataclass(frozen=True)
class MaskToken:
    """One position of a compiled pattern."""

    kind: TokenKind
    character: str

    @property
    def is_literal(self) -> bool:
        return self.kind.is_literal

    @property
    def is_optional(self) -> bool:
        return self.kind.is_optional


@dataclass(frozen=True)
class CompiledMask:
    """Token sequence plus the prompt glyph used for unfilled slots.

    Token order defines both the display order and, for input tokens, the
    order in which raw characters fill the slots.
    """

    tokens: Tuple[MaskToken, ...] = ()
    prompt_char: str = DEFAULT_PROMPT_CHAR
    pattern: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def input_tokens(self) -> Tuple[MaskToken, ...]:
        return tuple(token for token in self.tokens if not token.is_literal)

    def token_at_raw_index(self, raw_index: int) -> Optional[MaskToken]:
        """Return the input token that the ``raw_index``-th raw character fills."""

        if raw_index < 0:
            return None
        slots = self.input_tokens
        if raw_index >= len(slots):
            return None
        return slots[raw_index]


def _check_prompt_char(prompt_char: str) -> str:
    if not isinstance(prompt_char, str) or len(prompt_char) != 1:
        raise MaskPatternError(
            f"prompt character must be a single character, received {prompt_char!r}"
        )
    return prompt_char


def compile_mask(
    pattern: Optional[str], prompt_char: str = DEFAULT_PROMPT_CHAR
) -> CompiledMask:
    """Scan ``pattern`` left to right and return its :class:`CompiledMask`."""

    prompt = _check_prompt_char(prompt_char)
    text = pattern or ""

    tokens: list[MaskToken] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char == ESCAPE_CHAR and index + 1 < len(text):
            tokens.append(MaskToken(TokenKind.LITERAL, text[index + 1]))
            index += 2
            continue
        tokens.append(MaskToken(PATTERN_KINDS.get(char, TokenKind.LITERAL), char))
        index += 1

    return CompiledMask(tokens=tuple(tokens), prompt_char=prompt, pattern=text)


__all__ = [
    "CompiledMask",
    "DEFAULT_PROMPT_CHAR",
    "MaskPatternError",
    "MaskToken",
    "PATTERN_KINDS",
    "TokenKind",
    "compile_mask",
]
