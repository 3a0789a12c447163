"""Batch helpers that add or strip mask literals without slot validation."""
from __future__ import annotations

from typing import Optional

from .tokens import CompiledMask


def insert_literals(mask: CompiledMask, raw: Optional[str]) -> str:
    """Interleave the mask literals with ``raw``.

    ``"5551234567"`` becomes ``"(555) 123-4567"`` for the US phone mask.  A
    literal is written only while raw characters remain, so ``"555"`` yields
    ``"(555"`` rather than a padded template.
    """

    text = raw or ""
    if mask.is_empty or not text:
        return text

    output: list[str] = []
    raw_index = 0
    for token in mask.tokens:
        if raw_index >= len(text):
            break
        if token.is_literal:
            output.append(token.character)
            continue
        output.append(text[raw_index])
        raw_index += 1
    return "".join(output)


def remove_literals(mask: CompiledMask, display: Optional[str]) -> str:
    """Strip the literals that :func:`insert_literals` added."""

    text = display or ""
    if mask.is_empty or not text:
        return text

    output: list[str] = []
    char_index = 0
    for token in mask.tokens:
        if char_index >= len(text):
            break
        if token.is_literal:
            if text[char_index] == token.character:
                char_index += 1
            continue
        output.append(text[char_index])
        char_index += 1
    return "".join(output)


__all__ = ["insert_literals", "remove_literals"]
