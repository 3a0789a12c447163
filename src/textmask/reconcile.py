"""Reconcile unreliable soft-keyboard text events into a trusted raw value.

Input-method editors on mobile keyboards do not agree on what a text-change
event carries.  Some report the full formatted field, some only the character
that was just typed, and some an unformatted run of everything typed so far.
:func:`reconcile_input` classifies each event from scratch and derives the raw
value the field should hold next.  It keeps no state between calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .cursor import display_cursor_for_raw_length
from .tokens import CompiledMask
from .transducer import (
    capacity,
    extract_raw,
    format_raw,
    normalize_for_raw_index,
    trim_to_capacity,
)

logger = logging.getLogger(__name__)


class ReconcileRule(Enum):
    """Classification applied to a text-change event."""

    CLEAR = "clear"
    ECHO = "echo"
    DESYNC = "desync"
    SINGLE_CHARACTER = "single_character"
    EXTRACT = "extract"


@dataclass(frozen=True)
class ReconciliationResult:
    """Raw value, display text and caret offset the caller should apply."""

    raw_text: str
    display_text: str
    cursor_position: int
    rule: ReconcileRule

    def __iter__(self) -> Iterator[object]:
        return iter((self.raw_text, self.display_text, self.cursor_position))


def _classify(
    mask: CompiledMask,
    old_display: str,
    new_display: str,
    expected_display: str,
    current_raw: str,
) -> tuple[ReconcileRule, str]:
    if not new_display:
        return ReconcileRule.CLEAR, ""

    if new_display == old_display == expected_display:
        return ReconcileRule.ECHO, current_raw

    if old_display != expected_display:
        return ReconcileRule.DESYNC, extract_raw(mask, new_display)

    if (
        len(new_display) == 1
        and len(old_display) > 1
        and len(extract_raw(mask, new_display)) <= 1
    ):
        # The keyboard reported only the keystroke; treat it as an append.
        # A full field rejects the key; falling through to EXTRACT would replace the value.
        if len(current_raw) >= capacity(mask):
            return ReconcileRule.SINGLE_CHARACTER, current_raw
        accepted = normalize_for_raw_index(mask, new_display, len(current_raw))
        if accepted is None:
            return ReconcileRule.SINGLE_CHARACTER, current_raw
        return ReconcileRule.SINGLE_CHARACTER, current_raw + accepted

    return ReconcileRule.EXTRACT, extract_raw(mask, new_display)


def reconcile_input(
    mask: CompiledMask,
    old_display: Optional[str],
    new_display: Optional[str],
    expected_display: Optional[str],
    current_raw: Optional[str],
    show_optional_prompts: bool = False,
) -> ReconciliationResult:
    """Derive the next ``(raw, display, cursor)`` triple for a text-change event.

    ``old_display`` and ``new_display`` are the texts the input source reported
    before and after the edit, ``expected_display`` is the text this engine
    last wrote into the field and ``current_raw`` is the raw value the field
    holds.  The rules are tried in order and the first match wins:

    1. an empty ``new_display`` clears the field;
    2. an event echoing the text we wrote keeps the raw value;
    3. an ``old_display`` that disagrees with ``expected_display`` means the
       source lost track of the field, so the raw value is re-extracted from
       ``new_display`` alone;
    4. a one-character ``new_display`` replacing a longer field is the typed
       key and is appended to the raw value when its slot accepts it;
    5. anything else is re-extracted from ``new_display``.

    Every input combination yields a valid triple; nothing raises.
    """

    old_text = old_display or ""
    new_text = new_display or ""
    expected_text = expected_display or ""
    raw_text = current_raw or ""

    rule, raw = _classify(mask, old_text, new_text, expected_text, raw_text)
    if rule is ReconcileRule.CLEAR:
        logger.debug("Reconcile CLEAR")
        return ReconciliationResult("", "", 0, rule)

    raw = trim_to_capacity(mask, raw)
    display = format_raw(mask, raw, show_optional_prompts)
    cursor = display_cursor_for_raw_length(mask, len(raw), display)
    logger.debug(f"Reconcile {rule.name}: raw length {len(raw_text)} -> {len(raw)}")
    return ReconciliationResult(raw, display, cursor, rule)


__all__ = ["ReconcileRule", "ReconciliationResult", "reconcile_input"]
