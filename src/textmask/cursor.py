"""Map raw-value offsets onto caret positions inside rendered display text."""
from __future__ import annotations

from .tokens import CompiledMask


def display_cursor_for_raw_length(
    mask: CompiledMask, raw_length: int, display: str
) -> int:
    """Return the display offset just past the ``raw_length``-th filled slot.

    Interleaved literals are stepped over, so the caret lands on the next
    input slot rather than in front of a separator.  The result always lies
    within ``[0, len(display)]``.
    """

    display_length = len(display or "")
    if mask.is_empty:
        return max(0, min(raw_length, display_length))

    target = max(0, raw_length)
    filled = 0
    for display_index, token in enumerate(mask.tokens):
        if display_index >= display_length:
            break
        if token.is_literal:
            continue
        if filled == target:
            return display_index
        filled += 1
    return display_length


__all__ = ["display_cursor_for_raw_length"]
