"""Formatted-input masking: pattern compilation, transduction and reconciliation."""
from __future__ import annotations

from .cursor import display_cursor_for_raw_length
from .field import KeyboardKind, MaskedField, ValidationResult
from .literals import insert_literals, remove_literals
from .mask_config import FieldSpec, MaskConfig, MaskConfigError, load_mask_config
from .presets import PRESETS, resolve_pattern
from .reconcile import ReconcileRule, ReconciliationResult, reconcile_input
from .tokens import (
    DEFAULT_PROMPT_CHAR,
    CompiledMask,
    MaskPatternError,
    MaskToken,
    TokenKind,
    compile_mask,
)
from .transducer import (
    UNBOUNDED,
    capacity,
    extract_raw,
    format_raw,
    is_complete,
    normalize_for_raw_index,
    trim_to_capacity,
    validate_char,
)

__all__ = [
    "CompiledMask",
    "DEFAULT_PROMPT_CHAR",
    "FieldSpec",
    "KeyboardKind",
    "MaskConfig",
    "MaskConfigError",
    "MaskPatternError",
    "MaskToken",
    "MaskedField",
    "PRESETS",
    "ReconcileRule",
    "ReconciliationResult",
    "TokenKind",
    "UNBOUNDED",
    "ValidationResult",
    "capacity",
    "compile_mask",
    "display_cursor_for_raw_length",
    "extract_raw",
    "format_raw",
    "insert_literals",
    "is_complete",
    "load_mask_config",
    "normalize_for_raw_index",
    "reconcile_input",
    "remove_literals",
    "resolve_pattern",
    "trim_to_capacity",
    "validate_char",
]
