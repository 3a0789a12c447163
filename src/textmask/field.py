"""Headless model of a masked text-entry control.

:class:`MaskedField` owns the state a widget would bind to (the raw value,
focus, validation errors) and routes edits through the mask engine.  Drawing
the field and talking to an input method stay with the host toolkit, which
calls :meth:`MaskedField.apply_edit` on every change notification and writes
:attr:`MaskedField.published_display` back into its text box.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from .literals import insert_literals, remove_literals
from .reconcile import ReconciliationResult, reconcile_input
from .tokens import DEFAULT_PROMPT_CHAR, CompiledMask, compile_mask
from .transducer import extract_raw, format_raw, is_complete, trim_to_capacity

TextChangedCallback = Callable[[str, str], None]
CompletedCallback = Callable[[str], None]
ValidationChangedCallback = Callable[[bool], None]

DEFAULT_REQUIRED_ERROR = "This field is required."
INCOMPLETE_ERROR = "Please complete the required format."


class KeyboardKind(Enum):
    """Soft keyboard layout a host should request for the field."""

    DEFAULT = auto()
    NUMERIC = auto()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :meth:`MaskedField.validate`."""

    errors: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class _Subscribers:
    text_changed: List[TextChangedCallback] = field(default_factory=list)
    completed: List[CompletedCallback] = field(default_factory=list)
    validation_changed: List[ValidationChangedCallback] = field(default_factory=list)


class MaskedField:
    """Raw value, focus and validation state for one masked entry."""

    def __init__(
        self,
        pattern: Optional[str] = None,
        *,
        prompt_char: str = DEFAULT_PROMPT_CHAR,
        include_literals: bool = False,
        required: bool = False,
        required_error_message: str = DEFAULT_REQUIRED_ERROR,
    ) -> None:
        self._mask = compile_mask(pattern, prompt_char)
        self.include_literals = include_literals
        self.required = required
        self.required_error_message = required_error_message
        self.focused = False
        self._raw = ""
        self._errors: Tuple[str, ...] = ()
        self._published = ""
        self._subscribers = _Subscribers()

    # Configuration -------------------------------------------------

    @property
    def mask(self) -> CompiledMask:
        return self._mask

    @property
    def pattern(self) -> str:
        return self._mask.pattern

    @pattern.setter
    def pattern(self, value: Optional[str]) -> None:
        self._mask = compile_mask(value, self._mask.prompt_char)
        # Slots may have changed kind; keep only what the new mask accepts.
        rendered = format_raw(self._mask, self._raw)
        self._commit(trim_to_capacity(self._mask, extract_raw(self._mask, rendered)))
        self._publish()

    @property
    def prompt_char(self) -> str:
        return self._mask.prompt_char

    @prompt_char.setter
    def prompt_char(self, value: str) -> None:
        self._mask = compile_mask(self._mask.pattern, value)
        self._publish()

    @property
    def keyboard(self) -> KeyboardKind:
        slots = self._mask.input_tokens
        if not slots:
            return KeyboardKind.DEFAULT
        if all(token.kind.is_digit for token in slots):
            return KeyboardKind.NUMERIC
        return KeyboardKind.DEFAULT

    # Values -------------------------------------------------

    @property
    def raw_text(self) -> str:
        return self._raw

    @property
    def text(self) -> str:
        """Bound value; carries the mask literals when ``include_literals`` is set."""

        if self.include_literals:
            return insert_literals(self._mask, self._raw)
        return self._raw

    @text.setter
    def text(self, value: Optional[str]) -> None:
        incoming = value or ""
        if self.include_literals:
            incoming = remove_literals(self._mask, incoming)
        raw = trim_to_capacity(self._mask, extract_raw(self._mask, incoming))
        self._commit(raw)
        self._publish()

    @property
    def masked_text(self) -> str:
        return format_raw(self._mask, self._raw, show_optional_prompts=False)

    @property
    def display_text(self) -> str:
        """Text the host should show; optional slots are revealed while focused."""

        if self._mask.is_empty:
            return self._raw
        return format_raw(self._mask, self._raw, show_optional_prompts=self.focused)

    @property
    def published_display(self) -> str:
        """Display text most recently handed to the host text box."""

        return self._published

    @property
    def is_complete(self) -> bool:
        return is_complete(self._mask, self._raw)

    # Editing -------------------------------------------------

    def apply_edit(
        self, old_display: Optional[str], new_display: Optional[str]
    ) -> ReconciliationResult:
        """Reconcile a change notification from the host text box."""

        result = reconcile_input(
            self._mask,
            old_display,
            new_display,
            self._published,
            self._raw,
            show_optional_prompts=self.focused,
        )
        self._commit(result.raw_text)
        self._published = result.display_text
        return result

    def clear(self) -> None:
        self.text = None

    def focus(self) -> None:
        self.focused = True
        self._publish()

    def blur(self) -> ValidationResult:
        self.focused = False
        self._publish()
        return self.validate()

    def submit(self) -> bool:
        """Fire completion callbacks when every required slot is filled."""

        if not self.is_complete:
            return False
        for callback in list(self._subscribers.completed):
            callback(self.text)
        return True

    # Validation -------------------------------------------------

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def validation_errors(self) -> Tuple[str, ...]:
        return self._errors

    def validate(self) -> ValidationResult:
        was_valid = self.is_valid
        errors: List[str] = []
        if self.required and not self._raw:
            errors.append(self.required_error_message)
        elif self._raw and not self.is_complete:
            errors.append(INCOMPLETE_ERROR)
        self._errors = tuple(errors)

        if was_valid != self.is_valid:
            for callback in list(self._subscribers.validation_changed):
                callback(self.is_valid)
        return ValidationResult(errors=self._errors)

    # Subscriptions -------------------------------------------------

    def subscribe_text_changed(self, callback: TextChangedCallback) -> None:
        self._subscribers.text_changed.append(callback)

    def subscribe_completed(self, callback: CompletedCallback) -> None:
        self._subscribers.completed.append(callback)

    def subscribe_validation_changed(self, callback: ValidationChangedCallback) -> None:
        self._subscribers.validation_changed.append(callback)

    # Internal helpers -------------------------------------------------

    def _commit(self, raw: str) -> None:
        old_text = self.text
        self._raw = raw
        new_text = self.text
        if old_text == new_text:
            return
        for callback in list(self._subscribers.text_changed):
            callback(old_text, new_text)
        if new_text and self.is_complete:
            for callback in list(self._subscribers.completed):
                callback(new_text)

    def _publish(self) -> None:
        self._published = self.display_text


__all__ = [
    "DEFAULT_REQUIRED_ERROR",
    "INCOMPLETE_ERROR",
    "KeyboardKind",
    "MaskedField",
    "ValidationResult",
]
