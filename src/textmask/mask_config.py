"""Load masked-field definitions from TOML files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import tomllib

from .field import DEFAULT_REQUIRED_ERROR, MaskedField
from .presets import resolve_pattern
from .tokens import DEFAULT_PROMPT_CHAR

logger = logging.getLogger(__name__)


class MaskConfigError(ValueError):
    """Raised when a mask configuration file fails validation."""


@dataclass(frozen=True)
class FieldSpec:
    """Configured masked field."""

    name: str
    pattern: str
    prompt_char: str = DEFAULT_PROMPT_CHAR
    required: bool = False
    include_literals: bool = False
    required_error_message: str = DEFAULT_REQUIRED_ERROR

    def build(self) -> MaskedField:
        """Return a fresh :class:`MaskedField` configured from this entry."""

        return MaskedField(
            self.pattern,
            prompt_char=self.prompt_char,
            include_literals=self.include_literals,
            required=self.required,
            required_error_message=self.required_error_message,
        )


@dataclass(frozen=True)
class MaskConfig:
    """Field definitions keyed by name."""

    prompt_char: str
    fields: Dict[str, FieldSpec]

    def __post_init__(self) -> None:  # pragma: no cover - dataclass internals
        object.__setattr__(self, "fields", dict(self.fields))

    def require_field(self, name: str) -> FieldSpec:
        """Return the ``FieldSpec`` called ``name`` or raise a ``KeyError``."""

        spec = self.fields.get(name)
        if spec is None:
            raise KeyError(f"field {name!r} is not configured")
        return spec


def load_mask_config(config_path: Path) -> MaskConfig:
    """Parse and validate the mask configuration at ``config_path``."""

    with config_path.open("rb") as stream:
        raw_data = tomllib.load(stream)

    section = _parse_mask_section(raw_data)
    prompt_char = _coerce_prompt_char(
        section.get("prompt_char", DEFAULT_PROMPT_CHAR), where="[mask]"
    )
    fields = _parse_fields(section.get("fields", []), default_prompt=prompt_char)

    logger.debug(f"Loaded {len(fields)} mask field(s) from {config_path}")
    return MaskConfig(prompt_char=prompt_char, fields=fields)


def _parse_mask_section(data: Mapping[str, Any]) -> Mapping[str, Any]:
    section = data.get("mask")
    if section is None:
        raise MaskConfigError("mask configuration requires a [mask] table")
    if not isinstance(section, Mapping):
        raise MaskConfigError("[mask] section must be a mapping")
    return section


def _parse_fields(entries: Any, *, default_prompt: str) -> Dict[str, FieldSpec]:
    if entries is None:
        return {}
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
        raise MaskConfigError("[[mask.fields]] must be an array of tables")

    resolved: Dict[str, FieldSpec] = {}
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            raise MaskConfigError(
                f"field entry #{index} must be a mapping, received {type(entry)!r}"
            )
        name = _coerce_name(entry.get("name"), index=index)
        if name in resolved:
            raise MaskConfigError(f"field {name!r} defined multiple times")

        raw_pattern = entry.get("pattern")
        if not isinstance(raw_pattern, str) or not raw_pattern:
            raise MaskConfigError(f"field {name!r} must define a non-empty pattern")

        prompt_char = _coerce_prompt_char(
            entry.get("prompt_char", default_prompt), where=f"field {name!r}"
        )
        message = entry.get("required_error_message", DEFAULT_REQUIRED_ERROR)
        if not isinstance(message, str):
            raise MaskConfigError(f"field {name!r} required_error_message must be text")

        resolved[name] = FieldSpec(
            name=name,
            pattern=resolve_pattern(raw_pattern),
            prompt_char=prompt_char,
            required=_coerce_flag(entry, "required", name=name),
            include_literals=_coerce_flag(entry, "include_literals", name=name),
            required_error_message=message,
        )
    return resolved


def _coerce_name(raw_name: Any, *, index: int) -> str:
    if raw_name is None:
        raise MaskConfigError(f"field entry #{index} must include a name")
    if not isinstance(raw_name, str) or not raw_name.strip():
        raise MaskConfigError(f"field entry #{index} name must be non-empty text")
    return raw_name.strip()


def _coerce_flag(entry: Mapping[str, Any], key: str, *, name: str) -> bool:
    value = entry.get(key, False)
    if not isinstance(value, bool):
        raise MaskConfigError(f"field {name!r} {key} flag must be a boolean")
    return value


def _coerce_prompt_char(raw_prompt: Any, *, where: str) -> str:
    if not isinstance(raw_prompt, str) or len(raw_prompt) != 1:
        raise MaskConfigError(
            f"{where} prompt_char must be a single character, received {raw_prompt!r}"
        )
    return raw_prompt


__all__ = [
    "FieldSpec",
    "MaskConfig",
    "MaskConfigError",
    "load_mask_config",
]
