from __future__ import annotations

import pytest

from textmask.presets import PHONE_US, PRESETS, ZIP_CA, resolve_pattern
from textmask.tokens import compile_mask
from textmask.transducer import capacity


@pytest.mark.parametrize("name", ["phone_us", "PHONE-US", " Phone_US "])
def test_resolve_pattern_normalises_preset_names(name: str) -> None:
    assert resolve_pattern(name) == PHONE_US


def test_resolve_pattern_passes_unknown_text_through() -> None:
    assert resolve_pattern("00-00") == "00-00"
    assert resolve_pattern("zip_ca") == ZIP_CA


@pytest.mark.parametrize(
    "name, expected_capacity",
    [("phone_us", 10), ("ssn", 9), ("credit_card", 16), ("ipv4", 12), ("time_hhmm", 4)],
)
def test_preset_capacities(name: str, expected_capacity: int) -> None:
    assert capacity(compile_mask(PRESETS[name])) == expected_capacity


def test_presets_are_read_only() -> None:
    with pytest.raises(TypeError):
        PRESETS["custom"] = "000"  # type: ignore[index]
