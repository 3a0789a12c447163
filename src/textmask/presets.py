"""Commonly used mask patterns."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

PHONE_US = "(000) 000-0000"
PHONE_INTL = "+00 000 000 0000"
CREDIT_CARD = "0000 0000 0000 0000"
DATE_US = "00/00/0000"
DATE_ISO = "0000-00-00"
TIME_HHMM = "00:00"
TIME_HHMMSS = "00:00:00"
SSN = "000-00-0000"
ZIP_US = "00000-9999"
ZIP_CA = "A0A 0A0"
IPV4 = "099.099.099.099"


PRESETS: Mapping[str, str] = MappingProxyType(
    {
        "phone_us": PHONE_US,
        "phone_intl": PHONE_INTL,
        "credit_card": CREDIT_CARD,
        "date_us": DATE_US,
        "date_iso": DATE_ISO,
        "time_hhmm": TIME_HHMM,
        "time_hhmmss": TIME_HHMMSS,
        "ssn": SSN,
        "zip_us": ZIP_US,
        "zip_ca": ZIP_CA,
        "ipv4": IPV4,
    }
)


def _preset_key(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def resolve_pattern(name_or_pattern: str) -> str:
    """Return the preset pattern called ``name_or_pattern`` or the text unchanged."""

    return PRESETS.get(_preset_key(name_or_pattern), name_or_pattern)


__all__ = [
    "CREDIT_CARD",
    "DATE_ISO",
    "DATE_US",
    "IPV4",
    "PHONE_INTL",
    "PHONE_US",
    "PRESETS",
    "SSN",
    "TIME_HHMM",
    "TIME_HHMMSS",
    "ZIP_CA",
    "ZIP_US",
    "resolve_pattern",
]
