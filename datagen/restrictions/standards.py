"""Check-digit validation for financial instrument identifiers."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

_ISIN_RE = re.compile(r"^[A-Z]{2}[A-Z0-9]{9}[0-9]$")
_SEDOL_RE = re.compile(r"^[B-DF-HJ-NP-TV-Z0-9]{6}[0-9]$")
_CUSIP_RE = re.compile(r"^[A-Z0-9*@#]{8}[0-9]$")

_SEDOL_WEIGHTS = (1, 3, 1, 7, 3, 9)
_CUSIP_SYMBOLS = {"*": 36, "@": 37, "#": 38}


def _luhn_valid(digits: str) -> bool:
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0


def is_valid_isin(value: str) -> bool:
    """ISIN: country code, 9 alphanumerics, Luhn check digit over base-36 expansion."""
    if not _ISIN_RE.match(value):
        return False
    return _luhn_valid("".join(str(int(ch, 36)) for ch in value))


def is_valid_sedol(value: str) -> bool:
    """SEDOL: 6 alphanumerics (no vowels) and a weighted mod-10 check digit."""
    if not _SEDOL_RE.match(value):
        return False
    total = sum(int(ch, 36) * weight for ch, weight in zip(value[:6], _SEDOL_WEIGHTS))
    return (10 - total % 10) % 10 == int(value[6])


def is_valid_cusip(value: str) -> bool:
    """CUSIP: 8 characters and a double-add-double check digit."""
    if not _CUSIP_RE.match(value):
        return False
    total = 0
    for i, ch in enumerate(value[:8]):
        v = _CUSIP_SYMBOLS[ch] if ch in _CUSIP_SYMBOLS else int(ch, 36)
        if i % 2 == 1:
            v *= 2
        total += v // 10 + v % 10
    return (10 - total % 10) % 10 == int(value[8])


class StandardFormat(str, Enum):
    """Standard identifier formats a string field can be required to match."""

    ISIN = "ISIN"
    SEDOL = "SEDOL"
    CUSIP = "CUSIP"

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return _VALIDATORS[self](value)


_VALIDATORS = {
    StandardFormat.ISIN: is_valid_isin,
    StandardFormat.SEDOL: is_valid_sedol,
    StandardFormat.CUSIP: is_valid_cusip,
}
