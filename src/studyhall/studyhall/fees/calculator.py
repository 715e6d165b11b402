from __future__ import annotations

from typing import Iterable, Mapping

from ..core.constants import REGISTRATION_FEE
from ..shifts.calendar import normalize_shift_id, price_for

# Negotiated price for every non-empty subset of shifts, keyed by the
# lexically sorted, comma-joined shift ids.
SHIFT_COMBINATIONS: Mapping[str, int] = {
    "morning": 299,
    "noon": 349,
    "evening": 299,
    "night": 299,
    "morning,noon": 549,
    "evening,noon": 549,
    "evening,morning": 549,
    "night,noon": 549,
    "evening,night": 549,
    "morning,night": 549,
    "evening,morning,noon": 749,
    "morning,night,noon": 749,
    "evening,morning,night": 749,
    "evening,night,noon": 749,
    "evening,morning,night,noon": 999,
}


def combination_key(selected_shifts: Iterable[str]) -> str:
    return ",".join(sorted({normalize_shift_id(s) for s in selected_shifts}))


def quote_fee(selected_shifts: Iterable[str], *, table: Mapping[str, int] = SHIFT_COMBINATIONS) -> int:
    """Shift fee for a selection, independent of order and duplicates.

    Unknown combinations fall back to the sum of individual shift prices.
    """

    key = combination_key(selected_shifts)
    if not key:
        return 0

    if key in table:
        return table[key]
    return sum(price_for(s) for s in key.split(","))


def total_admission_amount(selected_shifts: Iterable[str]) -> int:
    """Shift fee plus the one-time registration fee charged on admission."""
    return REGISTRATION_FEE + quote_fee(selected_shifts)
