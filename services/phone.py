"""
Phone-number identity helpers.

Participants find their own submission again by phone number. Numbers are
compared by their "tail": the last N digits after stripping everything that
is not a digit, which makes country-code prefixes such as "+1" transparent.
"""

import re
from typing import List, Optional

from app.config import settings

_NON_DIGITS = re.compile(r"\D")


def digits_only(raw: Optional[str]) -> str:
    return _NON_DIGITS.sub("", raw or "")


def phone_tail(raw: Optional[str], tail_length: Optional[int] = None) -> str:
    """Last ``tail_length`` digits of ``raw`` (fewer if it has fewer digits)."""
    length = tail_length or settings.phone_tail_length
    return digits_only(raw)[-length:]


def eligible_tail(raw: Optional[str]) -> Optional[str]:
    """Tail of a single number, or None when it has too few digits to match on."""
    if len(digits_only(raw)) < settings.phone_min_digits:
        return None
    return phone_tail(raw)


def stored_tails(phone_number: Optional[str]) -> List[str]:
    """Eligible tails of every comma-separated number stored on a submission."""
    tails = []
    for part in (phone_number or "").split(","):
        tail = eligible_tail(part)
        if tail and tail not in tails:
            tails.append(tail)
    return tails


def phone_matches(stored: Optional[str], lookup_tail: str) -> bool:
    return lookup_tail in stored_tails(stored)
