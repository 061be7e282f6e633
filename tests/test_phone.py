"""Tests for phone-tail normalization and matching."""

import pytest

from services.phone import (
    digits_only,
    eligible_tail,
    phone_matches,
    phone_tail,
    stored_tails,
)

STORED = "+1 (202) 555-0147"


def test_digits_only_strips_formatting():
    assert digits_only("+1 (202) 555-0147") == "12025550147"
    assert digits_only(None) == ""


def test_tail_is_last_ten_digits():
    assert phone_tail("+1 (202) 555-0147") == "2025550147"
    assert phone_tail("202-555-0147") == "2025550147"
    assert phone_tail("555-0147") == "5550147"


@pytest.mark.parametrize("lookup", ["2025550147", "12025550147", "+1 202.555.0147"])
def test_country_code_is_transparent(lookup):
    assert phone_matches(STORED, eligible_tail(lookup))


def test_short_suffix_does_not_match():
    tail = eligible_tail("5550147")
    assert tail == "5550147"
    assert not phone_matches(STORED, tail)


@pytest.mark.parametrize("raw", ["", "123", "555-014", None])
def test_fewer_than_seven_digits_is_ineligible(raw):
    assert eligible_tail(raw) is None


def test_stored_numbers_may_be_comma_separated():
    stored = "415-555-0199, 415-555-0123"
    assert stored_tails(stored) == ["4155550199", "4155550123"]
    assert phone_matches(stored, "4155550123")


def test_short_stored_numbers_are_skipped():
    assert stored_tails("123, 202-555-0147") == ["2025550147"]
    assert stored_tails(None) == []
