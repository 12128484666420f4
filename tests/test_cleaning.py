"""Tests for shared text helpers."""

import pytest

from whistler_gtfs import cleaning


def test_is_digits_only() -> None:
    """Test digit-only detection."""
    assert cleaning.is_digits_only("20")
    assert not cleaning.is_digits_only("20X")
    assert not cleaning.is_digits_only("")


def test_is_uppercase_only() -> None:
    """Test uppercase detection ignores digits and punctuation."""
    assert cleaning.is_uppercase_only("TO VILLAGE 2")
    assert not cleaning.is_uppercase_only("To Village")
    assert not cleaning.is_uppercase_only("123 - 456")


def test_clean_slashes() -> None:
    """Test slash spacing is normalized."""
    assert cleaning.clean_slashes("Alpine/Emerald") == "Alpine / Emerald"
    assert cleaning.clean_slashes("Alpine  /Emerald") == "Alpine / Emerald"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Village", "Vlg"),
        ("Spring Creek", "Spg Crk"),
        ("Function Junction", "Function Jct"),
        ("Spruce grove", "Spruce Grv"),
        ("Main Street", "Main St"),
        ("Lost Lake", "Lost Lake"),
    ],
)
def test_clean_street_types(text: str, expected: str) -> None:
    """Test street types and place words are abbreviated."""
    assert cleaning.clean_street_types(text) == expected


def test_clean_street_types_whole_words_only() -> None:
    """Test words containing a street type are left alone."""
    assert cleaning.clean_street_types("Villages Roadhouse") == "Villages Roadhouse"


def test_clean_numbers() -> None:
    """Test ordinals are written with digits."""
    assert cleaning.clean_numbers("First Street") == "1st Street"
    assert cleaning.clean_numbers("2ND Ave") == "2nd Ave"


def test_clean_bounds() -> None:
    """Test direction words are abbreviated."""
    assert cleaning.clean_bounds("Eastbound Lorimer") == "EB Lorimer"
    assert cleaning.clean_bounds("Lorimer southbound") == "Lorimer SB"


def test_keep_to_and_remove_via() -> None:
    """Test destinations after `to` are kept and `via` is dropped."""
    assert cleaning.keep_to_and_remove_via("Commuter- To Pemberton") == "Pemberton"
    assert cleaning.keep_to_and_remove_via("Emerald via Nesters") == "Emerald"
    assert cleaning.keep_to_and_remove_via("Toad Hall") == "Toad Hall"


def test_clean_and_at() -> None:
    """Test `and` and `at` replacements."""
    text = cleaning.CLEAN_AND.sub(cleaning.CLEAN_AND_REPLACEMENT, "Main and Lorimer")
    assert text == "Main & Lorimer"
    text = cleaning.CLEAN_AT.sub(cleaning.CLEAN_AT_REPLACEMENT, "Alpine at Rainbow")
    assert text == "Alpine / Rainbow"
    text = cleaning.CLEAN_AT.sub(cleaning.CLEAN_AT_REPLACEMENT, "Village Gate")
    assert text == "Village Gate"


def test_clean_label() -> None:
    """Test label casing and trimming."""
    assert cleaning.clean_label("  upper vlg  -  benchlands - ") == "Upper Vlg - Benchlands"
    assert cleaning.clean_label("tapley's-blueberry") == "Tapley's-Blueberry"
    assert cleaning.clean_label("1st ave") == "1st Ave"
