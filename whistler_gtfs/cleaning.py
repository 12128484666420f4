"""Shared text normalization helpers for route, trip and stop labels."""

import re

DIGITS = re.compile(r"\d+")
SPACES = re.compile(r"\s+")

CLEAN_AND = re.compile(r"(^|\W)and(\W|$)", re.IGNORECASE)
CLEAN_AND_REPLACEMENT = r"\1&\2"

CLEAN_AT = re.compile(r"(^|\W)at(\W|$)", re.IGNORECASE)
CLEAN_AT_REPLACEMENT = r"\1/\2"

CLEAN_PARENTHESE1 = re.compile(r"\(\s+")
CLEAN_PARENTHESE1_REPLACEMENT = "("
CLEAN_PARENTHESE2 = re.compile(r"\s+\)")
CLEAN_PARENTHESE2_REPLACEMENT = ")"

SLASHES = re.compile(r"\s*/\s*")

ENDS_WITH_VIA = re.compile(r"\s+via\s.*$", re.IGNORECASE)
STARTS_WITH_TO = re.compile(r"^(.*\s)?to\s+", re.IGNORECASE)

BOUNDS = re.compile(r"\b(east|west|north|south)bound\b", re.IGNORECASE)

ORDINAL_SUFFIX = re.compile(r"\b(\d+)(st|nd|rd|th)\b", re.IGNORECASE)

# Word initials not preceded by a letter, digit or apostrophe
WORD_START = re.compile(r"(?<![\w'])([a-z])")

# Long forms mapped to their USPS street suffix abbreviation
STREET_TYPES: dict[str, str] = {
    "avenue": "Ave",
    "boulevard": "Blvd",
    "centre": "Ctr",
    "center": "Ctr",
    "circle": "Cir",
    "court": "Ct",
    "creek": "Crk",
    "crescent": "Cres",
    "drive": "Dr",
    "estates": "Ests",
    "gardens": "Gdns",
    "grove": "Grv",
    "heights": "Hts",
    "highway": "Hwy",
    "junction": "Jct",
    "lane": "Ln",
    "mountain": "Mtn",
    "parkway": "Pkwy",
    "place": "Pl",
    "point": "Pt",
    "road": "Rd",
    "spring": "Spg",
    "square": "Sq",
    "street": "St",
    "terrace": "Ter",
    "trail": "Trl",
    "village": "Vlg",
}
STREET_TYPE_WORDS = re.compile(r"\b(" + "|".join(STREET_TYPES) + r")\b", re.IGNORECASE)

ORDINALS: dict[str, str] = {
    "first": "1st",
    "second": "2nd",
    "third": "3rd",
    "fourth": "4th",
    "fifth": "5th",
    "sixth": "6th",
    "seventh": "7th",
    "eighth": "8th",
    "ninth": "9th",
    "tenth": "10th",
}
ORDINAL_WORDS = re.compile(r"\b(" + "|".join(ORDINALS) + r")\b", re.IGNORECASE)


def is_digits_only(text: str) -> bool:
    """True for a non-empty string of ASCII digits."""
    return DIGITS.fullmatch(text or "") is not None


def is_uppercase_only(text: str) -> bool:
    """True when the text has letters and none of them is lowercase."""
    letters = [c for c in text if c.isalpha()]
    return bool(letters) and all(c.isupper() for c in letters)


def clean_slashes(text: str) -> str:
    """Normalize spacing around slashes to `a / b`."""
    return SLASHES.sub(" / ", text)


def clean_street_types(text: str) -> str:
    """Abbreviate street types and common place words."""
    return STREET_TYPE_WORDS.sub(lambda m: STREET_TYPES[m.group(1).lower()], text)


def clean_numbers(text: str) -> str:
    """Turn spelled out ordinals into digits and lowercase ordinal suffixes."""
    text = ORDINAL_WORDS.sub(lambda m: ORDINALS[m.group(1).lower()], text)
    return ORDINAL_SUFFIX.sub(lambda m: m.group(1) + m.group(2).lower(), text)


def clean_bounds(text: str) -> str:
    """Abbreviate `Eastbound` style direction words to `EB`."""
    return BOUNDS.sub(lambda m: m.group(1)[0].upper() + "B", text)


def keep_to_and_remove_via(text: str) -> str:
    """
    Keep the destination of `X to Y` and drop a trailing `via ...`.

    Only the text after the last ` to ` is kept.
    """
    text = ENDS_WITH_VIA.sub("", text)
    return STARTS_WITH_TO.sub("", text)


def clean_label(label: str) -> str:
    """Collapse whitespace, trim stray separators and capitalize each word."""
    label = SPACES.sub(" ", label).strip(" -")
    return WORD_START.sub(lambda m: m.group(1).upper(), label)
