"""Canonical taxonomy definitions for clothing items.

This module centralises the canonical labels for clothing types, the color
palette and season tags. Helper functions keep normalisation consistent across
the scoring rules, the storage layer and the API schemas.
"""

from typing import Dict, Iterable, List


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_")


CLOTHING_TYPES: List[str] = ["top", "bottom", "dress", "outerwear", "shoes", "accessory"]

# Slots of the generated outfit; dress and outerwear never take part.
OUTFIT_ROLES: List[str] = ["top", "bottom", "shoes", "accessory"]
REQUIRED_ROLES: List[str] = ["top", "bottom", "shoes"]

NEUTRAL_COLORS: List[str] = ["black", "white", "gray", "beige", "navy"]
BOLD_COLORS: List[str] = ["red", "blue", "green", "yellow", "orange", "purple", "pink", "brown"]
PALETTE: List[str] = NEUTRAL_COLORS + BOLD_COLORS

SEASONS: List[str] = ["spring", "summer", "fall", "winter"]
ALL_SEASONS_TAG = "all"
SEASON_TAGS: List[str] = SEASONS + [ALL_SEASONS_TAG]

COLOR_MAP = {
    "grey": "gray",
    "navy blue": "navy",
    "off white": "white",
    "cream": "beige",
    "tan": "beige",
    "violet": "purple",
}

SEASON_MAP = {
    "autumn": "fall",
    "all_year": "all",
    "all_season": "all",
    "all_seasons": "all",
}


def validate_type(value: str) -> str:
    """Validate and normalise a clothing type.

    Raises a :class:`ValueError` if the type is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(value)
    if key not in CLOTHING_TYPES:
        raise ValueError(f"Unsupported clothing type '{value}'. Allowed: {CLOTHING_TYPES}")
    return key


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical color name.

    Unknown colors are returned lower-cased rather than rejected so that the
    color rules can treat them as non-matching.
    """

    key = raw_string.strip().lower()
    return COLOR_MAP.get(key, key)


def normalize_season(raw_string: str) -> str:
    """Map a raw season tag to its canonical spelling."""

    key = _normalize_key(raw_string)
    return SEASON_MAP.get(key, key)


def normalise_seasons(values: Iterable[str]) -> List[str]:
    """Normalise and deduplicate season tags, preserving order.

    Tags outside :data:`SEASON_TAGS` are kept verbatim; they never match a
    target season.
    """

    normalised = []
    seen = set()
    for value in values:
        key = normalize_season(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


def normalise_tags(values: Iterable[str]) -> List[str]:
    """Normalise and deduplicate free-form style tags."""

    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "CLOTHING_TYPES",
    "OUTFIT_ROLES",
    "REQUIRED_ROLES",
    "NEUTRAL_COLORS",
    "BOLD_COLORS",
    "PALETTE",
    "SEASONS",
    "SEASON_TAGS",
    "ALL_SEASONS_TAG",
    "validate_type",
    "normalize_color_name",
    "normalize_season",
    "normalise_seasons",
    "normalise_tags",
]
