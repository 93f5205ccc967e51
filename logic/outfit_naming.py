"""Cosmetic names for saved outfits."""

from __future__ import annotations

import random
from collections import Counter
from typing import Iterable, Optional

from models.clothing_item import ClothingItem
from models.outfit import OutfitCandidate
from models.taxonomy import ALL_SEASONS_TAG

NAME_ADJECTIVES = ("Casual", "Classic", "Modern", "Stylish", "Simple", "Chic")


def dominant_color(colors: Iterable[str]) -> Optional[str]:
    """Most frequent color; ties go to the color seen first."""

    counts = Counter(color for color in colors if color)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def common_season(items: Iterable[ClothingItem]) -> Optional[str]:
    counts = Counter(
        season for item in items for season in item.seasons if season != ALL_SEASONS_TAG
    )
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def generate_outfit_name(candidate: OutfitCandidate, rng: Optional[random.Random] = None) -> str:
    """Build a name such as "Classic Summer Look" or "Blue Modern Outfit"."""

    rng = rng or random.Random()
    adjective = rng.choice(NAME_ADJECTIVES)
    core = candidate.core_items

    season = common_season(core)
    if season:
        return f"{adjective} {season.capitalize()} Look"

    color = dominant_color(item.color for item in core)
    if color:
        return f"{color.capitalize()} {adjective} Outfit"

    return f"{adjective} Outfit #{rng.randrange(100)}"


__all__ = ["NAME_ADJECTIVES", "dominant_color", "common_season", "generate_outfit_name"]
