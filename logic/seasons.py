"""Season appropriateness checks and graded season-match scoring.

Two adjacency tables live here. ``APPROPRIATENESS_ADJACENCY`` backs the hard
filter and per-item penalty; ``SCORING_ADJACENCY`` backs the graded score and
is broader (summer also borrows from fall, fall from summer). They are kept
apart because merging them changes suggestion rankings.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from models.clothing_item import ClothingItem
from models.taxonomy import ALL_SEASONS_TAG, normalize_season

APPROPRIATENESS_ADJACENCY: Dict[str, Tuple[str, ...]] = {
    "spring": ("summer",),
    "summer": ("spring",),
    "fall": ("winter",),
    "winter": ("fall",),
}

SCORING_ADJACENCY: Dict[str, Tuple[str, ...]] = {
    "spring": ("summer",),
    "summer": ("spring", "fall"),
    "fall": ("summer", "winter"),
    "winter": ("fall",),
}

BROAD_SEASON_COUNT = 3
BROAD_MATCH_SCORE = 60
EXACT_MATCH_SCORE = 100
ADJACENT_MATCH_SCORE = 40
MISMATCH_SCORE = 20


def _season_tags(item: ClothingItem) -> List[str]:
    return [normalize_season(tag) for tag in item.seasons]


def is_broadly_wearable(seasons: Iterable[str]) -> bool:
    """Items tagged ``all`` or with three or more seasons fit any season."""

    tags = set(seasons)
    return ALL_SEASONS_TAG in tags or len(tags) >= BROAD_SEASON_COUNT


def is_season_appropriate(item: ClothingItem, target_season: str) -> bool:
    """Return True when the item may be worn in ``target_season``.

    Single-season items also pass for the adjacent season; two-season items
    must list the target explicitly.
    """

    target = normalize_season(target_season)
    tags = _season_tags(item)
    if is_broadly_wearable(tags):
        return True
    if target in tags:
        return True
    if len(tags) == 1:
        return tags[0] in APPROPRIATENESS_ADJACENCY.get(target, ())
    return False


def score_season_match(items: Sequence[ClothingItem], target_season: str) -> float:
    """Average per-item season score: 60 broad, 100 exact, 40 adjacent, 20 otherwise."""

    if not items:
        return 0.0
    target = normalize_season(target_season)
    adjacent = SCORING_ADJACENCY.get(target, ())
    total = 0
    for item in items:
        tags = _season_tags(item)
        if is_broadly_wearable(tags):
            total += BROAD_MATCH_SCORE
        elif target in tags:
            total += EXACT_MATCH_SCORE
        elif any(season in tags for season in adjacent):
            total += ADJACENT_MATCH_SCORE
        else:
            total += MISMATCH_SCORE
    return total / len(items)


__all__ = [
    "APPROPRIATENESS_ADJACENCY",
    "SCORING_ADJACENCY",
    "is_broadly_wearable",
    "is_season_appropriate",
    "score_season_match",
]
