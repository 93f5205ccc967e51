"""Deterministic multi-factor scoring for outfit candidates.

Factors are accumulated in a fixed order (color, season, variety, freshness,
accessory) so the same inputs always produce the same integer score, and the
reasoning list keeps that order before truncation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence

from models.clothing_item import ClothingItem
from models.color_theory import evaluate_color_combination, score_color_combination
from models.outfit import OutfitCandidate, ScoreBreakdown
from logic.seasons import is_season_appropriate, score_season_match

WEIGHTS = {
    "color": 0.45,
    "season": 0.4,
    "variety": 0.15,
}

REASONING_LIMIT = 3
NEUTRAL_SEASON_SCORE = 75
WRONG_SEASON_PENALTY = 30
PERFECT_SEASON_THRESHOLD = 80
SUITABLE_SEASON_THRESHOLD = 50
GOOD_VARIETY_THRESHOLD = 80
FRESH_PICKS_BONUS = 10
REPEAT_PENALTY_PER_ITEM = 8
REPEAT_NOTE_THRESHOLD = 2
ACCESSORY_BONUS = 5
ACCESSORY_HARMONY_BONUS = 5
ACCESSORY_HARMONY_THRESHOLD = 70
ACCESSORY_ANCHOR_COLOR = "black"


@dataclass(frozen=True)
class OutfitScore:
    score: int
    reasoning: List[str]
    breakdown: ScoreBreakdown


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_item_variety(items: Sequence[ClothingItem]) -> int:
    """Reward two or three distinct colors and a complete top/bottom/shoes set."""

    colors = {item.color for item in items}
    types = {item.type for item in items}
    score = 50
    if len(colors) == 2:
        score += 20
    elif len(colors) == 3:
        score += 30
    elif len(colors) >= 4:
        score += 10
    if {"top", "bottom", "shoes"}.issubset(types):
        score += 20
    return min(100, score)


def accessory_harmony_score(top: ClothingItem, bottom: ClothingItem, accessory: ClothingItem) -> int:
    """Worst of the top/accessory and bottom/accessory triples anchored on black."""

    return min(
        score_color_combination(top.color, accessory.color, ACCESSORY_ANCHOR_COLOR),
        score_color_combination(bottom.color, accessory.color, ACCESSORY_ANCHOR_COLOR),
    )


def score_outfit(
    candidate: OutfitCandidate,
    season_preference: Optional[str] = None,
    recent_item_ids: Optional[AbstractSet[str]] = None,
    reasoning_limit: int = REASONING_LIMIT,
) -> OutfitScore:
    """Calculate the 0-100 score, reasoning and breakdown for a candidate."""

    top, bottom, shoes, accessory = candidate.top, candidate.bottom, candidate.shoes, candidate.accessory
    core = [top, bottom, shoes]
    reasoning: List[str] = []
    total = 0.0

    harmony = evaluate_color_combination(top.color, bottom.color, shoes.color)
    color_part = harmony.score * WEIGHTS["color"]
    total += color_part
    reasoning.extend(harmony.reasons)

    penalties = 0.0
    if season_preference:
        season_score = score_season_match(core, season_preference)
        season_part = season_score * WEIGHTS["season"]
        total += season_part

        wrong_season = [item for item in core if not is_season_appropriate(item, season_preference)]
        if wrong_season:
            penalties = -float(WRONG_SEASON_PENALTY * len(wrong_season))
            total -= WRONG_SEASON_PENALTY * len(wrong_season)
            reasoning.append(f"Warning: some items not ideal for {season_preference}")
        elif season_score >= PERFECT_SEASON_THRESHOLD:
            reasoning.append(f"Perfect for {season_preference} weather")
        elif season_score >= SUITABLE_SEASON_THRESHOLD:
            reasoning.append(f"Suitable for {season_preference}")
    else:
        season_part = NEUTRAL_SEASON_SCORE * WEIGHTS["season"]
        total += season_part

    variety_score = score_item_variety(candidate.present_items)
    variety_part = variety_score * WEIGHTS["variety"]
    total += variety_part
    if variety_score >= GOOD_VARIETY_THRESHOLD:
        reasoning.append("Good variety in clothing types")

    freshness_part = 0.0
    if recent_item_ids:
        repeats = sum(1 for item in core if item.item_id in recent_item_ids)
        if repeats == 0:
            freshness_part = float(FRESH_PICKS_BONUS)
            total += FRESH_PICKS_BONUS
            reasoning.append("Fresh picks not worn recently")
        else:
            freshness_part = -float(repeats * REPEAT_PENALTY_PER_ITEM)
            total -= repeats * REPEAT_PENALTY_PER_ITEM
            if repeats >= REPEAT_NOTE_THRESHOLD:
                reasoning.append("Some items repeated from recent outfits")

    accessory_part = 0.0
    if accessory is not None:
        accessory_part = float(ACCESSORY_BONUS)
        total += ACCESSORY_BONUS
        if accessory_harmony_score(top, bottom, accessory) >= ACCESSORY_HARMONY_THRESHOLD:
            accessory_part += ACCESSORY_HARMONY_BONUS
            total += ACCESSORY_HARMONY_BONUS
            reasoning.append(f"{accessory.color} accessory complements the outfit")

    final_score = _round_half_up(_clamp(total))
    breakdown = ScoreBreakdown(
        color=color_part,
        season=season_part,
        style=0.0,
        variety=variety_part,
        freshness=freshness_part,
        accessory=accessory_part,
        penalties=penalties,
        total=final_score,
    )
    return OutfitScore(score=final_score, reasoning=reasoning[: max(0, reasoning_limit)], breakdown=breakdown)


def score_candidate(
    candidate: OutfitCandidate,
    season_preference: Optional[str] = None,
    recent_item_ids: Optional[AbstractSet[str]] = None,
    reasoning_limit: int = REASONING_LIMIT,
) -> OutfitCandidate:
    """Return a scored copy of ``candidate``."""

    result = score_outfit(candidate, season_preference, recent_item_ids, reasoning_limit)
    return candidate.with_score(result.score, result.reasoning, result.breakdown)


__all__ = [
    "WEIGHTS",
    "REASONING_LIMIT",
    "OutfitScore",
    "score_item_variety",
    "accessory_harmony_score",
    "score_outfit",
    "score_candidate",
]
